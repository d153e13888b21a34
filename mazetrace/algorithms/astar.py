import math
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..models import Level, Point
from ..geometry import CURSOR_RADIUS, dist, point_in_bounds, segment_hits_walls


# Grid pitch (world units between neighbouring search cells)
GRID_SIZE = 10.0
MAX_ITERATIONS = 10_000
# Search stops once a node is closer than this many cells to the goal
GOAL_RADIUS_CELLS = 2

Cell = Tuple[int, int]

# (di, dj) in expansion order: up, down, left, right, then the diagonals
NEIGHBOR_OFFSETS: List[Cell] = [
    (0, -1),
    (0, 1),
    (-1, 0),
    (1, 0),
    (-1, -1),
    (1, -1),
    (-1, 1),
    (1, 1),
]


@dataclass
class SearchNode:
    """A grid cell on the search frontier."""
    cell: Cell
    g: float = 0.0  # Cost from start in grid steps
    h: float = 0.0  # Heuristic to goal in grid steps
    f: float = 0.0
    parent: Optional[int] = None  # Index of predecessor in the node arena


@dataclass
class AStarParams:
    grid_size: float = GRID_SIZE
    max_iters: int = MAX_ITERATIONS
    goal_radius_cells: int = GOAL_RADIUS_CELLS
    clearance: float = CURSOR_RADIUS  # Must match the live collision check


@dataclass
class AStarResult:
    path: List[Point]
    cost: float
    iters: int
    expanded: int
    cpu_time: float
    explored: List[Point] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.path)


class GridAStar:
    """A* over the implicit grid laid on a level.

    The open list is kept in insertion order and scanned linearly for the
    minimum ``f``; on ties the earliest-inserted node wins. A node updated
    with a cheaper ``g`` keeps its position in the list.
    """

    def __init__(self, level: Level, params: Optional[AStarParams] = None):
        self.level = level
        self.params = params or AStarParams()
        self.walls = list(level.walls)
        self.nodes: List[SearchNode] = []

        grid = self.params.grid_size
        self.start_cell = self._quantize(level.start.x, level.start.y)
        # Goal is the top-left corner of the end zone
        self.goal_cell = self._quantize(level.end.x, level.end.y)
        self.goal_pos = self._to_point(self.goal_cell)
        self.goal_radius = self.params.goal_radius_cells * grid

    def _quantize(self, x: float, y: float) -> Cell:
        grid = self.params.grid_size
        return (math.floor(x / grid), math.floor(y / grid))

    def _to_point(self, cell: Cell) -> Point:
        grid = self.params.grid_size
        return Point(cell[0] * grid, cell[1] * grid)

    def _heuristic(self, p: Point) -> float:
        # Scaled to grid steps so it shares units with the step costs
        return dist(p, self.goal_pos) / self.params.grid_size

    def _add_node(self, cell: Cell, g: float, h: float, parent_idx: Optional[int]) -> int:
        self.nodes.append(SearchNode(cell=cell, g=g, h=h, f=g + h, parent=parent_idx))
        return len(self.nodes) - 1

    def _reconstruct(self, node_idx: int) -> List[Point]:
        path = []
        curr_idx: Optional[int] = node_idx
        while curr_idx is not None:
            node = self.nodes[curr_idx]
            path.append(self._to_point(node.cell))
            curr_idx = node.parent
        path.reverse()
        return path

    def plan(self) -> AStarResult:
        start_time = time.perf_counter()
        self.nodes = []

        start_idx = self._add_node(self.start_cell, 0.0, 0.0, None)
        open_list: List[int] = [start_idx]
        open_index: Dict[Cell, int] = {self.start_cell: start_idx}
        closed: Set[Cell] = set()
        explored: List[Point] = []

        iters = 0
        while open_list and iters < self.params.max_iters:
            iters += 1

            # First node with the lowest f
            best_pos = 0
            best_f = self.nodes[open_list[0]].f
            for pos in range(1, len(open_list)):
                f = self.nodes[open_list[pos]].f
                if f < best_f:
                    best_f = f
                    best_pos = pos

            current_idx = open_list.pop(best_pos)
            current = self.nodes[current_idx]
            del open_index[current.cell]
            closed.add(current.cell)

            current_pos = self._to_point(current.cell)
            explored.append(current_pos)

            if dist(current_pos, self.goal_pos) < self.goal_radius:
                return AStarResult(
                    path=self._reconstruct(current_idx),
                    cost=current.g,
                    iters=iters,
                    expanded=len(closed),
                    cpu_time=time.perf_counter() - start_time,
                    explored=explored,
                )

            for di, dj in NEIGHBOR_OFFSETS:
                cell = (current.cell[0] + di, current.cell[1] + dj)
                neighbor_pos = self._to_point(cell)

                if not point_in_bounds(neighbor_pos, self.level.size.width, self.level.size.height):
                    continue

                if segment_hits_walls(
                    current_pos, neighbor_pos, self.walls, self.params.clearance
                ):
                    continue

                if cell in closed:
                    continue

                step = math.sqrt(2) if di != 0 and dj != 0 else 1.0
                g = current.g + step
                h = self._heuristic(neighbor_pos)

                existing_idx = open_index.get(cell)
                if existing_idx is None:
                    idx = self._add_node(cell, g, h, current_idx)
                    open_list.append(idx)
                    open_index[cell] = idx
                    continue

                existing = self.nodes[existing_idx]
                if g >= existing.g:
                    continue
                existing.g = g
                existing.f = g + h
                existing.parent = current_idx

        return AStarResult(
            path=[],
            cost=float("inf"),
            iters=iters,
            expanded=len(closed),
            cpu_time=time.perf_counter() - start_time,
            explored=explored,
        )


def find_optimal_path(level: Level, params: Optional[AStarParams] = None) -> List[Point]:
    """Near-shortest walkable path from start to goal, or [] if none found.

    The path runs from the quantized start cell to the first cell within
    ``goal_radius_cells`` of the quantized goal. Running out of candidates
    and hitting the iteration cap both give an empty list.
    """
    return GridAStar(level, params).plan().path
