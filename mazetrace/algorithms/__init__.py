"""Path search algorithms."""

from .astar import (
    # Parameters
    AStarParams,
    GRID_SIZE,
    MAX_ITERATIONS,
    GOAL_RADIUS_CELLS,

    # Data structures
    SearchNode,
    AStarResult,

    # Search
    GridAStar,
    find_optimal_path,
)

__all__ = [
    "AStarParams",
    "GRID_SIZE",
    "MAX_ITERATIONS",
    "GOAL_RADIUS_CELLS",
    "SearchNode",
    "AStarResult",
    "GridAStar",
    "find_optimal_path",
]
