import math

import pytest

from mazetrace.algorithms.astar import (
    GRID_SIZE,
    AStarParams,
    GridAStar,
    find_optimal_path,
)
from mazetrace.geometry import CURSOR_RADIUS, dist, path_collides, path_length
from mazetrace.models import Level, LevelSize, Point, Rect, StartZone
from mazetrace.tracing import MoveOutcome, classify_move


def octile(dx: float, dy: float) -> float:
    dx, dy = abs(dx), abs(dy)
    return math.sqrt(2) * min(dx, dy) + abs(dx - dy)


def assert_grid_steps(path, grid=GRID_SIZE):
    for a, b in zip(path, path[1:]):
        dx, dy = b.x - a.x, b.y - a.y
        assert (dx, dy) != (0, 0)
        assert abs(dx) in (0, grid) and abs(dy) in (0, grid)


def test_open_field_path_approximates_straight_line(open_level):
    path = find_optimal_path(open_level)

    assert path
    assert path[0] == Point(50, 50)
    assert dist(path[-1], Point(750, 550)) < 2 * GRID_SIZE
    assert_grid_steps(path)

    length = path_length(path)
    straight = math.hypot(700, 500)
    assert straight == pytest.approx(860.23, abs=0.01)
    assert straight - 2 * GRID_SIZE <= length <= octile(700, 500) + 1e-6


def test_result_cost_is_in_grid_steps(open_level):
    result = GridAStar(open_level).plan()

    assert result.found
    assert result.cost * GRID_SIZE == pytest.approx(path_length(result.path))
    assert result.iters >= result.expanded > 0
    assert result.cpu_time >= 0


def test_sealed_level_returns_empty_path(sealed_level):
    result = GridAStar(sealed_level).plan()

    assert result.path == []
    assert not result.found
    assert result.cost == float("inf")
    assert find_optimal_path(sealed_level) == []


def test_vertical_barrier_returns_empty_path():
    level = Level(
        size=LevelSize(300, 200),
        start=StartZone(30, 100, 15),
        end=Rect(250, 90, 20, 20),
        walls=(Rect(140, -50, 20, 300),),
    )
    assert find_optimal_path(level) == []


def test_path_routes_around_walls(switchback_level):
    path = find_optimal_path(switchback_level)

    assert path
    assert path[0] == Point(60, 300)
    assert not path_collides(path, switchback_level.walls, CURSOR_RADIUS)
    assert_grid_steps(path)
    # Has to dip below the first wall and climb over the second
    assert max(p.y for p in path) > 406
    assert min(p.y for p in path) < 194


def test_found_path_passes_live_collision_check(switchback_level):
    path = find_optimal_path(switchback_level)

    for prev, current in zip(path, path[1:]):
        outcome = classify_move(switchback_level, prev, current)
        assert outcome not in (MoveOutcome.WALL_HIT, MoveOutcome.OUT_OF_BOUNDS)


def test_path_stays_in_field(switchback_level):
    path = find_optimal_path(switchback_level)
    for p in path:
        assert 0 <= p.x <= 800 and 0 <= p.y <= 600


def test_iteration_cap_gives_empty_path(open_level):
    result = GridAStar(open_level, AStarParams(max_iters=5)).plan()

    assert result.path == []
    assert result.iters == 5


def test_start_next_to_goal_returns_single_point():
    level = Level(
        size=LevelSize(200, 200),
        start=StartZone(100, 100, 10),
        end=Rect(105, 105, 10, 10),
    )
    path = find_optimal_path(level)

    assert path == [Point(100, 100)]
    assert path_length(path) == 0.0


def test_start_and_goal_are_quantized_down():
    level = Level(
        size=LevelSize(400, 400),
        start=StartZone(57, 43, 10),
        end=Rect(309, 301, 20, 20),
    )
    search = GridAStar(level)
    path = search.plan().path

    assert path[0] == Point(50, 40)
    assert search.goal_pos == Point(300, 300)


def test_walls_outside_field_are_harmless(open_level):
    far_away = Level(
        size=open_level.size,
        start=open_level.start,
        end=open_level.end,
        walls=(Rect(-200, -200, 50, 50), Rect(900, 700, 100, 100)),
    )
    assert find_optimal_path(far_away) == find_optimal_path(open_level)


def test_repeated_calls_are_deterministic(switchback_level):
    first = find_optimal_path(switchback_level)
    second = find_optimal_path(switchback_level)
    assert first == second


def test_coarser_grid(open_level):
    params = AStarParams(grid_size=20)
    path = find_optimal_path(open_level, params)

    assert path
    assert_grid_steps(path, grid=20)
    assert dist(path[-1], Point(740, 540)) < 40


def test_zero_clearance_fits_narrow_gap():
    # 10-unit gap between two walls: too narrow once walls grow by 6
    level = Level(
        size=LevelSize(200, 200),
        start=StartZone(20, 100, 10),
        end=Rect(170, 90, 20, 20),
        walls=(Rect(95, -10, 10, 105), Rect(95, 105, 10, 105)),
    )
    assert find_optimal_path(level) == []
    assert find_optimal_path(level, AStarParams(clearance=0))


def test_ties_go_to_first_inserted_node():
    # Block sits on the row between start and goal, so the detours above and
    # below cost the same. The upper neighbour is generated first and wins.
    level = Level(
        size=LevelSize(60, 60),
        start=StartZone(10, 30, 5),
        end=Rect(50, 30, 5, 5),
        walls=(Rect(15, 25, 20, 10),),
    )
    path = find_optimal_path(level, AStarParams(clearance=0))

    assert path[:3] == [Point(10, 30), Point(20, 20), Point(30, 20)]
    assert len(path) == 4
    assert path[3] in (Point(40, 20), Point(40, 30))


def test_open_node_is_improved_in_place():
    # (20, 0) is first reached diagonally from (10, 10) at cost 2*sqrt(2),
    # then improved through (10, 0) at cost 2. A zero goal radius keeps the
    # search running until the field is exhausted.
    level = Level(
        size=LevelSize(40, 40),
        start=StartZone(0, 0, 5),
        end=Rect(30, 30, 5, 5),
    )
    search = GridAStar(level, AStarParams(goal_radius_cells=0))
    result = search.plan()

    assert result.path == []
    assert result.expanded == 25

    by_cell = {node.cell: node for node in search.nodes}
    assert len(by_cell) == len(search.nodes)

    improved = by_cell[(2, 0)]
    assert improved.g == 2.0
    assert search.nodes[improved.parent].cell == (1, 0)
    assert search.nodes[search.nodes[improved.parent].parent].cell == (0, 0)

    mirrored = by_cell[(0, 2)]
    assert mirrored.g == 2.0
    assert search.nodes[mirrored.parent].cell == (0, 1)


def test_search_may_run_along_field_edge():
    # Inflated wall leaves only the bottom edge row (y == height) open
    level = Level(
        size=LevelSize(100, 20),
        start=StartZone(10, 10, 5),
        end=Rect(80, 10, 10, 10),
        walls=(Rect(40, -10, 10, 20),),
    )
    path = find_optimal_path(level)

    assert path
    assert max(p.y for p in path) == 20
    assert all(0 <= p.x <= 100 and 0 <= p.y <= 20 for p in path)
    assert not path_collides(path, level.walls, CURSOR_RADIUS)
