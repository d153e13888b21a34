"""mazetrace - wall-avoidance tracing with grid A* path comparison."""

from .loader import load_level, load_trace, parse_level, LevelValidationError, LevelParseError
from .models import Level, LevelSize, Point, Rect, StartZone
from .visualization import plot_level
from .geometry import (
    CURSOR_RADIUS,
    dist,
    point_in_bounds,
    point_in_rect,
    point_in_circle,
    segment_intersects_segment,
    segment_intersects_rect,
    inflate_rect,
    inflate_walls,
    segment_hits_walls,
    path_length,
    path_collides,
)
from .tracing import (
    MoveOutcome,
    TraceStatus,
    TraceResult,
    in_start_zone,
    classify_move,
    replay_trace,
)
from .scoring import efficiency_score, score_paths

# Algorithms
from .algorithms import (
    AStarParams,
    AStarResult,
    GridAStar,
    find_optimal_path,
)

# Utils
from .utils import (
    ExperimentResult,
    run_experiment,
    run_all_experiments,
    save_results_csv,
    print_results_summary,
)
