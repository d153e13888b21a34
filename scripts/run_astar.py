import argparse
from pathlib import Path

from mazetrace.loader import load_level, load_trace
from mazetrace.algorithms.astar import AStarParams, GridAStar, GRID_SIZE, MAX_ITERATIONS
from mazetrace.geometry import CURSOR_RADIUS, path_length
from mazetrace.scoring import efficiency_score
from mazetrace.tracing import TraceStatus, replay_trace
from mazetrace.visualization import plot_level

def main():
    parser = argparse.ArgumentParser(description="Run grid A* on a level and score a user trace")
    parser.add_argument("level", type=str, help="Path to level JSON file")
    parser.add_argument("--trace", type=str, default=None, help="Recorded pointer trace (JSON list of points)")
    parser.add_argument("--grid", type=float, default=GRID_SIZE, help="Grid pitch")
    parser.add_argument("--iters", type=int, default=MAX_ITERATIONS, help="Max iterations")
    parser.add_argument("--clearance", type=float, default=CURSOR_RADIUS, help="Wall clearance margin")
    parser.add_argument("--explored", action="store_true", help="Plot expanded grid cells")
    parser.add_argument("--out", type=str, default="astar_result.png", help="Output filename for plot")

    args = parser.parse_args()

    level_path = Path(args.level)
    if not level_path.exists():
        print(f"Error: Level file {level_path} not found.")
        return

    print(f"Loading level from {level_path}...")
    level = load_level(level_path)

    params = AStarParams(
        grid_size=args.grid,
        max_iters=args.iters,
        clearance=args.clearance,
    )

    print(f"Running A* (Output: {args.out})...")
    result = GridAStar(level, params).plan()

    print(f"Planning complete in {result.cpu_time:.4f}s")
    print(f"Iterations: {result.iters}")
    print(f"Expanded cells: {result.expanded}")

    optimal_length = path_length(result.path)
    if result.found:
        print(f"Path found! Length: {optimal_length:.4f}")
        print(f"Path length (nodes): {len(result.path)}")
    else:
        print("No path found.")

    user_path = None
    if args.trace:
        trace = replay_trace(level, load_trace(args.trace), params.clearance)
        user_path = trace.path
        user_length = path_length(trace.path)
        print(f"Trace status: {trace.status.value}")
        print(f"User length: {user_length:.4f}")
        if trace.status is TraceStatus.LOST:
            print(f"Failed at sample {trace.failed_at} ({trace.outcome.value})")
        elif trace.status is TraceStatus.WON and result.found:
            score = efficiency_score(optimal_length, user_length)
            if score is None:
                print("Efficiency: n/a")
            else:
                print(f"Efficiency: {score}%")

    print("Plotting results...")
    plot_level(
        level,
        path=result.path,
        user_path=user_path,
        explored=result.explored if args.explored else None,
        clearance=params.clearance,
        save_to=args.out,
        show=False,
    )
    print(f"Result saved to {args.out}")

if __name__ == "__main__":
    main()
