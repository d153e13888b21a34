"""Experiment utilities for running the grid search and scoring user traces."""

import csv
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np

from ..loader import load_level, load_trace
from ..visualization import plot_level
from ..geometry import path_length
from ..scoring import efficiency_score
from ..tracing import TraceStatus, replay_trace
from ..algorithms.astar import AStarParams, GridAStar


@dataclass
class ExperimentResult:
    level_name: str
    n_walls: int
    found: bool
    iterations: int
    expanded: int
    optimal_length: float
    cpu_time: float
    trace_status: str = ""
    user_length: float = 0.0
    score: Optional[int] = None


def trace_path_for(level_path: Path, traces_dir: Optional[Path]) -> Optional[Path]:
    """Recorded trace for a level, stored as ``<level stem>_trace.json``."""
    if traces_dir is None:
        return None
    candidate = traces_dir / f"{level_path.stem}_trace.json"
    return candidate if candidate.exists() else None


def run_experiment(
    level_path: Path,
    params: Optional[AStarParams] = None,
    trace_path: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    save_plots: bool = True,
    verbose: bool = True,
) -> ExperimentResult:
    params = params or AStarParams()

    if verbose:
        print(f"\nProcessing {level_path.name}...")

    level = load_level(level_path)

    if verbose:
        print(f"  Field: {level.size.width:.0f} x {level.size.height:.0f}")
        print(f"  Walls: {len(level.walls)}")
        print(f"  Running A* with grid {params.grid_size}, clearance {params.clearance}...")

    result = GridAStar(level, params).plan()
    optimal_length = path_length(result.path)

    if verbose:
        print(f"  Found: {result.found}")
        print(f"  Iterations: {result.iters}")
        print(f"  Expanded: {result.expanded}")
        print(f"  CPU Time: {result.cpu_time:.3f}s")
        if result.found:
            print(f"  Optimal Length: {optimal_length:.2f}")
        else:
            print("  No path found.")

    user_path = None
    trace_status = ""
    user_length = 0.0
    score = None
    if trace_path is not None:
        trace = replay_trace(level, load_trace(trace_path), params.clearance)
        user_path = trace.path
        trace_status = trace.status.value
        user_length = path_length(trace.path)
        if trace.status is TraceStatus.WON and result.found:
            score = efficiency_score(optimal_length, user_length)
        if verbose:
            print(f"  Trace: {trace_status} (length {user_length:.2f})")
            if score is not None:
                print(f"  Efficiency: {score}%")

    if save_plots and output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

        plot_file = output_dir / f"{level_path.stem}_astar_path.png"
        fig, _ = plot_level(
            level,
            path=result.path,
            user_path=user_path,
            explored=result.explored,
            clearance=params.clearance,
            save_to=plot_file,
            show=False,
        )
        plt.close(fig)
        if verbose:
            print(f"  Saved: {plot_file.name}")

    return ExperimentResult(
        level_name=level_path.name,
        n_walls=len(level.walls),
        found=result.found,
        iterations=result.iters,
        expanded=result.expanded,
        optimal_length=optimal_length,
        cpu_time=result.cpu_time,
        trace_status=trace_status,
        user_length=user_length,
        score=score,
    )


def run_all_experiments(
    levels_dir: Path,
    params: Optional[AStarParams] = None,
    traces_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    save_plots: bool = True,
    verbose: bool = True,
) -> List[ExperimentResult]:
    """Run the grid search on all levels in a directory.

    Args:
        levels_dir: Directory containing ``*.json`` level files.
        params: Search parameters. If None, uses the defaults.
        traces_dir: Directory holding ``<level>_trace.json`` recordings.
        output_dir: Directory to save plots.
        save_plots: Whether to save plots.
        verbose: Whether to print progress.

    Returns:
        List of ExperimentResult for all levels.
    """
    level_files = sorted(p for p in levels_dir.glob("*.json") if not p.stem.endswith("_trace"))

    if verbose:
        print(f"Found {len(level_files)} levels: {[f.stem for f in level_files]}")

    results = []
    for level_file in level_files:
        result = run_experiment(
            level_file,
            params,
            trace_path_for(level_file, traces_dir),
            output_dir,
            save_plots,
            verbose,
        )
        results.append(result)

    if verbose:
        print(f"\n{'='*60}")
        print(f"Completed {len(results)} experiments.")
        unsolved = [r.level_name for r in results if not r.found]
        if unsolved:
            print(f"NO PATH FOUND for: {', '.join(unsolved)}")

    return results


def save_results_csv(
    results: List[ExperimentResult],
    output_path: Path,
) -> None:
    """Save experiment results to CSV file."""
    if not results:
        return

    fieldnames = [
        "level_name", "n_walls", "found", "iterations", "expanded",
        "optimal_length", "cpu_time", "trace_status", "user_length", "score",
    ]

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            writer.writerow(asdict(r))


def print_results_summary(
    results: List[ExperimentResult],
    params: Optional[AStarParams] = None,
) -> None:
    """Print formatted summary table of results."""
    print("\n" + "=" * 90)
    print("A* EXPERIMENT RESULTS SUMMARY")
    print("=" * 90)

    params = params or AStarParams()
    print(f"\nParameters: grid={params.grid_size}, max_iters={params.max_iters}, "
          f"clearance={params.clearance}")
    print()

    header = (f"{'Level':<20} {'Walls':>5} {'Found':>5} {'Iters':>6} {'Expand':>6} "
              f"{'OptLen':>9} {'CPU(s)':>7} {'Trace':>8} {'UserLen':>9} {'Score':>5}")
    print(header)
    print("-" * len(header))

    for r in results:
        score = "-" if r.score is None else str(r.score)
        print(f"{r.level_name:<20} {r.n_walls:>5} {'Yes' if r.found else 'No':>5} "
              f"{r.iterations:>6} {r.expanded:>6} {r.optimal_length:>9.2f} "
              f"{r.cpu_time:>7.3f} {r.trace_status or '-':>8} {r.user_length:>9.2f} {score:>5}")

    print("-" * len(header))
    print(f"\nTotal levels: {len(results)}")
    print(f"Solved: {sum(1 for r in results if r.found)}/{len(results)}")
    if results:
        print(f"Avg CPU time: {np.mean([r.cpu_time for r in results]):.3f}s")
    scores = [r.score for r in results if r.score is not None]
    if scores:
        print(f"Avg efficiency: {np.mean(scores):.1f}%")
