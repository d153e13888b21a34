"""Main entry point for mazetrace."""
from pathlib import Path

from mazetrace.utils.experiments import (
    print_results_summary,
    run_all_experiments,
    save_results_csv,
)


def main():
    print("mazetrace - Grid A* Path Comparison")
    print("=" * 40)

    base_dir = Path(__file__).parent.parent
    levels_dir = base_dir / "levels"
    traces_dir = base_dir / "traces"
    output_dir = base_dir / "output/results"

    print(f"Running experiments from {levels_dir}...")

    results = run_all_experiments(
        levels_dir=levels_dir,
        traces_dir=traces_dir if traces_dir.is_dir() else None,
        output_dir=output_dir,
    )
    print_results_summary(results)
    if results:
        output_dir.mkdir(parents=True, exist_ok=True)
        save_results_csv(results, output_dir / "summary.csv")

    print("\nAll experiments completed.")


if __name__ == "__main__":
    main()
