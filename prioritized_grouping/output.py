"""Output formatting and export for grouping results."""

import csv
from pathlib import Path

from prioritized_grouping.result import summarize_groups
from prioritized_grouping.types import GroupingResult, SolverStatus


def print_grouping_summary(result: GroupingResult) -> None:
    """Pretty-print grouping results."""
    summary = summarize_groups(result)
    n_subjects = len(result.export)

    print(f"\n=== Grouping: {n_subjects} subjects in {len(summary)} groups ===\n")
    print(f"Total Cost: {result.objective_value:.2f}")
    if result.solver_status != SolverStatus.OPTIMAL:
        print("Warning: solver stopped at its time limit, grouping may not be optimal")
    solved = int(summary["n"].sum())
    if solved:
        print(f"Mean Cost: {result.objective_value / solved:.2f}")
    if result.pre_grouped:
        print(f"Pre-grouped Subjects: {int(summary['Pre-grouped'].sum())}")

    print("\n=== Groups ===")
    for row in summary.itertuples(index=False):
        print(f"{row.Group} (fill={row.Fill};n={row.n};mean={row.Mean})")
        members = result.all_grouped[row.Group]
        if members:
            print(f"  {', '.join(members)}")


def export_results_to_csv(result: GroupingResult, filepath: Path | str) -> None:
    """Export the subject -> group table to CSV."""
    try:
        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["ID", "Group"])
            for row in result.export.itertuples(index=False):
                writer.writerow([row.ID, row.Group])
    except OSError as e:
        raise OSError(f"Failed to write results to '{filepath}': {e}") from e
