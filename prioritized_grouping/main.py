"""CLI entry point for prioritized grouping."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from prioritized_grouping.data_loader import load_pre_grouping, read_input
from prioritized_grouping.errors import GroupingError
from prioritized_grouping.grouping import prioritized_grouping
from prioritized_grouping.output import export_results_to_csv, print_grouping_summary
from prioritized_grouping.types import DEFAULT_EXCESS_SPACE, DEFAULT_SEED

app = typer.Typer(
    help="Assign subjects to capacity-limited groups by cost or priority"
)


@app.command()
def main(
    data_file: Annotated[
        Path,
        typer.Argument(
            help="Path to data file (column 1: subject ids, column 2+: cost/priority per group)"
        ),
    ],
    cap_classes: Annotated[
        Optional[list[int]],
        typer.Option(
            "-c",
            "--cap-classes",
            help="Group capacity; give once for all groups or once per group (default: equal split)",
        ),
    ] = None,
    excess_space: Annotated[
        float,
        typer.Option("-e", "--excess-space", help="Allowed excess group fill in percent"),
    ] = DEFAULT_EXCESS_SPACE,
    pre_grouped: Annotated[
        Optional[Path],
        typer.Option(
            "-p",
            "--pre-grouped",
            help="File with pre-grouped subjects (column 1: subject id, column 2: group name or index)",
        ),
    ] = None,
    seed: Annotated[
        int, typer.Option("-s", "--seed", help="Random seed for the solver")
    ] = DEFAULT_SEED,
    missing_cost: Annotated[
        Optional[float],
        typer.Option(
            "--missing-cost", help="Cost for missing values (default: number of groups)"
        ),
    ] = None,
    time_limit: Annotated[
        Optional[float],
        typer.Option("--time-limit", help="Solver time limit in seconds"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("-v", "--verbose", help="Show progress and solver log")
    ] = False,
    output: Annotated[
        Optional[Path], typer.Option("-o", "--output", help="Export groups to CSV")
    ] = None,
) -> None:
    """Run prioritized grouping."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for path in (data_file, pre_grouped):
        if path is not None and not path.exists():
            typer.echo(f"Error: File not found: {path}", err=True)
            raise typer.Exit(1)

    try:
        data = read_input(data_file)
        pre = load_pre_grouping(pre_grouped) if pre_grouped else None
        result = prioritized_grouping(
            data,
            cap_classes=cap_classes or None,
            excess_space=excess_space,
            pre_grouped=pre,
            seed=seed,
            missing_cost=missing_cost,
            verbose=verbose,
            time_limit=time_limit,
        )
    except GroupingError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    print_grouping_summary(result)

    if output:
        export_results_to_csv(result, str(output))
        typer.echo(f"\nResults exported to: {output}")


if __name__ == "__main__":
    app()
