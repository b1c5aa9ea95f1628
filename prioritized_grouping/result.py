"""Turn the solver's binary solution into a grouping result."""

import logging

import pandas as pd

from prioritized_grouping.types import GroupingResult, SolverOutcome

logger = logging.getLogger(__name__)


def reconstruct_result(
    outcome: SolverOutcome,
    cost: pd.DataFrame,
    capacity: list[int],
    excess: float,
    data: pd.DataFrame,
    pre_assigned: dict[str, list[str]] | None = None,
) -> GroupingResult:
    """
    Map the solved (group, subject) pairs back to named groups.

    Parameters:
        outcome: Solver outcome with (group index, subject index) pairs
        cost: The cost matrix the program was built from
        capacity: Capacities the program was solved with
        excess: Excess fill factor
        data: The input table the cost matrix was built from
        pre_assigned: group -> pre-grouped subjects, if a pre-grouping was used

    Returns:
        GroupingResult bundling the solved and merged groupings, their cost
        evaluation and a flat export table
    """
    group_labels = [str(g) for g in cost.index]
    subject_labels = [str(s) for s in cost.columns]

    solution = pd.DataFrame(
        [
            (g, s, group_labels[g], subject_labels[s], 1)
            for g, s in sorted(outcome.pairs)
        ],
        columns=["i", "j", "group", "subject", "value"],
    )

    groupings: dict[str, list[str]] = {name: [] for name in group_labels}
    evaluation: dict[str, list[float]] = {name: [] for name in group_labels}
    for g, s in sorted(outcome.pairs):
        group, subject = group_labels[g], subject_labels[s]
        groupings[group].append(subject)
        evaluation[group].append(float(cost.iat[g, s]))

    with_pre_grouped = pre_assigned is not None
    pre_assigned = pre_assigned or {}

    # Merge by group name, solved subjects first
    all_grouped = {
        name: groupings[name] + list(pre_assigned.get(name, []))
        for name in group_labels
    }

    export = pd.DataFrame(
        [
            (subject, group)
            for group, subjects in all_grouped.items()
            for subject in subjects
        ],
        columns=["ID", "Group"],
    )

    cost_scale = sorted({float(c) for c in cost.to_numpy().ravel()})

    logger.debug("Reconstructed %d groups, %d subjects", len(all_grouped), len(export))
    return GroupingResult(
        all_grouped=all_grouped,
        evaluation=evaluation,
        groupings=groupings,
        solution=solution,
        capacity=list(capacity),
        excess=float(excess),
        pre_grouped=with_pre_grouped,
        cost_scale=cost_scale,
        input=data,
        export=export,
        objective_value=outcome.objective_value,
        pre_assigned={name: list(pre_assigned.get(name, [])) for name in group_labels},
        solver_status=outcome.status,
    )


def summarize_groups(result: GroupingResult) -> pd.DataFrame:
    """Per-group fill, size and mean cost of the solved subjects.

    fill is the number of solved subjects relative to the capacity the
    program was solved with.
    """
    rows = []
    for (group, costs), cap in zip(result.evaluation.items(), result.capacity):
        n = len(costs)
        rows.append(
            {
                "Group": group,
                "n": n,
                "Capacity": cap,
                "Fill": round(n / cap, 2) if cap > 0 else float("nan"),
                "Mean": round(sum(costs) / n, 2) if n else float("nan"),
                "Pre-grouped": len(result.pre_assigned.get(group, [])),
            }
        )
    return pd.DataFrame(
        rows, columns=["Group", "n", "Capacity", "Fill", "Mean", "Pre-grouped"]
    )
