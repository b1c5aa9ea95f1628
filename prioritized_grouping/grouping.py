"""End-to-end prioritized grouping pipeline."""

import logging

import pandas as pd

from prioritized_grouping.capacity import CapClasses, excess_factor, plan_capacity
from prioritized_grouping.cost_matrix import (
    build_cost_matrix,
    group_names,
    validate_input_table,
)
from prioritized_grouping.pre_grouping import reconcile_pre_grouping
from prioritized_grouping.program import build_program
from prioritized_grouping.result import reconstruct_result
from prioritized_grouping.solver import AssignmentSolver
from prioritized_grouping.types import (
    DEFAULT_EXCESS_SPACE,
    DEFAULT_SEED,
    GroupingResult,
)

logger = logging.getLogger(__name__)


def prioritized_grouping(
    data: pd.DataFrame,
    cap_classes: CapClasses = None,
    excess_space: float = DEFAULT_EXCESS_SPACE,
    pre_grouped: pd.DataFrame | None = None,
    seed: int | None = DEFAULT_SEED,
    missing_cost: float | None = None,
    verbose: bool = False,
    time_limit: float | None = None,
) -> GroupingResult:
    """
    Solve grouping based on priorities or costs.

    Every subject is placed in exactly one group, no group exceeds its
    capacity, and the summed cost of all placements is minimal.

    Parameters:
        data: Wide table, first column subject ids, then one cost/priority
              column per group. Missing values mean no stated preference.
        cap_classes: Group capacity. None for equal group sizes, a single
                     value for every group, or one value per group.
        excess_space: Allowed excess group fill in percent (default: 20).
                      Capacities are enlarged by this factor and rounded up.
        pre_grouped: Optional two-column table of subject id and group
                     (group name or 1-based group index)
        seed: Random seed for the solver's internal tie-breaking
        missing_cost: Cost imputed for missing values (default: number of groups)
        verbose: Show the solver log
        time_limit: Optional solver time limit in seconds

    Returns:
        GroupingResult with the final groups, their cost evaluation and an
        export table

    Raises:
        DataFormatError: If the input tables are malformed
        ConfigurationError: If capacities or pre-grouping are inconsistent
        InfeasibleAssignmentError: If the solver finds no solution
    """
    solver = AssignmentSolver(seed=seed, verbose=verbose, time_limit=time_limit)
    table = validate_input_table(data)
    names = group_names(table)

    capacity = plan_capacity(
        num_subjects=len(table),
        num_groups=len(names),
        cap_classes=cap_classes,
        excess_space=excess_space,
    )

    pre_assigned = None
    if pre_grouped is not None:
        reconciled = reconcile_pre_grouping(table, pre_grouped, names, capacity)
        table = reconciled.data
        capacity = reconciled.capacity
        pre_assigned = reconciled.pre_assigned

    cost = build_cost_matrix(table, missing_cost=missing_cost)
    program = build_program(cost, capacity)

    outcome = solver.solve(program)

    return reconstruct_result(
        outcome,
        cost=cost,
        capacity=capacity,
        excess=float(excess_factor(excess_space)),
        data=table,
        pre_assigned=pre_assigned,
    )
