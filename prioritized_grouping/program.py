"""Formulate the capacity-constrained assignment program."""

import logging

import pandas as pd

from prioritized_grouping.errors import ConfigurationError
from prioritized_grouping.types import AssignmentProgram

logger = logging.getLogger(__name__)


def build_program(cost: pd.DataFrame, capacity: list[int]) -> AssignmentProgram:
    """Build the assignment program for a cost matrix and capacity vector.

    Variables are x[g][s] in {0, 1} for every group g and subject s. Each group
    holds at most capacity[g] subjects, each subject sits in exactly one group,
    and the total cost of the chosen pairs is minimized.

    Raises:
        ConfigurationError: If the capacity vector does not match the groups
    """
    if len(capacity) != cost.shape[0]:
        raise ConfigurationError(
            f"Got {len(capacity)} capacities for {cost.shape[0]} groups"
        )
    if cost.isna().any().any():
        raise ConfigurationError("Cost matrix contains missing values")

    program = AssignmentProgram(
        groups=tuple(str(g) for g in cost.index),
        subjects=tuple(str(s) for s in cost.columns),
        costs=tuple(tuple(float(c) for c in row) for row in cost.to_numpy()),
        capacities=tuple(int(c) for c in capacity),
    )
    logger.debug(
        "Assignment program: %d binary variables, %d constraints",
        program.num_groups * program.num_subjects,
        program.num_groups + program.num_subjects,
    )
    return program
