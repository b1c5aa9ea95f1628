"""Type definitions for the prioritized grouping pipeline."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

import pandas as pd

DEFAULT_EXCESS_SPACE = 20.0
DEFAULT_SEED = 6293812


class SolverStatus(Enum):
    """Status of the solver result."""

    OPTIMAL = "Optimal"
    FEASIBLE = "Feasible"  # stopped at the time limit with a solution
    INFEASIBLE = "Infeasible"
    UNBOUNDED = "Unbounded"
    NOT_SOLVED = "Not Solved"
    UNDEFINED = "Undefined"


@dataclass(frozen=True)
class AssignmentProgram:
    """A 0/1 assignment program, independent of any solver library.

    Attributes:
        groups: Group names, one per row of ``costs``
        subjects: Subject identifiers, one per column of ``costs``
        costs: groups x subjects cost matrix
        capacities: Maximum number of subjects per group
    """

    groups: tuple[str, ...]
    subjects: tuple[str, ...]
    costs: tuple[tuple[float, ...], ...]
    capacities: tuple[int, ...]

    @property
    def num_groups(self) -> int:
        return len(self.groups)

    @property
    def num_subjects(self) -> int:
        return len(self.subjects)

    def total_cost(self, pairs: list[tuple[int, int]]) -> float:
        """Objective value of an assignment given as (group, subject) index pairs."""
        return float(sum(self.costs[g][s] for g, s in pairs))


@dataclass
class SolverOutcome:
    """Raw binary solution returned by the solver adapter."""

    status: SolverStatus
    pairs: list[tuple[int, int]]  # (group index, subject index) with x = 1
    objective_value: float


@dataclass
class PreGrouping:
    """Working set left after removing pre-grouped subjects."""

    data: pd.DataFrame
    capacity: list[int]
    pre_assigned: dict[str, list[str]]  # group -> [subjects]


def _freeze_groups(groups: Mapping[str, Sequence]) -> Mapping[str, tuple]:
    return MappingProxyType({name: tuple(items) for name, items in groups.items()})


@dataclass(frozen=True)
class GroupingResult:
    """Complete, immutable result of one grouping run.

    Group mappings are read-only views with tuple values, and capacity and
    cost_scale are tuples, whatever containers the result was built from.
    """

    all_grouped: Mapping[str, tuple[str, ...]]  # group -> solved + pre-grouped subjects
    evaluation: Mapping[str, tuple[float, ...]]  # group -> costs of solved subjects
    groupings: Mapping[str, tuple[str, ...]]  # group -> solved subjects
    solution: pd.DataFrame
    capacity: tuple[int, ...]
    excess: float
    pre_grouped: bool
    cost_scale: tuple[float, ...]
    input: pd.DataFrame
    export: pd.DataFrame
    objective_value: float
    pre_assigned: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    solver_status: SolverStatus = SolverStatus.OPTIMAL

    def __post_init__(self):
        for name in ("all_grouped", "evaluation", "groupings", "pre_assigned"):
            object.__setattr__(self, name, _freeze_groups(getattr(self, name)))
        object.__setattr__(self, "capacity", tuple(self.capacity))
        object.__setattr__(self, "cost_scale", tuple(self.cost_scale))

    @property
    def groups(self) -> list[str]:
        return list(self.all_grouped)
