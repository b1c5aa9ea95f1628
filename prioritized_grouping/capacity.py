"""Group capacity planning."""

import logging
import math
from collections.abc import Sequence
from fractions import Fraction
from numbers import Real

from prioritized_grouping.errors import ConfigurationError
from prioritized_grouping.types import DEFAULT_EXCESS_SPACE

logger = logging.getLogger(__name__)

CapClasses = Real | Sequence[Real] | None


def excess_factor(excess_space: float) -> Fraction:
    """Return ``1 + excess_space / 100`` as an exact fraction."""
    if excess_space < 0:
        raise ConfigurationError(f"excess_space must be >= 0, got {excess_space}")
    # str() keeps 12.5 as 25/2 and 10.1 as 101/10 instead of the binary approximation
    return 1 + Fraction(str(excess_space)) / 100


def _as_whole_number(value: Real, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Real) or value < 0:
        raise ConfigurationError(f"{what} must be a non-negative number, got {value!r}")
    if value != int(value):
        raise ConfigurationError(f"{what} must be a whole number, got {value!r}")
    return int(value)


def _base_capacity(
    num_subjects: int, num_groups: int, cap_classes: CapClasses
) -> list[int]:
    """Resolve ``cap_classes`` into one base capacity per group."""
    if cap_classes is None:
        return [math.ceil(num_subjects / num_groups)] * num_groups

    if isinstance(cap_classes, Real):
        return [_as_whole_number(cap_classes, "cap_classes")] * num_groups

    values = list(cap_classes)
    if len(values) == 1:
        return [_as_whole_number(values[0], "cap_classes")] * num_groups
    if len(values) == num_groups:
        return [_as_whole_number(v, "cap_classes") for v in values]

    raise ConfigurationError(
        "cap_classes has to be either length 1 or same as number of groups "
        f"({num_groups}), got length {len(values)}"
    )


def plan_capacity(
    num_subjects: int,
    num_groups: int,
    cap_classes: CapClasses = None,
    excess_space: float = DEFAULT_EXCESS_SPACE,
) -> list[int]:
    """Compute the planned capacity of every group.

    Parameters:
        num_subjects: Number of subjects in the full input
        num_groups: Number of groups
        cap_classes: None for an equal split, a single capacity for every group,
                     or one capacity per group
        excess_space: Allowed excess fill in percent (default: 20)

    Returns:
        One capacity per group: ``ceil(base * (1 + excess_space / 100))``

    Raises:
        ConfigurationError: On a cap_classes length mismatch or invalid values
    """
    if num_groups < 1:
        raise ConfigurationError("At least one group is required")

    excess = excess_factor(excess_space)
    base = _base_capacity(num_subjects, num_groups, cap_classes)
    capacity = [math.ceil(b * excess) for b in base]

    logger.info(
        "Planned capacities for %d subjects in %d groups (excess %s%%): %s",
        num_subjects,
        num_groups,
        excess_space,
        capacity,
    )
    return capacity
