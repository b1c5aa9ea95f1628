"""Reconcile manual pre-grouping with the planned capacities."""

import logging
import math

import pandas as pd
from pandas.api.types import is_numeric_dtype

from prioritized_grouping.cost_matrix import normalize_ids
from prioritized_grouping.errors import ConfigurationError, DataFormatError
from prioritized_grouping.types import PreGrouping

logger = logging.getLogger(__name__)


def resolve_group_references(
    references: pd.Series, group_names: list[str]
) -> list[str]:
    """Translate group references into canonical group names.

    A numeric column is read as 1-based group positions, anything else as
    group names.

    Raises:
        ConfigurationError: If a reference does not match any group
    """
    if is_numeric_dtype(references):
        resolved = []
        for ref in references:
            if (
                pd.isna(ref)
                or not math.isfinite(ref)
                or ref != int(ref)
                or not 1 <= int(ref) <= len(group_names)
            ):
                raise ConfigurationError(
                    f"Pre-grouping refers to group index {ref}, "
                    f"but there are only {len(group_names)} groups"
                )
            resolved.append(group_names[int(ref) - 1])
        return resolved

    known = set(group_names)
    unknown = sorted({str(ref) for ref in references if str(ref) not in known})
    if unknown:
        raise ConfigurationError(
            f"Pre-grouping refers to unknown groups: {unknown}. "
            f"Known groups: {group_names}"
        )
    return [str(ref) for ref in references]


def reconcile_pre_grouping(
    data: pd.DataFrame,
    pre_grouped: pd.DataFrame,
    group_names: list[str],
    capacity: list[int],
) -> PreGrouping:
    """Remove pre-grouped subjects from the working set and their seats from capacity.

    Parameters:
        data: Validated input table (subject ids in the first column)
        pre_grouped: Two columns, subject id and group reference (name or 1-based index)
        group_names: Canonical group names, in cost matrix order
        capacity: Planned capacity per group

    Returns:
        PreGrouping with the reduced table, adjusted capacities and the
        group -> pre-grouped subjects mapping

    Raises:
        DataFormatError: If the pre-grouping table has fewer than two columns
        ConfigurationError: On unknown subjects or groups, subjects listed twice,
                            or a group receiving more pre-grouped subjects than
                            its planned capacity
    """
    if not isinstance(pre_grouped, pd.DataFrame) or pre_grouped.shape[1] < 2:
        raise DataFormatError(
            "Pre-grouping has to be a data frame with a subject id and a group column"
        )

    pre_grouped = pre_grouped.dropna(how="all")
    if pre_grouped.iloc[:, 0].isna().any():
        raise ConfigurationError("Pre-grouped subject identifiers must not be missing")

    subjects = normalize_ids(pre_grouped.iloc[:, 0]).tolist()
    groups = resolve_group_references(pre_grouped.iloc[:, 1], group_names)

    seen: set[str] = set()
    for subject in subjects:
        if subject in seen:
            raise ConfigurationError(f"Subject '{subject}' is pre-grouped more than once")
        seen.add(subject)

    ids = data.iloc[:, 0]
    known = set(ids)
    missing = [s for s in subjects if s not in known]
    if missing:
        raise ConfigurationError(f"Pre-grouped subjects not found in data: {missing}")

    pre_assigned: dict[str, list[str]] = {name: [] for name in group_names}
    for subject, group in zip(subjects, groups):
        pre_assigned[group].append(subject)

    adjusted = [
        cap - len(pre_assigned[name]) for name, cap in zip(group_names, capacity)
    ]
    oversubscribed = [
        f"{name} ({len(pre_assigned[name])} pre-grouped, capacity {cap})"
        for name, cap, left in zip(group_names, capacity, adjusted)
        if left < 0
    ]
    if oversubscribed:
        raise ConfigurationError(
            "Pre-grouping exceeds planned capacity for: "
            + ", ".join(oversubscribed)
            + ". Increase group capacities and/or excess fill."
        )

    remaining = data[~ids.isin(seen)].reset_index(drop=True)
    logger.info(
        "Pre-grouped %d subjects, %d left to assign; adjusted capacities: %s",
        len(subjects),
        len(remaining),
        adjusted,
    )
    return PreGrouping(data=remaining, capacity=adjusted, pre_assigned=pre_assigned)
