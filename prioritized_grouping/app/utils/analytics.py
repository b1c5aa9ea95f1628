"""Analytics functions for grouping results."""

import pandas as pd
import streamlit as st


@st.cache_data
def calculate_cost_level_counts(
    evaluation: dict[str, list[float]], cost_scale: list[float]
) -> pd.DataFrame:
    """Count how many solved subjects of each group sit at each cost level."""
    rows = [
        (group, level, sum(1 for c in costs if c == level))
        for group, costs in evaluation.items()
        for level in cost_scale
    ]
    return pd.DataFrame(rows, columns=["Group", "Cost", "Count"])


@st.cache_data
def calculate_overall_cost_distribution(
    evaluation: dict[str, list[float]], cost_scale: list[float]
) -> pd.DataFrame:
    """Count solved subjects per cost level across all groups."""
    all_costs = [c for costs in evaluation.values() for c in costs]
    return pd.DataFrame(
        [(level, all_costs.count(level)) for level in cost_scale],
        columns=["Cost", "Count"],
    )


@st.cache_data
def get_results_csv(export: pd.DataFrame) -> str:
    """Generate CSV content from the export table."""
    return export.to_csv(index=False)
