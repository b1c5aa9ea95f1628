"""Results Dashboard UI component."""

import pandas as pd
import streamlit as st

from prioritized_grouping.app.utils.analytics import (
    calculate_cost_level_counts,
    calculate_overall_cost_distribution,
    get_results_csv,
)
from prioritized_grouping.app.utils.visualizations import (
    create_cost_distribution_chart,
    create_group_cost_chart,
    create_overall_mean_chart,
    group_title,
)
from prioritized_grouping.result import summarize_groups
from prioritized_grouping.types import GroupingResult, SolverStatus


def render_results_dashboard(result: GroupingResult, columns: int = 4) -> None:
    """Render the results dashboard with metrics and detailed tabs."""
    st.header("📈 Results Dashboard")

    summary = summarize_groups(result)
    solved = int(summary["n"].sum())

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Subjects", len(result.export))

    with col2:
        st.metric("Groups", len(summary))

    with col3:
        st.metric("Total Cost", f"{result.objective_value:g}")

    with col4:
        mean = result.objective_value / solved if solved else 0.0
        st.metric("Mean Cost", f"{mean:.2f}")

    if result.solver_status != SolverStatus.OPTIMAL:
        st.warning(
            "The solver stopped at its time limit; this grouping may not be optimal."
        )

    if result.pre_grouped:
        st.caption(
            f"{int(summary['Pre-grouped'].sum())} pre-grouped subjects are not "
            "included in the cost evaluation."
        )

    result_tabs = st.tabs(["Overview", "Group Breakdown", "Groups Table"])

    with result_tabs[0]:
        _render_overview_tab(result, summary)

    with result_tabs[1]:
        _render_group_breakdown_tab(result, summary, columns)

    with result_tabs[2]:
        _render_groups_table_tab(result, summary)

    st.header("📥 Download Results")

    st.download_button(
        label="Download Groups CSV",
        data=get_results_csv(result.export),
        file_name="grouping_results.csv",
        mime="text/csv",
    )


def _render_overview_tab(result: GroupingResult, summary: pd.DataFrame) -> None:
    """Render the overall mean cost and cost distribution charts."""
    col1, col2 = st.columns([2, 1])

    with col1:
        fig = create_overall_mean_chart(summary.dropna(subset=["Mean"]))
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        distribution = calculate_overall_cost_distribution(
            dict(result.evaluation), list(result.cost_scale)
        )
        fig = create_cost_distribution_chart(distribution)
        st.plotly_chart(fig, use_container_width=True)


def _render_group_breakdown_tab(
    result: GroupingResult, summary: pd.DataFrame, columns: int
) -> None:
    """Render one cost level chart per group, with fill, n and mean in the title."""
    level_counts = calculate_cost_level_counts(
        dict(result.evaluation), list(result.cost_scale)
    )
    y_max = max((len(costs) for costs in result.evaluation.values()), default=0)

    rows = summary.to_dict("records")
    for start in range(0, len(rows), columns):
        cols = st.columns(columns)
        for col, row in zip(cols, rows[start : start + columns]):
            costs = result.evaluation[row["Group"]]
            mean = sum(costs) / len(costs) if costs else 0.0
            title = group_title(row["Group"], row["n"], row["Capacity"], mean)
            group_counts = level_counts[level_counts["Group"] == row["Group"]]
            with col:
                fig = create_group_cost_chart(group_counts, title, y_max)
                st.plotly_chart(fig, use_container_width=True)


def _render_groups_table_tab(result: GroupingResult, summary: pd.DataFrame) -> None:
    """Render the group summary and member lookup."""
    st.dataframe(summary, use_container_width=True, hide_index=True)

    selected = st.selectbox("Select a group", result.groups, key="group_lookup")
    if selected:
        members = result.all_grouped[selected]
        pre = set(result.pre_assigned.get(selected, []))
        st.write(f"**{selected}**: {len(members)} subjects")
        st.dataframe(
            pd.DataFrame(
                {
                    "Subject": list(members),
                    "Pre-grouped": [m in pre for m in members],
                }
            ),
            use_container_width=True,
            hide_index=True,
        )
