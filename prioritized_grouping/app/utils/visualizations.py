"""Visualization functions for creating Plotly charts."""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st


def group_title(group: str, n: int, capacity: int, mean: float) -> str:
    """Chart title with fill, size and mean cost of a group."""
    fill = round(n / capacity, 1) if capacity > 0 else float("nan")
    return f"{group} (fill={fill};n={n};mean={round(mean, 1)})"


@st.cache_data
def create_overall_mean_chart(summary: pd.DataFrame) -> go.Figure:
    """Create a bar chart of the mean cost per group with the perfect mean marked."""
    fig = px.bar(
        summary,
        x="Group",
        y="Mean",
        color="Mean",
        color_continuous_scale="Viridis_r",
        labels={"Group": "Groups", "Mean": "Mean priority/cost"},
        title="Overall group-wise mean priority/cost of groupings",
    )
    fig.add_hline(
        y=1.0, line_color="black", annotation_text="Perfect mean=1 for reference"
    )
    fig.update_coloraxes(showscale=False)
    return fig


@st.cache_data
def create_group_cost_chart(
    level_counts: pd.DataFrame, title: str, y_max: int
) -> go.Figure:
    """Create a bar chart of how many subjects of one group sit at each cost level."""
    df = level_counts.assign(Cost=level_counts["Cost"].map(lambda c: f"{c:g}"))
    fig = px.bar(
        df,
        x="Cost",
        y="Count",
        color="Cost",
        color_discrete_sequence=px.colors.sequential.Viridis_r,
        title=title,
    )
    fig.update_layout(showlegend=False, xaxis_title=None, yaxis_title=None)
    fig.update_yaxes(range=[0, max(y_max, 1)])
    return fig


@st.cache_data
def create_cost_distribution_chart(distribution: pd.DataFrame) -> go.Figure:
    """Create a bar chart of all solved subjects by cost level."""
    df = distribution.assign(Cost=distribution["Cost"].map(lambda c: f"{c:g}"))
    fig = px.bar(
        df,
        x="Cost",
        y="Count",
        title="Subjects by Assigned Priority/Cost",
        color="Count",
        color_continuous_scale="Greens",
    )
    return fig
