"""Solver Controls UI component."""

import pandas as pd
import streamlit as st

from prioritized_grouping.errors import GroupingError
from prioritized_grouping.grouping import prioritized_grouping
from prioritized_grouping.types import DEFAULT_EXCESS_SPACE, DEFAULT_SEED


def parse_cap_classes(text: str) -> list[int] | None:
    """Parse a comma separated list of capacities; empty text means equal split."""
    values = [v.strip() for v in text.split(",") if v.strip()]
    if not values:
        return None
    return [int(v) for v in values]


def render_solver_controls(
    data: pd.DataFrame, pre_grouped: pd.DataFrame | None
) -> None:
    """Render the solver settings and run button."""
    st.header("⚙️ Solver Settings")

    num_groups = data.shape[1] - 1

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        cap_text = st.text_input(
            "Group Capacity",
            "",
            help=(
                "Leave empty for equal group sizes, give one number for all groups, "
                f"or {num_groups} comma separated numbers."
            ),
        )

    with col2:
        excess_space = st.slider(
            "Excess Fill (%)",
            0,
            100,
            int(DEFAULT_EXCESS_SPACE),
            5,
            help="Capacities are enlarged by this percentage and rounded up.",
        )

    with col3:
        seed = st.number_input(
            "Random Seed",
            min_value=0,
            value=DEFAULT_SEED,
            help="Seed for the solver's internal tie-breaking.",
        )

    with col4:
        missing_cost = st.number_input(
            "Missing Cost",
            min_value=0.0,
            value=float(num_groups),
            help="Cost used where a subject gave no priority for a group.",
        )

    if st.button("🚀 Run Solver", type="primary"):
        try:
            cap_classes = parse_cap_classes(cap_text)
        except ValueError:
            st.error("Group capacity has to be a comma separated list of whole numbers.")
            return

        with st.spinner("Solving grouping problem..."):
            try:
                st.session_state.result = prioritized_grouping(
                    data,
                    cap_classes=cap_classes,
                    excess_space=excess_space,
                    pre_grouped=pre_grouped,
                    seed=int(seed),
                    missing_cost=missing_cost,
                )
            except GroupingError as e:
                st.session_state.result = None
                st.error(str(e))
