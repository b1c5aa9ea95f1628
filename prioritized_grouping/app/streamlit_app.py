"""Streamlit app for prioritized grouping."""

import logging
import tempfile
from pathlib import Path

import pandas as pd
import streamlit as st

from prioritized_grouping.app.components.results import render_results_dashboard
from prioritized_grouping.app.components.solver_controls import render_solver_controls
from prioritized_grouping.data_loader import (
    SUPPORTED_EXTENSIONS,
    file_extension,
    load_pre_grouping,
    read_input,
)
from prioritized_grouping.errors import DataFormatError

logger = logging.getLogger(__name__)


def load_uploaded_file(uploaded_file, loader=read_input) -> pd.DataFrame | None:
    """Read an uploaded file through a temp file; show a generic error on failure."""
    suffix = f".{file_extension(uploaded_file.name)}"
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix, mode="wb") as tmp:
        tmp.write(uploaded_file.getvalue())
        tmp_path = tmp.name

    try:
        return loader(tmp_path)
    except DataFormatError:
        # Reader errors may expose local paths, only log them
        logger.exception("Failed to read uploaded file %s", uploaded_file.name)
        st.error(
            f"Could not read **{uploaded_file.name}**. Supported formats: "
            + ", ".join(f".{e}" for e in SUPPORTED_EXTENSIONS)
        )
        return None
    finally:
        Path(tmp_path).unlink(missing_ok=True)


def reset_stale_result(state, *uploads) -> None:
    """Drop the stored result when a different data or pre-grouping file is uploaded."""
    key = tuple(None if f is None else (f.name, f.size) for f in uploads)
    if state.get("upload_key") != key:
        state["upload_key"] = key
        state["result"] = None


def main():
    st.set_page_config(page_title="Prioritized Grouping", page_icon="📊", layout="wide")

    st.title("📊 Prioritized Grouping")
    st.markdown(
        "Assign subjects to capacity-limited groups, giving everyone the best "
        "possible priority."
    )

    if "result" not in st.session_state:
        st.session_state.result = None

    st.header("📁 Upload Data")

    uploaded_file = st.file_uploader(
        "Upload a file with subject priorities",
        type=list(SUPPORTED_EXTENSIONS),
        help="First column subject ids, then one column per group with cost/priority.",
    )
    pre_file = st.file_uploader(
        "Optionally upload pre-grouped subjects",
        type=list(SUPPORTED_EXTENSIONS),
        help="Two columns: subject id and group name or group number.",
    )

    reset_stale_result(st.session_state, uploaded_file, pre_file)

    if uploaded_file is None:
        st.info("Upload a file to get started.")
        return

    data = load_uploaded_file(uploaded_file)
    if data is None:
        return

    pre_grouped = None
    if pre_file is not None:
        pre_grouped = load_uploaded_file(pre_file, loader=load_pre_grouping)
        if pre_grouped is None:
            return

    st.success(
        f"Loaded: **{len(data)}** subjects, **{data.shape[1] - 1}** groups"
        + (f", **{len(pre_grouped)}** pre-grouped" if pre_grouped is not None else "")
    )
    with st.expander("Input table"):
        st.dataframe(data, use_container_width=True, height=400)

    render_solver_controls(data, pre_grouped)

    if st.session_state.result is not None:
        render_results_dashboard(st.session_state.result)


if __name__ == "__main__":
    main()
