"""CLI entry point for the Streamlit app."""

import sys
from pathlib import Path


def main() -> None:
    """Launch the Streamlit app."""
    from streamlit.web.cli import main as st_main

    app_path = Path(__file__).parent / "streamlit_app.py"

    sys.argv = ["streamlit", "run", str(app_path), "--server.headless", "true"]
    st_main()


if __name__ == "__main__":
    main()
