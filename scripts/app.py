"""
GraphCanvas: Streamlit Application Entry Point.

Visual editor and analytics workbench for labeled directed graphs.

Usage:
    streamlit run scripts/app.py
"""
import logging
import sys
from pathlib import Path

# Ensure project root is importable
_PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

import streamlit as st

# ---- Page config (must be first Streamlit call) ----
st.set_page_config(
    page_title="GraphCanvas",
    page_icon="🕸️",
    layout="wide",
    initial_sidebar_state="expanded",
)


def main():
    from graphcanvas.core.config import load_dotenv_if_exists
    from graphcanvas.ui.pages import graph_editor

    load_dotenv_if_exists()
    graph_editor.render()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    main()
