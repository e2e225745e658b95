"""
Export utilities for GraphCanvas.

Download buttons for the current Visual Model:
- Full model as JSON (re-importable)
- Nodes and edges as two CSV files
"""
import logging

import streamlit as st

from graphcanvas.core.schemas import VisualModel
from graphcanvas.ingestion.codec import export_edges_csv, export_json, export_nodes_csv

logger = logging.getLogger(__name__)


def export_model_as_json(model: VisualModel, filename="graph.json"):
    """
    Offer the model as a JSON download.

    Args:
        model: Current Visual Model
        filename: Name for downloaded file
    """
    try:
        st.download_button(
            label="📦 Export JSON",
            data=export_json(model),
            file_name=filename,
            mime="application/json",
            use_container_width=True,
        )
    except Exception as e:
        logger.exception("JSON export failed")
        st.error(f"Failed to export JSON: {e}")


def export_model_as_csv(model: VisualModel, prefix=""):
    """Offer nodes.csv and edges.csv side by side."""
    try:
        col_nodes, col_edges = st.columns(2)
        with col_nodes:
            st.download_button(
                label="📄 nodes.csv",
                data=export_nodes_csv(model),
                file_name=f"{prefix}nodes.csv",
                mime="text/csv",
                use_container_width=True,
            )
        with col_edges:
            st.download_button(
                label="🔗 edges.csv",
                data=export_edges_csv(model),
                file_name=f"{prefix}edges.csv",
                mime="text/csv",
                use_container_width=True,
            )
    except Exception as e:
        logger.exception("CSV export failed")
        st.error(f"Failed to export CSV: {e}")
