"""
GraphCanvas UI Theme: light workbench styling for the Streamlit app.

Provides CSS injection and small HTML helpers.
"""

# Color palette
COLORS = {
    "bg_primary": "#ffffff",
    "bg_panel": "#fbfbfb",
    "accent": "#1976d2",
    "text_primary": "#1f2933",
    "text_secondary": "#666666",
    "border": "#dddddd",
    "selection": "#e3f2fd",
    "selection_border": "#90CAF9",
    "danger": "#d32f2f",
    "warning": "#ed6c02",
    "success": "#2e7d32",
}

MAIN_CSS = """
<style>
/* ---- Sidebar ---- */
section[data-testid="stSidebar"] {
    background: #fbfbfb;
    border-right: 1px solid #dddddd;
}

/* ---- Panels ---- */
.panel-caption {
    font-size: 0.75rem;
    font-weight: 700;
    color: #666666;
    text-transform: uppercase;
    letter-spacing: 0.04em;
    margin: 0.6rem 0 0.3rem 0;
}
.property-panel {
    background: #e3f2fd;
    border: 1px solid #90CAF9;
    border-radius: 8px;
    padding: 0.8rem 1rem;
    margin-top: 0.5rem;
}

/* ---- Mode badge ---- */
.mode-badge {
    display: inline-block;
    border-radius: 20px;
    padding: 0.15rem 0.8rem;
    font-size: 0.75rem;
    font-weight: 600;
    background: rgba(25, 118, 210, 0.12);
    color: #1976d2;
    border: 1px solid rgba(25, 118, 210, 0.3);
}
.mode-badge.link { background: rgba(237, 108, 2, 0.12); color: #ed6c02; border-color: rgba(237, 108, 2, 0.3); }
.mode-badge.path { background: rgba(211, 47, 47, 0.12); color: #d32f2f; border-color: rgba(211, 47, 47, 0.3); }

/* ---- Header ---- */
.hero-title {
    font-size: 1.8rem;
    font-weight: 700;
    color: #1976d2;
    margin-bottom: 0.1rem;
}
.hero-subtitle {
    font-size: 0.9rem;
    color: #666666;
    margin-bottom: 1rem;
}
</style>
"""


def inject_css():
    """Inject the theme CSS into Streamlit."""
    import streamlit as st
    st.markdown(MAIN_CSS, unsafe_allow_html=True)


def panel_caption(text):
    return f'<div class="panel-caption">{text}</div>'


def mode_badge(mode_value, anchor=None):
    """Render the interaction mode pill, with the pending anchor if any."""
    css = {"link_creation": "link", "path_query": "path"}.get(mode_value, "")
    text = mode_value.replace("_", " ").title()
    if anchor:
        text += f" · start: {anchor}"
    return f'<span class="mode-badge {css}">{text}</span>'
