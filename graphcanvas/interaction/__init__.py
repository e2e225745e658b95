"""
Interaction module - Two-click gestures and direct editing.
"""
from .state_machine import (
    InteractionMode,
    InteractionState,
    ClickResult,
    toggle_link_mode,
    toggle_path_mode,
    handle_node_click,
)
from .editor import sample_model, create_node, delete_selection, relabel_selection, selection_label

__all__ = [
    "InteractionMode",
    "InteractionState",
    "ClickResult",
    "toggle_link_mode",
    "toggle_path_mode",
    "handle_node_click",
    "sample_model",
    "create_node",
    "delete_selection",
    "relabel_selection",
    "selection_label",
]
