"""
Core module - Configuration and Visual Model schemas.
"""
from .config import Settings, get_settings
from .schemas import (
    Position,
    VisualNode,
    VisualEdge,
    VisualModel,
    Selection,
    SelectionKind,
    select,
    Notice,
    NoticeKind,
    Outcome,
)

__all__ = [
    "Settings",
    "get_settings",
    "Position",
    "VisualNode",
    "VisualEdge",
    "VisualModel",
    "Selection",
    "SelectionKind",
    "select",
    "Notice",
    "NoticeKind",
    "Outcome",
]
