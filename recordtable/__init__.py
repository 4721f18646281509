"""
recordtable - Interactive tables over in-memory records.

This package turns an in-memory record collection into an interactive
table view with global search, three-state sort, pagination and row
selection, rendered with Streamlit.
"""

from .components.table import Table
from .core.base import BaseComponent
from .core.columns import Align, ColumnDescriptor
from .core.selection import SelectionTracker
from .core.state import StateManager, ViewState
from .core.view import VisibleResult, compute_view
from .preprocessing.pagination import PageState
from .preprocessing.sorting import SortConfig, SortDirection
from .logging_config import configure_logging
from .rendering.bridge import render_component

__version__ = "0.1.0"

__all__ = [
    # Core
    "BaseComponent",
    "StateManager",
    "ViewState",
    "SelectionTracker",
    "VisibleResult",
    "compute_view",
    # Model
    "ColumnDescriptor",
    "Align",
    "SortConfig",
    "SortDirection",
    "PageState",
    # Components
    "Table",
    # Rendering
    "render_component",
    "configure_logging",
]
