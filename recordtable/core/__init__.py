"""Core infrastructure for recordtable."""

from .base import BaseComponent
from .columns import Align, ColumnDescriptor
from .selection import SelectionTracker
from .state import StateManager, ViewState
from .view import VisibleResult, compute_view

__all__ = [
    "BaseComponent",
    "ColumnDescriptor",
    "Align",
    "SelectionTracker",
    "StateManager",
    "ViewState",
    "VisibleResult",
    "compute_view",
]
