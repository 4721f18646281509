"""Rendering utilities for drawing tables in Streamlit."""

from .bridge import render_component, sort_indicator

__all__ = [
    "render_component",
    "sort_indicator",
]
