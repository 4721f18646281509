"""Bridge between table components and Streamlit widgets."""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

import pandas as pd
import streamlit as st

from ..core.view import VisibleResult
from ..preprocessing.sorting import SortDirection

if TYPE_CHECKING:
    from ..components.table import Table
    from ..core.state import StateManager

logger = logging.getLogger(__name__)

# Column label of the selection checkbox column in the data editor
SELECTED_COLUMN = "Selected"

_SORT_INDICATORS = {
    SortDirection.ASCENDING: "▲",
    SortDirection.DESCENDING: "▼",
}


def _widget_key(key: str, name: str, generation: int) -> str:
    """
    Build a widget key tied to the state generation.

    Widgets are re-created whenever the stored state changes, so their
    default values always reflect the stored state.
    """
    return f"{key}_{name}_{generation}"


_WIDTH_PRESETS = ("small", "medium", "large")


def _column_width(width: Any) -> Optional[Union[int, str]]:
    """Map a column width to what st.column_config accepts: a preset or pixels."""
    if isinstance(width, int) and not isinstance(width, bool):
        return width
    if isinstance(width, str):
        text = width.strip().lower()
        if text in _WIDTH_PRESETS:
            return text
        if text.endswith("px"):
            text = text[:-2].strip()
        if text.isdigit():
            return int(text)
    if width is not None:
        logger.debug("Ignoring unsupported column width %r", width)
    return None


def build_column_config(column_definitions: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Translate column definitions into an st.column_config mapping.

    Keys are the column headers, which label the displayed DataFrame.
    """
    return {
        definition["header"]: st.column_config.Column(
            alignment=definition["align"],
            width=_column_width(definition.get("width")),
        )
        for definition in column_definitions
    }


def sort_indicator(component: "Table", column_key: str) -> str:
    """Indicator shown next to a sortable header ('▲', '▼' or '↕')."""
    sort = component.sort_config
    if sort is None or sort.key != column_key:
        return "↕"
    return _SORT_INDICATORS[sort.direction]


def _render_search(component: "Table", key: str, generation: int) -> Optional[str]:
    """
    Draw the search box and its Clear button.

    Returns:
        The new search term if the user changed it, else None
    """
    term = st.text_input(
        "Search",
        value=component.search_term,
        placeholder=component.search_placeholder,
        key=_widget_key(key, "search", generation),
        label_visibility="collapsed",
    )
    if component.search_term and st.button("Clear", key=_widget_key(key, "clear", generation)):
        return ""
    if term != component.search_term:
        return term
    return None


def _render_header(component: "Table", key: str, generation: int) -> Optional[str]:
    """
    Draw one sort button per sortable column.

    Returns:
        Key of the clicked column, or None
    """
    sortable = [column for column in component.columns if column.sortable]
    if not sortable:
        return None

    clicked = None
    for slot, column in zip(st.columns(len(sortable)), sortable):
        label = f"{column.header} {sort_indicator(component, column.key)}"
        if slot.button(label, key=_widget_key(key, f"sort_{column.key}", generation)):
            clicked = column.key
    return clicked


def _render_rows(
    component: "Table",
    table_data: pd.DataFrame,
    selection: Dict[str, Any],
    column_config: Dict[str, Any],
    key: str,
    generation: int,
) -> List[Tuple[str, Any]]:
    """
    Draw the page rows.

    Column alignment and width come from column_config. Selectable tables
    use a data editor with a leading checkbox column and a select-all
    checkbox above it.

    Returns:
        Selection intents as ('select_all', included) or
        ('toggle', (position, included)) tuples
    """
    if not component.selectable:
        st.dataframe(
            table_data, hide_index=True, width="stretch", column_config=column_config
        )
        return []

    intents: List[Tuple[str, Any]] = []
    all_selected = selection["all_selected"]
    if st.checkbox(
        "Select all", value=all_selected, key=_widget_key(key, "select_all", generation)
    ) != all_selected:
        intents.append(("select_all", not all_selected))
        return intents

    selected_positions = set(selection["positions"])
    previous = [position in selected_positions for position in range(len(table_data))]
    editor_data = table_data.copy()
    editor_data.insert(0, SELECTED_COLUMN, previous)

    edited = st.data_editor(
        editor_data,
        hide_index=True,
        width="stretch",
        column_config={
            SELECTED_COLUMN: st.column_config.CheckboxColumn(width="small"),
            **column_config,
        },
        disabled=[column for column in editor_data.columns if column != SELECTED_COLUMN],
        key=_widget_key(key, "rows", generation),
    )
    for position, (was, now) in enumerate(zip(previous, edited[SELECTED_COLUMN].tolist())):
        if bool(now) != was:
            intents.append(("toggle", (position, bool(now))))
    return intents


def _render_pagination(
    pagination: Dict[str, Any], key: str, generation: int
) -> Optional[int]:
    """
    Draw the range caption and Previous/numbered/Next buttons.

    Returns:
        The requested page number, or None
    """
    current = pagination["page"]
    total_pages = pagination["total_pages"]

    st.caption(pagination["description"])

    window = pagination["page_window"]
    slots = st.columns(len(window) + 2)
    requested = None

    if slots[0].button(
        "Previous", disabled=current == 1, key=_widget_key(key, "prev", generation)
    ):
        requested = max(current - 1, 1)
    for slot, page in zip(slots[1:-1], window):
        if slot.button(
            str(page),
            type="primary" if page == current else "secondary",
            key=_widget_key(key, f"page_{page}", generation),
        ):
            requested = page
    if slots[-1].button(
        "Next", disabled=current == total_pages, key=_widget_key(key, "next", generation)
    ):
        requested = min(current + 1, total_pages)
    return requested


def render_component(
    component: "Table",
    state_manager: "StateManager",
    key: Optional[str] = None,
) -> VisibleResult:
    """
    Render a table in Streamlit.

    This function:
    1. Restores the table's view state and selection from the StateManager
    2. Draws search box, sort headers, rows and pager
    3. Collects the intents emitted by the widgets
    4. Applies them to the table in widget order
    5. Writes view state and selection back and triggers st.rerun()
       if anything changed

    Args:
        component: The table to render
        state_manager: StateManager carrying view state between reruns
        key: Optional unique key (defaults to the component id)

    Returns:
        The VisibleResult that was drawn
    """
    if key is None:
        key = f"rt_{component.component_id}"

    stored_view = state_manager.get_view_state(key)
    component.restore_state(stored_view, state_manager.get_selection(key))
    if stored_view is None:
        # First render: store the initial state without a rerun
        state_manager.set_view_state(key, component.view_state)
    generation = state_manager.counter

    if component.title:
        st.subheader(component.title)

    if component.loading:
        if component.searchable:
            st.text_input(
                "Search",
                placeholder=component.search_placeholder,
                disabled=True,
                key=_widget_key(key, "search_loading", generation),
                label_visibility="collapsed",
            )
        st.info("Loading...")
        return component.compute_view()

    new_term = _render_search(component, key, generation) if component.searchable else None
    clicked_column = _render_header(component, key, generation)

    component_args = component._get_component_args()
    column_config = build_column_config(component_args["columnDefinitions"])
    payload = component._prepare_view_data()
    result = component.compute_view()

    selection_intents: List[Tuple[str, Any]] = []
    if payload["_empty"]:
        st.info(component.empty_message)
    else:
        selection_intents = _render_rows(
            component,
            payload["tableData"],
            payload["_selection"],
            column_config,
            key,
            generation,
        )

    requested_page = None
    if component.pagination and result.total_pages > 1:
        requested_page = _render_pagination(payload["_pagination"], key, generation)

    # Apply intents in widget order
    if new_term is not None:
        result = component.search_term_changed(new_term)
    if clicked_column is not None:
        result = component.sort_requested(clicked_column)
    for intent, value in selection_intents:
        if intent == "select_all":
            component.select_all_toggled(value)
        else:
            component.row_selection_toggled(*value)
    if requested_page is not None:
        result = component.page_changed(requested_page)

    view_changed = state_manager.set_view_state(key, component.view_state)
    selection_changed = state_manager.set_selection(key, component.selection.snapshot())
    if view_changed or selection_changed:
        logger.debug("Table '%s' state changed, rerunning", key)
        st.rerun()

    return result
