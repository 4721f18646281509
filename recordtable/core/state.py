"""View parameters and their Streamlit-backed storage."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..preprocessing.pagination import PageState
from ..preprocessing.sorting import SortConfig, next_sort_config


@dataclass(frozen=True)
class ViewState:
    """
    The three view parameters driving the pipeline, bundled in one value.

    Transitions return new instances; a ViewState is never mutated.
    """

    search_term: str = ""
    sort: Optional[SortConfig] = None
    page: PageState = field(default_factory=PageState)

    def with_search_term(self, term: str) -> "ViewState":
        return replace(self, search_term=term or "")

    def with_sort_requested(self, column_key: str) -> "ViewState":
        """Apply one header click on a sortable column."""
        return replace(self, sort=next_sort_config(self.sort, column_key))

    def with_page(self, page: int) -> "ViewState":
        return replace(self, page=PageState(max(page, 1), self.page.page_size))

    def with_page_size(self, page_size: int) -> "ViewState":
        """Same page number under a new page size; clamping happens on compute."""
        if page_size == self.page.page_size:
            return self
        return replace(self, page=PageState(self.page.current_page, page_size))

    def cache_key(self) -> Tuple[Any, ...]:
        """Hashable key for memoizing pipeline results."""
        sort = (self.sort.key, self.sort.direction.value) if self.sort else None
        return (self.search_term, sort, self.page.current_page, self.page.page_size)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search_term": self.search_term,
            "sort": self.sort.to_dict() if self.sort else None,
            "page": self.page.current_page,
            "page_size": self.page.page_size,
        }

    @classmethod
    def from_dict(cls, state: Dict[str, Any]) -> "ViewState":
        page_size = state.get("page_size", PageState().page_size)
        return cls(
            search_term=state.get("search_term", ""),
            sort=SortConfig.from_dict(state.get("sort")),
            page=PageState(state.get("page", 1), page_size),
        )


_shared_manager: Optional["StateManager"] = None


def get_default_state_manager() -> "StateManager":
    """Return the process-wide StateManager used when a table is called without one."""
    global _shared_manager
    if _shared_manager is None:
        _shared_manager = StateManager()
    return _shared_manager


def reset_default_state_manager() -> None:
    """Forget the shared StateManager; the next lookup creates a fresh one."""
    global _shared_manager
    _shared_manager = None


def _new_store() -> Dict[str, Any]:
    return {
        "counter": 0,
        "id": float(np.random.random()),
        "views": {},
        "selections": {},
    }


class StateManager:
    """
    Keeps table view states and selections across Streamlit reruns.

    Streamlit re-executes the script on every interaction, so Table
    objects are rebuilt each run. Their search term, sort, page and
    selection live here instead, under one ``st.session_state`` entry:

        {"counter": int, "id": float, "views": {...}, "selections": {...}}

    ``counter`` goes up on every stored change; the bridge uses it to
    version widget keys. ``id`` is a random number telling browser
    sessions apart.
    """

    def __init__(self, session_key: str = "recordtable_state"):
        """
        Args:
            session_key: session_state entry holding the store. Tables
                rendered through different keys never see each other's state.
        """
        self._session_key = session_key
        self._store()

    def _store(self) -> Dict[str, Any]:
        import streamlit as st

        if self._session_key not in st.session_state:
            st.session_state[self._session_key] = _new_store()
        return st.session_state[self._session_key]

    def _bump(self) -> None:
        self._store()["counter"] += 1

    @property
    def session_id(self) -> float:
        return self._store()["id"]

    @property
    def counter(self) -> int:
        """Number of stored changes since the store was created or cleared."""
        return self._store()["counter"]

    def get_view_state(self, table_key: str) -> Optional[ViewState]:
        """
        Look up the stored view state of a table.

        Returns:
            The ViewState, or None before the table's first render
        """
        stored = self._store()["views"].get(table_key)
        return None if stored is None else ViewState.from_dict(stored)

    def set_view_state(self, table_key: str, view_state: ViewState) -> bool:
        """
        Store a table's view state.

        Returns:
            True if this changed what was stored
        """
        views = self._store()["views"]
        value = view_state.to_dict()
        if views.get(table_key) == value:
            return False
        views[table_key] = value
        self._bump()
        return True

    def get_selection(self, table_key: str) -> List[Any]:
        """Stored positions or identities of a table (empty if none)."""
        return list(self._store()["selections"].get(table_key, []))

    def set_selection(self, table_key: str, selection: List[Any]) -> bool:
        """Store a table's selection; returns True if it changed."""
        selections = self._store()["selections"]
        value = list(selection)
        if selections.get(table_key, []) == value:
            return False
        selections[table_key] = value
        self._bump()
        return True

    def clear_table(self, table_key: str) -> bool:
        """
        Drop everything stored for one table.

        Returns:
            False if the table had nothing stored
        """
        store = self._store()
        had_view = store["views"].pop(table_key, None) is not None
        had_selection = store["selections"].pop(table_key, None) is not None
        if not (had_view or had_selection):
            return False
        self._bump()
        return True

    def get_all_views(self) -> Dict[str, Dict[str, Any]]:
        return dict(self._store()["views"])

    def clear(self) -> None:
        """Drop all tables and reset the counter; the session id is kept."""
        store = self._store()
        store.update(views={}, selections={}, counter=0)

    def __repr__(self) -> str:
        return (
            f"StateManager({self._session_key!r}, counter={self.counter}, "
            f"tables={sorted(self.get_all_views())})"
        )
