"""Interactive data table with search, sort, pagination and selection."""

import hashlib
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..core.base import BaseComponent
from ..core.columns import ColumnLike
from ..core.records import RecordsLike, to_records
from ..core.selection import SelectionTracker
from ..core.state import ViewState
from ..core.view import VisibleResult, compute_view
from ..preprocessing.filtering import compute_records_hash
from ..preprocessing.pagination import DEFAULT_PAGE_SIZE, PageState, clamp_page, page_window
from ..preprocessing.sorting import SortConfig

logger = logging.getLogger(__name__)


class Table(BaseComponent):
    """
    Interactive table over an in-memory record collection.

    Features:
    - Global free-text search across searchable columns
    - Three-state single-column sort (ascending, descending, none)
    - Pagination with a clamped page cursor
    - Row selection with a selection-change callback

    The view is always computed in the same order: search filter, sort,
    then pagination. Intent methods (``search_term_changed``,
    ``sort_requested``, ``page_changed``, ``row_selection_toggled``,
    ``select_all_toggled``) update the view state and return the new
    visible page.

    Example:
        users_table = Table(
            component_id="users",
            data=users,
            columns=[
                {"key": "name", "header": "Name", "sortable": True},
                {"key": "email", "header": "Email"},
                {"key": "joinDate", "header": "Joined", "sortable": True},
            ],
            page_size=10,
            selectable=True,
            identity_field="id",
            on_selection_change=lambda rows: print(len(rows)),
        )
        users_table.search_term_changed("jane")
        result = users_table.sort_requested("joinDate")
    """

    def __init__(
        self,
        component_id: str,
        data: RecordsLike,
        columns: Optional[Sequence[ColumnLike]] = None,
        pagination: bool = True,
        page_size: int = DEFAULT_PAGE_SIZE,
        searchable: bool = True,
        search_placeholder: str = "Search...",
        selectable: bool = False,
        on_selection_change: Optional[Callable[[List[Any]], None]] = None,
        identity_field: Optional[str] = None,
        empty_message: str = "No data available",
        loading: bool = False,
        title: Optional[str] = None,
        initial_sort: Optional[Union[SortConfig, Dict[str, Any]]] = None,
        **kwargs,
    ):
        """
        Initialize the Table component.

        Args:
            component_id: Unique identifier for this table. Used as the key
                for its view state in the StateManager.
            data: Records as a sequence of mappings/objects, a polars
                DataFrame/LazyFrame or a pandas DataFrame.
            columns: Column descriptors or dicts with keys:
                - key: Field key (required, unique)
                - header: Display label (defaults to the key in title case)
                - sortable: Whether the header click sorts (default False)
                - searchable: Whether global search looks at it (default True)
                - align: 'left', 'center' or 'right'
                - render: ``render(value, record)`` cell formatter
                - width: Column width
                If None, auto-generates sortable columns from the data.
            pagination: Split rows into pages (default: True)
            page_size: Rows per page when pagination is enabled (default: 10)
            searchable: Show the global search box (default: True)
            search_placeholder: Placeholder text of the search box
            selectable: Show row selection checkboxes (default: False)
            on_selection_change: Called with the selected records after every
                selection change
            identity_field: Field with a stable record identifier. When set,
                selection is kept by identity instead of page position.
            empty_message: Message shown when no rows match
            loading: Show a loading indicator instead of rows
            title: Table title displayed above the table
            initial_sort: Initial sort as SortConfig or dict like
                {'key': 'name', 'direction': 'asc'}
            **kwargs: Additional configuration options passed to the presentation
        """
        self._pagination = pagination
        self._page_size = page_size
        self._searchable = searchable
        self._search_placeholder = search_placeholder
        self._selectable = selectable
        self._identity_field = identity_field
        self._empty_message = empty_message
        self._loading = loading
        self._title = title

        if isinstance(initial_sort, dict):
            initial_sort = SortConfig.from_dict(initial_sort)
        self._initial_sort = initial_sort

        # PageState validates page_size
        self._view_state = ViewState(sort=initial_sort, page=PageState(1, page_size))
        self._selection = SelectionTracker(
            on_change=on_selection_change, identity_field=identity_field
        )
        # Single memoized entry: (cache key, result)
        self._view_cache: Optional[tuple] = None

        super().__init__(component_id=component_id, data=data, columns=columns, **kwargs)
        self._records_hash = compute_records_hash(self._records)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def view_state(self) -> ViewState:
        return self._view_state

    @view_state.setter
    def view_state(self, view_state: ViewState) -> None:
        self._view_state = view_state

    @property
    def sort_config(self) -> Optional[SortConfig]:
        return self._view_state.sort

    @property
    def search_term(self) -> str:
        return self._view_state.search_term

    @property
    def selection(self) -> SelectionTracker:
        return self._selection

    @property
    def selected_records(self) -> List[Any]:
        return self._selection.derive()

    @property
    def pagination(self) -> bool:
        return self._pagination

    @property
    def searchable(self) -> bool:
        return self._searchable

    @property
    def selectable(self) -> bool:
        return self._selectable

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def empty_message(self) -> str:
        return self._empty_message

    @property
    def title(self) -> Optional[str]:
        return self._title

    @property
    def search_placeholder(self) -> str:
        return self._search_placeholder

    def restore_state(self, view_state: Optional[ViewState], selection: Sequence[Any] = ()) -> None:
        """
        Restore view state and selection stored by the host.

        Args:
            view_state: Stored view state, or None to keep the current one.
                Its page size is replaced by this table's ``page_size``.
            selection: Stored positions or identities
        """
        if view_state is not None:
            self._view_state = view_state.with_page_size(self._page_size)
        result = self.compute_view()
        self._selection.bind_page(result.rows)
        self._selection.restore(selection, records=self._records)

    def set_data(self, data: RecordsLike, columns: Optional[Sequence[ColumnLike]] = None) -> VisibleResult:
        """
        Replace the record collection.

        The selection is cleared; the page cursor is kept and clamped on
        the next computation.

        Args:
            data: New records
            columns: New columns, or None to keep the current ones

        Returns:
            The recomputed visible page
        """
        self._records = to_records(data)
        if columns is not None:
            self._columns = self._resolve_columns(data, columns)
        self._records_hash = compute_records_hash(self._records)
        self._view_cache = None
        self._selection.clear()
        logger.debug("Table '%s' data replaced (%d rows)", self._component_id, len(self._records))
        return self.view()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def compute_view(self, view_state: Optional[ViewState] = None) -> VisibleResult:
        """
        Compute the visible page for a view state without changing anything.

        Results are memoized by records hash and view state; the memo never
        changes results.

        Args:
            view_state: View state to compute (defaults to the current one)

        Returns:
            VisibleResult
        """
        if view_state is None:
            view_state = self._view_state

        cache_key = (self._records_hash, self._pagination, view_state.cache_key())
        if self._view_cache is not None and self._view_cache[0] == cache_key:
            return self._view_cache[1]

        result = compute_view(
            self._records,
            self._columns,
            view_state.search_term,
            view_state.sort,
            view_state.page,
            pagination_enabled=self._pagination,
        )
        self._view_cache = (cache_key, result)
        return result

    def view(self) -> VisibleResult:
        """
        Compute the current page and sync derived state.

        A page cursor beyond the last page is written back as the last
        valid page, and the page is bound to the selection tracker.
        """
        result = self.compute_view()
        if self._pagination and result.current_page != self._view_state.page.current_page:
            self._view_state = self._view_state.with_page(result.current_page)
        self._selection.bind_page(result.rows)
        return result

    # ------------------------------------------------------------------
    # Intents from the presentation layer
    # ------------------------------------------------------------------

    def search_term_changed(self, text: str) -> VisibleResult:
        """Apply a new search term."""
        if not self._searchable:
            logger.debug("Ignoring search on non-searchable table '%s'", self._component_id)
            return self.view()
        self._view_state = self._view_state.with_search_term(text)
        return self.view()

    def clear_search(self) -> VisibleResult:
        return self.search_term_changed("")

    def sort_requested(self, column_key: str) -> VisibleResult:
        """Apply a header click; non-sortable or unknown columns are ignored."""
        column = self.get_column(column_key)
        if column is None or not column.sortable:
            logger.debug("Ignoring sort request for column '%s'", column_key)
            return self.view()
        self._view_state = self._view_state.with_sort_requested(column_key)
        logger.debug("Table '%s' sort is now %s", self._component_id, self._view_state.sort)
        return self.view()

    def page_changed(self, page: int) -> VisibleResult:
        """Move to a page, clamped into the valid range."""
        if not self._pagination:
            return self.view()
        total_pages = self.compute_view().total_pages
        self._view_state = self._view_state.with_page(clamp_page(page, total_pages))
        return self.view()

    def next_page(self) -> VisibleResult:
        return self.page_changed(self._view_state.page.current_page + 1)

    def previous_page(self) -> VisibleResult:
        return self.page_changed(self._view_state.page.current_page - 1)

    def row_selection_toggled(self, position: int, included: bool) -> VisibleResult:
        """Select or deselect one row of the visible page."""
        result = self.view()
        if not self._selectable:
            logger.debug("Ignoring selection on non-selectable table '%s'", self._component_id)
            return result
        self._selection.toggle(position, included)
        return result

    def select_all_toggled(self, included: bool) -> VisibleResult:
        """Select every row of the visible page, or clear the selection."""
        result = self.view()
        if not self._selectable:
            logger.debug("Ignoring selection on non-selectable table '%s'", self._component_id)
            return result
        self._selection.select_all(included, len(result.rows))
        return result

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def _get_component_name(self) -> str:
        """Return the presentation component name."""
        return "DataTable"

    def _prepare_view_data(self, view_state: Optional[ViewState] = None) -> Dict[str, Any]:
        """
        Prepare the current page for the presentation layer.

        Args:
            view_state: View state to render (defaults to the current one)

        Returns:
            Dict with tableData (pandas DataFrame of formatted cells),
            _pagination and _sort metadata, _selection state and _hash
        """
        if view_state is not None:
            self._view_state = view_state
        result = self.view()
        sort = self._view_state.sort

        pagination = result.pagination_metadata()
        pagination["page_window"] = page_window(result.current_page, result.total_pages)
        pagination["description"] = "" if result.is_empty else result.describe_range()

        return {
            "tableData": result.to_pandas(self._columns),
            "_pagination": pagination,
            "_sort": sort.to_dict() if sort else None,
            "_selection": {
                "positions": sorted(self._selection.positions),
                "all_selected": self._selection.all_selected(),
            },
            "_empty": result.is_empty,
            "_hash": hashlib.sha256(
                f"{self._records_hash}|{self._view_state.cache_key()}".encode()
            ).hexdigest(),
        }

    def _get_component_args(self) -> Dict[str, Any]:
        """
        Get component arguments for the presentation layer.

        Returns:
            Dict with all table configuration
        """
        args: Dict[str, Any] = {
            "componentType": self._get_component_name(),
            "columnDefinitions": [column.to_dict() for column in self._columns],
            "pagination": self._pagination,
            "pageSize": self._page_size,
            "searchable": self._searchable,
            "searchPlaceholder": self._search_placeholder,
            "selectable": self._selectable,
            "emptyMessage": self._empty_message,
            "loading": self._loading,
        }

        if self._title:
            args["title"] = self._title

        if self._identity_field:
            args["identityField"] = self._identity_field

        if self._initial_sort:
            args["initialSort"] = self._initial_sort.to_dict()

        # Add any extra config options
        args.update(self._config)

        return args
