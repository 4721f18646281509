"""Row selection tracking for the visible page."""

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence

from .records import get_field

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[List[Any]], None]


class SelectionTracker:
    """
    Tracks which rows of the visible page are selected.

    By default selection is positional: it stores zero-based positions
    within the current page, not record identities. Changing page, search
    or sort keeps the positions, which then map to whatever records now
    occupy them.

    When ``identity_field`` is given, positions received from the
    presentation layer are translated to the record's value of that field
    when the selection changes, and the selection is stored by identity.
    Selected records then survive page, search and sort changes.

    Every mutation calls ``on_change`` with the freshly derived list of
    selected records.
    """

    def __init__(
        self,
        on_change: Optional[SelectionCallback] = None,
        identity_field: Optional[str] = None,
    ):
        """
        Initialize the tracker.

        Args:
            on_change: Callback receiving the selected records after every change
            identity_field: Field holding a stable record identifier. If None,
                selection is positional.
        """
        self._on_change = on_change
        self._identity_field = identity_field
        self._positions: set = set()
        # identity -> record, in selection order
        self._selected_by_identity: Dict[Hashable, Any] = {}
        self._page_rows: Sequence = []
        self._last_derived: Optional[List[Any]] = None

    @property
    def identity_field(self) -> Optional[str]:
        return self._identity_field

    @property
    def positions(self) -> frozenset:
        """Selected positions on the bound page."""
        if self._identity_field is None:
            return frozenset(self._positions)
        return frozenset(
            position
            for position, record in enumerate(self._page_rows)
            if self._identity(record) in self._selected_by_identity
        )

    @property
    def identities(self) -> List[Hashable]:
        """Selected identities, in selection order (identity mode only)."""
        return list(self._selected_by_identity)

    def __len__(self) -> int:
        if self._identity_field is None:
            return len(self._positions)
        return len(self._selected_by_identity)

    def _identity(self, record: Any) -> Hashable:
        return get_field(record, self._identity_field)

    def bind_page(self, page_rows: Sequence) -> None:
        """
        Record the currently visible page.

        If a selection is active and the records it maps to changed, the
        callback is notified with the new selected records.
        """
        self._page_rows = page_rows
        if not len(self):
            return
        derived = self.derive()
        if self._last_derived is None or not _same_records(derived, self._last_derived):
            self._notify(derived)

    def toggle(self, position: int, included: bool) -> List[Any]:
        """
        Add or remove one page position.

        Args:
            position: Zero-based row position on the bound page
            included: True to select, False to deselect

        Returns:
            The selected records after the change
        """
        if self._identity_field is None:
            if included:
                self._positions.add(position)
            else:
                self._positions.discard(position)
        elif 0 <= position < len(self._page_rows):
            record = self._page_rows[position]
            identity = self._identity(record)
            if included:
                self._selected_by_identity[identity] = record
            else:
                self._selected_by_identity.pop(identity, None)
        else:
            logger.debug("Ignoring toggle of position %s outside the page", position)

        derived = self.derive()
        self._notify(derived)
        return derived

    def select_all(self, included: bool, current_page_size: Optional[int] = None) -> List[Any]:
        """
        Select every row of the page, or clear the selection.

        Args:
            included: True selects positions 0..n-1, False empties the selection
            current_page_size: Number of rows on the page (defaults to the
                bound page length)

        Returns:
            The selected records after the change
        """
        if current_page_size is None:
            current_page_size = len(self._page_rows)

        self._positions = set()
        self._selected_by_identity = {}
        if included:
            if self._identity_field is None:
                self._positions = set(range(current_page_size))
            else:
                for record in list(self._page_rows)[:current_page_size]:
                    self._selected_by_identity[self._identity(record)] = record

        derived = self.derive()
        self._notify(derived)
        return derived

    def restore(self, selection: Iterable[Any], records: Optional[Sequence] = None) -> None:
        """
        Restore a stored selection without notifying.

        Args:
            selection: Positions (positional mode) or identities (identity mode)
            records: Records to resolve identities against (defaults to the
                bound page). Identities with no matching record are dropped.
        """
        if self._identity_field is None:
            self._positions = set(selection)
        else:
            if records is None:
                records = self._page_rows
            by_identity = {self._identity(record): record for record in records}
            self._selected_by_identity = {
                identity: by_identity[identity]
                for identity in selection
                if identity in by_identity
            }
        self._last_derived = self.derive()

    def snapshot(self) -> List[Any]:
        """Serializable selection: sorted positions or identities."""
        if self._identity_field is None:
            return sorted(self._positions)
        return self.identities

    def derive(self, page_rows: Optional[Sequence] = None) -> List[Any]:
        """
        Map the selection to records.

        In positional mode stale positions beyond the page are skipped.
        In identity mode the selected records are returned in selection
        order, wherever they currently are.

        Args:
            page_rows: Page to map positions against (defaults to the bound page)

        Returns:
            List of selected records
        """
        if page_rows is None:
            page_rows = self._page_rows

        if self._identity_field is None:
            return [
                page_rows[position]
                for position in sorted(self._positions)
                if 0 <= position < len(page_rows)
            ]

        on_page = {self._identity(record): record for record in page_rows}
        selected = []
        for identity, record in self._selected_by_identity.items():
            record = on_page.get(identity, record)
            if record is not None:
                selected.append(record)
        return selected

    def is_selected(self, position: int) -> bool:
        """Whether a position on the bound page is selected."""
        return position in self.positions

    def all_selected(self) -> bool:
        """Whether every row of a non-empty bound page is selected."""
        if not self._page_rows:
            return False
        return len(self.positions) == len(self._page_rows)

    def clear(self) -> None:
        """Empty the selection without notifying."""
        self._positions = set()
        self._selected_by_identity = {}
        self._last_derived = None

    def _notify(self, derived: List[Any]) -> None:
        self._last_derived = derived
        if self._on_change is not None:
            self._on_change(derived)


def _same_records(left: List[Any], right: List[Any]) -> bool:
    return len(left) == len(right) and all(a is b for a, b in zip(left, right))
