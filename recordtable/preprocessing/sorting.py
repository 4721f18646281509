"""Single-column sorting of records."""

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from numbers import Real
from typing import Any, Dict, Optional, Sequence

from ..core.records import get_field
from .filtering import to_search_text


class SortDirection(str, Enum):
    """Direction of the active sort."""

    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class SortConfig:
    """
    The active sort: one column key and a direction.

    The key must name a sortable column; this is a caller precondition
    and is not checked here.
    """

    key: str
    direction: SortDirection = SortDirection.ASCENDING

    def __post_init__(self):
        if not isinstance(self.direction, SortDirection):
            object.__setattr__(self, "direction", SortDirection(self.direction))

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> Optional["SortConfig"]:
        """Build from ``{'key': ..., 'direction': 'asc'|'desc'}`` (None passes through)."""
        if not config:
            return None
        return cls(
            key=config.get("key", config.get("column")),
            direction=config.get("direction", config.get("dir", SortDirection.ASCENDING)),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "direction": self.direction.value}


def _is_number(value: Any) -> bool:
    return isinstance(value, Real)


def compare_values(a: Any, b: Any) -> int:
    """
    Compare two non-null values.

    Numbers compare numerically, other comparable values by their natural
    ordering, and incomparable values fall back to comparing their text.

    Returns:
        -1, 0 or 1
    """
    if not (_is_number(a) and _is_number(b)):
        try:
            if a < b:
                return -1
            if a > b:
                return 1
            return 0
        except TypeError:
            a, b = to_search_text(a), to_search_text(b)
    return (a > b) - (a < b)


def _make_comparator(config: SortConfig):
    descending = config.direction == SortDirection.DESCENDING

    def comparator(record_a: Any, record_b: Any) -> int:
        a = get_field(record_a, config.key)
        b = get_field(record_b, config.key)

        # Nulls go last in both directions
        if a is None and b is None:
            return 0
        if a is None:
            return 1
        if b is None:
            return -1

        result = compare_values(a, b)
        return -result if descending else result

    return comparator


def sort_records(records: Sequence, config: Optional[SortConfig]) -> Sequence:
    """
    Order records by the active sort.

    Null/absent values always sort after non-null ones, regardless of
    direction. Descending negates only the comparison of non-null values.
    The sort is stable and never mutates the input.

    Args:
        records: Records to sort
        config: Active sort, or None for no sorting

    Returns:
        A new sorted list, or the input unchanged when config is None
    """
    if config is None:
        return records
    return sorted(records, key=cmp_to_key(_make_comparator(config)))


def next_sort_config(current: Optional[SortConfig], column_key: str) -> Optional[SortConfig]:
    """
    Advance the header-click sort cycle for a column.

    none/other column -> ascending -> descending -> none.

    Args:
        current: The active sort
        column_key: Key of the clicked column

    Returns:
        The new sort config, or None when the sort is cleared
    """
    if current is None or current.key != column_key:
        return SortConfig(column_key, SortDirection.ASCENDING)
    if current.direction == SortDirection.ASCENDING:
        return SortConfig(column_key, SortDirection.DESCENDING)
    return None
