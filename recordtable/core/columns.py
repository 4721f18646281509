"""Column descriptors for table components."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

import polars as pl

from .records import get_field

NUMERIC_DTYPES = (
    pl.Int8,
    pl.Int16,
    pl.Int32,
    pl.Int64,
    pl.UInt8,
    pl.UInt16,
    pl.UInt32,
    pl.UInt64,
    pl.Float32,
    pl.Float64,
)


class Align(str, Enum):
    """Horizontal alignment of a column's cells."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def default_header(key: str) -> str:
    """Derive a display header from a field key ('join_date' -> 'Join Date')."""
    return key.replace("_", " ").title()


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Declares how one record field is shown and queried.

    Attributes:
        key: Field key, unique within a column set
        header: Display label (defaults to the key in title case)
        sortable: Whether clicking the header sorts by this column
        searchable: Whether the global search looks at this column
        align: Cell alignment
        render: Optional ``render(value, record)`` callable producing the
            displayed cell content
        width: Optional column width (number of pixels or CSS string)
    """

    key: str
    header: Optional[str] = None
    sortable: bool = False
    searchable: bool = True
    align: Align = Align.LEFT
    render: Optional[Callable[[Any, Any], Any]] = None
    width: Optional[Union[int, str]] = None

    def __post_init__(self):
        if not isinstance(self.key, str) or not self.key:
            raise ValueError(f"Column key must be a non-empty string, got {self.key!r}")
        if self.header is None:
            object.__setattr__(self, "header", default_header(self.key))
        if not isinstance(self.align, Align):
            try:
                object.__setattr__(self, "align", Align(self.align))
            except ValueError:
                raise ValueError(
                    f"Unknown alignment {self.align!r} for column '{self.key}'. "
                    f"Expected one of {[a.value for a in Align]}"
                ) from None

    @classmethod
    def from_dict(cls, definition: Dict[str, Any]) -> "ColumnDescriptor":
        """
        Build a descriptor from a plain dict.

        Accepts both the native keys and the Tabulator-style aliases
        ``field``, ``title`` and ``hozAlign``.
        """
        key = definition.get("key", definition.get("field"))
        return cls(
            key=key,
            header=definition.get("header", definition.get("title")),
            sortable=bool(definition.get("sortable", False)),
            searchable=definition.get("searchable", True) is not False,
            align=definition.get("align", definition.get("hozAlign", Align.LEFT)),
            render=definition.get("render"),
            width=definition.get("width"),
        )

    def value(self, record: Any) -> Any:
        """Raw field value of this column for a record."""
        return get_field(record, self.key)

    def format_cell(self, record: Any) -> Any:
        """Displayed cell content, using the render hint when present."""
        value = self.value(record)
        if self.render is not None:
            return self.render(value, record)
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Serializable column definition for the presentation layer."""
        definition: Dict[str, Any] = {
            "key": self.key,
            "header": self.header,
            "sortable": self.sortable,
            "searchable": self.searchable,
            "align": self.align.value,
        }
        if self.width is not None:
            definition["width"] = self.width
        return definition


ColumnLike = Union[ColumnDescriptor, Dict[str, Any]]


def normalize_columns(columns: Iterable[ColumnLike]) -> List[ColumnDescriptor]:
    """
    Convert column definitions to descriptors and check key uniqueness.

    Args:
        columns: ColumnDescriptor instances or dicts

    Returns:
        List of ColumnDescriptor

    Raises:
        ValueError: If two columns share a key
    """
    descriptors = []
    seen = set()
    for column in columns:
        if isinstance(column, dict):
            column = ColumnDescriptor.from_dict(column)
        elif not isinstance(column, ColumnDescriptor):
            raise TypeError(
                f"Column definitions must be ColumnDescriptor or dict, "
                f"got {type(column).__name__}"
            )
        if column.key in seen:
            raise ValueError(f"Duplicate column key '{column.key}'")
        seen.add(column.key)
        descriptors.append(column)
    return descriptors


def columns_from_schema(schema: pl.Schema) -> List[ColumnDescriptor]:
    """
    Auto-generate column descriptors from a polars schema.

    Every column is sortable; numeric columns are right aligned.
    """
    columns = []
    for name, dtype in zip(schema.names(), schema.dtypes()):
        align = Align.RIGHT if dtype in NUMERIC_DTYPES else Align.LEFT
        columns.append(ColumnDescriptor(key=name, sortable=True, align=align))
    return columns


def columns_from_records(records: Sequence) -> List[ColumnDescriptor]:
    """
    Auto-generate column descriptors from the first record.

    Only mapping records can be inspected; anything else yields no columns.
    """
    if not records or not isinstance(records[0], Mapping):
        return []
    return [
        ColumnDescriptor(
            key=str(key),
            sortable=True,
            align=(
                Align.RIGHT
                if isinstance(value, (int, float)) and not isinstance(value, bool)
                else Align.LEFT
            ),
        )
        for key, value in records[0].items()
    ]
