"""The view pipeline: filter -> sort -> paginate."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..preprocessing.filtering import filter_records
from ..preprocessing.pagination import PageState, clamp_page, compute_total_pages, describe_range, paginate
from ..preprocessing.sorting import SortConfig, sort_records
from .columns import ColumnDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisibleResult:
    """
    The currently visible page and its metadata.

    Attributes:
        rows: Records on the current page
        total_filtered_count: Number of records after search filtering
        total_pages: Number of pages (at least 1)
        current_page: Effective page number after clamping
        page_size: Rows per page (equals the row count when pagination is off)
        page_range_start: 1-based index of the first row on the page (0 if empty)
        page_range_end: 1-based index of the last row on the page (0 if empty)
    """

    rows: Sequence
    total_filtered_count: int
    total_pages: int
    current_page: int
    page_size: int
    page_range_start: int
    page_range_end: int

    @property
    def is_empty(self) -> bool:
        """True when no record survived filtering; show the empty message."""
        return self.total_filtered_count == 0

    def describe_range(self) -> str:
        return describe_range(
            self.page_range_start, self.page_range_end, self.total_filtered_count
        )

    def pagination_metadata(self) -> Dict[str, Any]:
        return {
            "page": self.current_page,
            "page_size": self.page_size,
            "total_rows": self.total_filtered_count,
            "total_pages": self.total_pages,
            "range_start": self.page_range_start,
            "range_end": self.page_range_end,
        }

    def to_pandas(self, columns: Sequence[ColumnDescriptor]) -> pd.DataFrame:
        """
        Page rows as a pandas DataFrame of formatted cells.

        Column labels are the column headers, in column order.
        """
        data: Dict[str, List[Any]] = {
            column.header: [column.format_cell(row) for row in self.rows]
            for column in columns
        }
        return pd.DataFrame(data, columns=[column.header for column in columns])


def compute_view(
    records: Sequence,
    columns: Sequence[ColumnDescriptor],
    search_term: str,
    sort_config: Optional[SortConfig],
    page_state: PageState,
    pagination_enabled: bool = True,
) -> VisibleResult:
    """
    Compute the visible page from raw records and view parameters.

    Always runs the full pipeline in a fixed order: search filter, sort,
    then pagination. A current page beyond the last page is clamped to the
    last page.

    Args:
        records: All records
        columns: Column descriptors
        search_term: Free-text search term ("" disables filtering)
        sort_config: Active sort, or None
        page_state: Pagination cursor
        pagination_enabled: If False, all rows form one page

    Returns:
        VisibleResult for the presentation layer
    """
    filtered = filter_records(records, columns, search_term)
    ordered = sort_records(filtered, sort_config)
    total = len(ordered)

    if not pagination_enabled:
        return VisibleResult(
            rows=list(ordered),
            total_filtered_count=total,
            total_pages=1,
            current_page=1,
            page_size=total,
            page_range_start=1 if total else 0,
            page_range_end=total,
        )

    total_pages = compute_total_pages(total, page_state.page_size)
    current_page = clamp_page(page_state.current_page, total_pages)
    if current_page != page_state.current_page:
        logger.debug(
            "Clamped page %d to %d (total pages %d)",
            page_state.current_page,
            current_page,
            total_pages,
        )
        page_state = PageState(current_page, page_state.page_size)

    rows, _ = paginate(ordered, page_state)

    if total:
        range_start = (current_page - 1) * page_state.page_size + 1
        range_end = min(current_page * page_state.page_size, total)
    else:
        range_start = range_end = 0

    return VisibleResult(
        rows=list(rows),
        total_filtered_count=total,
        total_pages=total_pages,
        current_page=current_page,
        page_size=page_state.page_size,
        page_range_start=range_start,
        page_range_end=range_end,
    )
