"""Pagination helpers for in-memory record slicing."""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

DEFAULT_PAGE_SIZE = 10

# Number of numbered page buttons shown by the pager
PAGE_WINDOW_SIZE = 5


@dataclass(frozen=True)
class PageState:
    """
    Pagination cursor.

    Attributes:
        current_page: 1-based page number
        page_size: Rows per page
    """

    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        if self.current_page < 1:
            raise ValueError(f"current_page must be >= 1, got {self.current_page}")


def compute_total_pages(total_rows: int, page_size: int) -> int:
    """Total number of pages; at least 1 even when there are no rows."""
    return max(1, math.ceil(total_rows / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a page number into [1, total_pages]."""
    return min(max(page, 1), max(total_pages, 1))


def page_slice(page_number: int, page_size: int) -> Tuple[int, int]:
    """Return start/end row offsets for a page."""
    start = (page_number - 1) * page_size
    return start, start + page_size


def paginate(records: Sequence, page_state: PageState) -> Tuple[Sequence, int]:
    """
    Slice one page out of the records.

    A page beyond the last one yields an empty slice; clamping is the
    caller's job.

    Args:
        records: Sorted records
        page_state: Current page and page size

    Returns:
        Tuple of (page rows, total pages)
    """
    total_pages = compute_total_pages(len(records), page_state.page_size)
    start, end = page_slice(page_state.current_page, page_state.page_size)
    return records[start:end], total_pages


def page_window(
    current_page: int, total_pages: int, size: int = PAGE_WINDOW_SIZE
) -> List[int]:
    """
    Page numbers to offer as buttons around the current page.

    Near the start the window is pinned to page 1, near the end to the
    last page, otherwise it is centred on the current page.

    Args:
        current_page: Current page number
        total_pages: Total number of pages
        size: Maximum number of buttons

    Returns:
        Ascending list of page numbers within [1, total_pages]
    """
    if total_pages <= size:
        return list(range(1, total_pages + 1))

    half = size // 2
    if current_page <= half + 1:
        first = 1
    elif current_page >= total_pages - half:
        first = total_pages - size + 1
    else:
        first = current_page - half

    return list(range(first, first + size))


def describe_range(start: int, end: int, total: int) -> str:
    """Human-readable page range, e.g. 'Showing 11 to 20 of 25 results'."""
    return f"Showing {start} to {end} of {total} results"
