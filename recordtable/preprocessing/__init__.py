"""Pipeline stages: search filtering, sorting and pagination."""

from .filtering import compute_records_hash, filter_records, to_search_text
from .pagination import PageState, clamp_page, compute_total_pages, describe_range, page_window, paginate
from .sorting import SortConfig, SortDirection, compare_values, next_sort_config, sort_records

__all__ = [
    "filter_records",
    "to_search_text",
    "compute_records_hash",
    "sort_records",
    "compare_values",
    "next_sort_config",
    "SortConfig",
    "SortDirection",
    "paginate",
    "PageState",
    "compute_total_pages",
    "clamp_page",
    "page_window",
    "describe_range",
]
