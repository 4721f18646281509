"""Free-text search filtering of records."""

import hashlib
import math
from datetime import date, datetime, time
from typing import Any, Sequence

from ..core.columns import ColumnDescriptor


def to_search_text(value: Any) -> str:
    """
    Convert a field value to its canonical, locale-independent text form.

    - Booleans become "true"/"false"
    - Integral finite floats drop the trailing ".0" (3.0 -> "3")
    - Dates, datetimes and times use ISO format
    - Everything else uses str()

    Args:
        value: A non-null field value

    Returns:
        Text used for search matching and fallback comparison
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def matches_search(record: Any, columns: Sequence[ColumnDescriptor], needle: str) -> bool:
    """
    Check whether any searchable column of a record contains the needle.

    Args:
        record: The record to test
        columns: Column descriptors; non-searchable columns are skipped
        needle: Already case-folded search term

    Returns:
        True if at least one searchable, non-null field contains the needle
    """
    for column in columns:
        if column.searchable is False:
            continue
        value = column.value(record)
        if value is None:
            continue
        if needle in to_search_text(value).casefold():
            return True
    return False


def filter_records(
    records: Sequence, columns: Sequence[ColumnDescriptor], term: str
) -> Sequence:
    """
    Reduce records to those matching a search term.

    An empty term returns the input unchanged. Otherwise a record is kept
    when the canonical text of any searchable column contains the term,
    compared case-insensitively. Relative order is preserved.

    Args:
        records: Records to filter
        columns: Column descriptors declaring which fields are searchable
        term: Free-text search term

    Returns:
        The matching records, in input order
    """
    if not term:
        return records

    needle = term.casefold()
    return [record for record in records if matches_search(record, columns, needle)]


def compute_records_hash(records: Sequence) -> str:
    """
    Compute a cheap change-detection hash for a record sequence.

    Uses the sequence identity, its length and the first and last records,
    so it stays O(1) in the number of records. The caller must not mutate
    records in place between computations.

    Args:
        records: Record sequence to hash

    Returns:
        SHA256 hash string
    """
    hash_parts = [str(id(records)), str(len(records))]

    if len(records) > 0:
        hash_parts.append(repr(records[0]))
        hash_parts.append(repr(records[-1]))

    hash_input = "|".join(hash_parts).encode()
    return hashlib.sha256(hash_input).hexdigest()
