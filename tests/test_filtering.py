"""Tests for free-text search filtering."""

from datetime import date, datetime

import pytest

from recordtable import ColumnDescriptor
from recordtable.preprocessing.filtering import (
    compute_records_hash,
    filter_records,
    to_search_text,
)


class TestToSearchText:
    """Canonical text conversion of field values."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Jane", "Jane"),
            (42, "42"),
            (3.0, "3"),
            (2.5, "2.5"),
            (True, "true"),
            (False, "false"),
            (date(2024, 1, 5), "2024-01-05"),
            (datetime(2024, 1, 5, 10, 30), "2024-01-05T10:30:00"),
            (float("inf"), "inf"),
        ],
    )
    def test_canonical_text(self, value, expected):
        assert to_search_text(value) == expected


class TestFilterRecords:
    """Tests for filter_records."""

    def test_empty_term_is_identity(self, users, user_columns):
        """An empty term returns the very same sequence."""
        assert filter_records(users, user_columns, "") is users

    def test_jane_matches_single_record(self, users, user_columns):
        result = filter_records(users, user_columns, "jane")

        assert len(result) == 1
        assert result[0]["name"] == "Jane Smith"

    def test_case_insensitive(self, users, user_columns):
        """'JANE' and 'jane' give the same result."""
        upper = filter_records(users, user_columns, "JANE")
        lower = filter_records(users, user_columns, "jane")

        assert upper == lower
        assert upper[0] is users[1]

    def test_matches_within_searchable_text(self, users, user_columns):
        result = filter_records(users, user_columns, "user 09")

        assert [r["id"] for r in result] == [9]

    def test_only_non_searchable_match_yields_nothing(self):
        records = [{"code": "ABC", "label": "x"}]
        columns = [
            ColumnDescriptor(key="code", searchable=False),
            ColumnDescriptor(key="label"),
        ]

        assert filter_records(records, columns, "abc") == []

    def test_preserves_relative_order(self, users, user_columns):
        result = filter_records(users, user_columns, "admin")

        ids = [r["id"] for r in result]
        assert ids == sorted(ids)
        assert all(r["role"] == "admin" for r in result)

    def test_result_is_subset_with_match(self, users, user_columns):
        """Every returned record contains the term in a searchable column."""
        term = "0"
        result = filter_records(users, user_columns, term)

        for record in result:
            assert record in users
            assert any(
                col.searchable
                and record.get(col.key) is not None
                and term in to_search_text(record[col.key]).casefold()
                for col in user_columns
            )

    def test_null_and_absent_fields_do_not_match(self):
        records = [
            {"name": None, "city": "Oslo"},
            {"city": "Bergen"},
            {"name": "Nora", "city": None},
        ]
        columns = [ColumnDescriptor(key="name"), ColumnDescriptor(key="city")]

        assert filter_records(records, columns, "no") == [records[2]]

    def test_unknown_column_key_is_skipped(self):
        records = [{"name": "Ann"}]
        columns = [ColumnDescriptor(key="missing"), ColumnDescriptor(key="name")]

        assert filter_records(records, columns, "ann") == records

    def test_non_string_values_are_searched(self):
        records = [
            {"score": 3.0, "active": True},
            {"score": 12, "active": False},
        ]
        columns = [ColumnDescriptor(key="score"), ColumnDescriptor(key="active")]

        assert filter_records(records, columns, "3") == [records[0]]
        assert filter_records(records, columns, "TRUE") == [records[0]]
        assert filter_records(records, columns, "3.0") == []

    def test_object_records(self):
        """Records may be plain objects read by attribute."""

        class User:
            def __init__(self, name):
                self.name = name

        records = [User("Jane"), User("John")]
        columns = [ColumnDescriptor(key="name")]

        assert filter_records(records, columns, "jan") == [records[0]]

    def test_no_match_returns_empty(self, users, user_columns):
        assert filter_records(users, user_columns, "zzz") == []


class TestComputeRecordsHash:
    """Tests for the memoization hash."""

    def test_same_sequence_same_hash(self, users):
        assert compute_records_hash(users) == compute_records_hash(users)

    def test_different_sequence_different_hash(self, users):
        assert compute_records_hash(users) != compute_records_hash(list(users))

    def test_empty_sequence(self):
        assert isinstance(compute_records_hash([]), str)
