"""Pytest configuration and shared fixtures for recordtable tests."""

from typing import Any, Dict, List
from unittest.mock import patch

import polars as pl
import pytest

from recordtable import ColumnDescriptor
from recordtable.core.state import reset_default_state_manager


class MockSessionState(dict):
    """Mock Streamlit session_state that behaves like a dict."""
    pass


@pytest.fixture
def mock_streamlit():
    """
    Mock Streamlit's session_state for testing.

    This fixture patches st.session_state to allow testing the StateManager
    and the bridge without running a full Streamlit server.
    """
    mock_session_state = MockSessionState()

    with patch('streamlit.session_state', mock_session_state):
        yield mock_session_state

    reset_default_state_manager()


@pytest.fixture
def users() -> List[Dict[str, Any]]:
    """25 users; exactly one of them is named 'Jane Smith'."""
    roles = ["admin", "editor", "viewer"]
    records = []
    for i in range(1, 26):
        records.append({
            "id": i,
            "name": f"User {i:02d}",
            "email": f"user{i:02d}@example.com",
            "role": roles[i % 3],
            "joinDate": f"2023-{(i % 12) + 1:02d}-{(i % 28) + 1:02d}",
        })
    records[1]["name"] = "Jane Smith"
    records[1]["email"] = "jane.smith@example.com"
    return records


@pytest.fixture
def user_columns() -> List[ColumnDescriptor]:
    """Column set for the users fixture."""
    return [
        ColumnDescriptor(key="id", header="ID", sortable=True, searchable=False, align="right"),
        ColumnDescriptor(key="name", header="Name", sortable=True),
        ColumnDescriptor(key="email", header="Email"),
        ColumnDescriptor(key="role", header="Role", sortable=True),
        ColumnDescriptor(key="joinDate", header="Join Date", sortable=True),
    ]


@pytest.fixture
def dated_records() -> List[Dict[str, Any]]:
    """Five records with distinct join dates, not in date order."""
    return [
        {"id": 1, "name": "Carol", "joinDate": "2023-03-15"},
        {"id": 2, "name": "Alice", "joinDate": "2021-07-01"},
        {"id": 3, "name": "Eve", "joinDate": "2024-01-20"},
        {"id": 4, "name": "Bob", "joinDate": "2022-11-30"},
        {"id": 5, "name": "Dan", "joinDate": "2020-05-05"},
    ]


@pytest.fixture
def dated_columns() -> List[ColumnDescriptor]:
    return [
        ColumnDescriptor(key="id", sortable=True),
        ColumnDescriptor(key="name", sortable=True),
        ColumnDescriptor(key="joinDate", header="Joined", sortable=True),
    ]


@pytest.fixture
def sample_polars_data() -> pl.DataFrame:
    """Small polars frame for ingestion tests."""
    return pl.DataFrame({
        "id": [1, 2, 3],
        "mass": [500.5, 600.6, None],
        "name": ["peak_a", "peak_b", "peak_c"],
    })
