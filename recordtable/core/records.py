"""Record ingestion and field access."""

from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Union

import numpy as np
import pandas as pd
import polars as pl

RecordsLike = Union[Sequence, pl.DataFrame, pl.LazyFrame, pd.DataFrame]


def get_field(record: Any, key: str) -> Any:
    """
    Read a field from a record.

    Mappings are read with ``.get``; any other object is read by attribute.
    A missing field reads as None and never raises.

    Args:
        record: The record to read from
        key: Field name

    Returns:
        The field value, or None if absent
    """
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _to_python_scalar(value: Any) -> Any:
    """Convert numpy/pandas scalars to plain Python values."""
    if value is None:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def _pandas_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    return [
        {str(col): _to_python_scalar(value) for col, value in row.items()}
        for row in df.to_dict("records")
    ]


def to_records(data: RecordsLike) -> Sequence:
    """
    Normalize supported data inputs to a sequence of records.

    Polars and pandas frames are converted to lists of dicts. Plain
    sequences are returned as-is so that the caller's records keep their
    identity (selection callbacks hand back the caller's own objects).

    Args:
        data: Sequence of records, polars DataFrame/LazyFrame or pandas DataFrame

    Returns:
        Sequence of records

    Raises:
        TypeError: If the data type is not supported
    """
    if isinstance(data, pl.LazyFrame):
        return data.collect().to_dicts()
    if isinstance(data, pl.DataFrame):
        return data.to_dicts()
    if isinstance(data, pd.DataFrame):
        return _pandas_to_records(data)
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise TypeError(
            f"Unsupported data type {type(data).__name__}. "
            "Provide a sequence of records, a polars DataFrame/LazyFrame "
            "or a pandas DataFrame."
        )
    return data
