# src/konstrain/profiling/dtypes.py
"""
Mapping from Polars dtypes to constraint data types, plus the column views
shared by the profiler and the checks.
"""

from __future__ import annotations

import polars as pl

from konstrain.types import DataType, STRIPPED_CHARS


def normalize_dtype(dtype: pl.DataType) -> DataType:
    """Normalize a Polars dtype to a constraint DataType."""
    if dtype == pl.String or dtype == pl.Categorical or dtype == pl.Enum:
        return DataType.STRING
    if dtype.is_integer():
        return DataType.INT
    if dtype.is_float() or dtype == pl.Decimal:
        return DataType.FLOAT
    if dtype == pl.Date or dtype == pl.Datetime:
        return DataType.DATE
    # Boolean, Null, nested and binary columns have no constraint kind
    return DataType.UNKNOWN


def text_view(series: pl.Series) -> pl.Series:
    """Series as text (categoricals and non-string columns are cast)."""
    if series.dtype == pl.String:
        return series
    return series.cast(pl.String)


def stripped_text_view(series: pl.Series) -> pl.Series:
    """Text view with the characters removed from allowed values stripped."""
    text = text_view(series)
    for ch in STRIPPED_CHARS:
        text = text.str.replace_all(ch, "", literal=True)
    return text


def numeric_view(series: pl.Series) -> pl.Series:
    """
    Float64 view used for value bounds.

    Dates are measured in days since the Unix epoch, datetimes in
    microseconds since the epoch. NaN is treated as missing.
    """
    dtype = series.dtype
    if dtype == pl.Date:
        view = series.to_physical().cast(pl.Float64)
    elif dtype == pl.Datetime:
        view = series.dt.epoch("us").cast(pl.Float64)
    else:
        view = series.cast(pl.Float64)
    return view.fill_nan(None)


def supports_length(series: pl.Series) -> bool:
    return normalize_dtype(series.dtype) is DataType.STRING


def supports_value(series: pl.Series) -> bool:
    kind = normalize_dtype(series.dtype)
    return kind.is_numeric or kind.is_temporal
