# src/konstrain/profiling/profiler.py
"""
ColumnProfiler - infer one Constraint per column from observed data.

The profiler only reads an in-memory Polars DataFrame. Columns are profiled
independently, so a table can be profiled on a thread pool with the same
result as the sequential pass.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional

import polars as pl

from konstrain.connectors.reader import coerce_table
from konstrain.logging import get_logger, log_exception
from konstrain.types import Constraint, DataType, strip_value

from .dtypes import normalize_dtype, numeric_view, text_view

_logger = get_logger(__name__)


def _as_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _as_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


class ColumnProfiler:
    """
    Infers a Constraint from a single column.

    Usage:
        profiler = ColumnProfiler()
        constraint = profiler.profile(df, "age")
        constraints = profiler.profile_table(df, workers=4)
    """

    def profile(self, table: Any, column_name: str) -> Constraint:
        """
        Profile one column.

        A column that is absent from the table yields a neutral constraint
        (type unknown, not nullable, not unique, no bounds) instead of an error.
        """
        df = coerce_table(table)
        if column_name not in df.columns:
            _logger.warning("Column '%s' not found; using neutral constraint", column_name)
            return Constraint.neutral(column_name)
        return self._profile_series(df.get_column(column_name))

    def profile_table(self, table: Any, workers: Optional[int] = None) -> List[Constraint]:
        """Profile every column in table order."""
        df = coerce_table(table)
        columns = df.columns

        if workers and workers > 1 and len(columns) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                return list(pool.map(lambda c: self._profile_isolated(df, c), columns))
        return [self._profile_isolated(df, c) for c in columns]

    def _profile_isolated(self, df: pl.DataFrame, column_name: str) -> Constraint:
        try:
            return self._profile_series(df.get_column(column_name))
        except Exception as e:
            log_exception(_logger, "Failed to profile column", e, context=column_name)
            return Constraint.neutral(column_name)

    def _profile_series(self, series: pl.Series) -> Constraint:
        declared_type = normalize_dtype(series.dtype)
        non_null = series.drop_nulls()

        constraint = Constraint(
            name=series.name,
            declared_type=declared_type,
            nullable=series.null_count() > 0,
            unique=non_null.n_unique() == non_null.len(),
        )

        if declared_type is DataType.STRING:
            text = text_view(non_null)
            lengths = text.str.len_chars()
            constraint.min_length = _as_int(lengths.min())
            constraint.max_length = _as_int(lengths.max())
            constraint.allowed_values = tuple(
                sorted({strip_value(v) for v in text.unique().to_list()})
            )
        elif declared_type.is_numeric or declared_type.is_temporal:
            values = numeric_view(non_null)
            constraint.min_value = _as_float(values.min())
            constraint.max_value = _as_float(values.max())

        _logger.debug(
            "Profiled column '%s' as %s (nullable=%s, unique=%s)",
            constraint.name,
            constraint.declared_type,
            constraint.nullable,
            constraint.unique,
        )
        return constraint


def profile(table: Any, column_name: str) -> Constraint:
    """Profile one column with a default ColumnProfiler."""
    return ColumnProfiler().profile(table, column_name)
