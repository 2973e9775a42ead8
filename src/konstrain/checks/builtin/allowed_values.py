from __future__ import annotations

import polars as pl

from konstrain.checks.base import BaseCheck, CheckKind
from konstrain.checks.registry import register_check
from konstrain.profiling.dtypes import stripped_text_view
from konstrain.types import Constraint


@register_check(CheckKind.ALLOWED_VALUES)
class AllowedValuesCheck(BaseCheck):
    """
    Counts non-null cells outside the allowed set.

    Cells are compared as text with backslashes and double quotes stripped,
    the same normalization applied when the set was profiled.
    """

    def applies(self, constraint: Constraint) -> bool:
        return constraint.allowed_values is not None

    def evaluate(self, series: pl.Series, constraint: Constraint) -> int:
        allowed = list(constraint.allowed_values or ())
        text = stripped_text_view(series.drop_nulls())
        allowed_series = pl.Series("allowed", allowed, dtype=pl.String)
        return self._count(~text.is_in(allowed_series))
