from __future__ import annotations

import polars as pl

from konstrain.checks.base import BaseCheck, CheckKind
from konstrain.checks.registry import register_check
from konstrain.profiling.dtypes import normalize_dtype
from konstrain.types import Constraint


@register_check(CheckKind.DATA_TYPE)
class DataTypeCheck(BaseCheck):
    """Observed column kind equals the declared kind. Never skipped."""

    def evaluate(self, series: pl.Series, constraint: Constraint) -> bool:
        return normalize_dtype(series.dtype) is constraint.declared_type
