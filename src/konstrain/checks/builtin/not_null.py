from __future__ import annotations

import polars as pl

from konstrain.checks.base import BaseCheck, CheckKind
from konstrain.checks.registry import register_check
from konstrain.types import Constraint


@register_check(CheckKind.NULLABLE)
class NotNullCheck(BaseCheck):
    def applies(self, constraint: Constraint) -> bool:
        # Nulls permitted: nothing to count
        return not constraint.nullable

    def evaluate(self, series: pl.Series, constraint: Constraint) -> int:
        return int(series.null_count())
