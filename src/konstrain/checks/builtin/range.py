from __future__ import annotations

import polars as pl

from konstrain.checks.base import BaseCheck, CheckKind
from konstrain.checks.registry import register_check
from konstrain.profiling.dtypes import numeric_view, supports_value
from konstrain.types import Constraint


class _ValueCheck(BaseCheck):
    """
    Value checks measure numeric and date columns on the same numeric view
    the profiler uses (dates as days, datetimes as microseconds since epoch).
    """

    def supports(self, series: pl.Series) -> bool:
        return supports_value(series)


@register_check(CheckKind.MIN_VALUE)
class MinValueCheck(_ValueCheck):
    def applies(self, constraint: Constraint) -> bool:
        return constraint.min_value is not None

    def evaluate(self, series: pl.Series, constraint: Constraint) -> int:
        return self._count(numeric_view(series) < constraint.min_value)


@register_check(CheckKind.MAX_VALUE)
class MaxValueCheck(_ValueCheck):
    def applies(self, constraint: Constraint) -> bool:
        return constraint.max_value is not None

    def evaluate(self, series: pl.Series, constraint: Constraint) -> int:
        return self._count(numeric_view(series) > constraint.max_value)
