from __future__ import annotations

import polars as pl

from konstrain.checks.base import BaseCheck, CheckKind
from konstrain.checks.registry import register_check
from konstrain.profiling.dtypes import supports_length, text_view
from konstrain.types import Constraint


class _LengthCheck(BaseCheck):
    """Length checks only measure string columns; nulls are ignored."""

    def supports(self, series: pl.Series) -> bool:
        return supports_length(series)

    @staticmethod
    def _lengths(series: pl.Series) -> pl.Series:
        return text_view(series).str.len_chars()


@register_check(CheckKind.MIN_LENGTH)
class MinLengthCheck(_LengthCheck):
    def applies(self, constraint: Constraint) -> bool:
        return constraint.min_length is not None

    def evaluate(self, series: pl.Series, constraint: Constraint) -> int:
        return self._count(self._lengths(series) < constraint.min_length)


@register_check(CheckKind.MAX_LENGTH)
class MaxLengthCheck(_LengthCheck):
    def applies(self, constraint: Constraint) -> bool:
        return constraint.max_length is not None

    def evaluate(self, series: pl.Series, constraint: Constraint) -> int:
        return self._count(self._lengths(series) > constraint.max_length)
