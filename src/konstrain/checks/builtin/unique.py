from __future__ import annotations

import polars as pl

from konstrain.checks.base import BaseCheck, CheckKind
from konstrain.checks.registry import register_check
from konstrain.types import Constraint


@register_check(CheckKind.UNIQUE)
class UniqueCheck(BaseCheck):
    """
    Counts duplicate occurrences: non-null cells that are not part of the
    largest subset of distinct values. ``[1, 2, 2, 3, 3, 3]`` gives 3.

    Nulls are not considered duplicates of each other.
    """

    def applies(self, constraint: Constraint) -> bool:
        # Duplicates permitted: nothing to count
        return constraint.unique

    def evaluate(self, series: pl.Series, constraint: Constraint) -> int:
        non_null = series.drop_nulls()
        return int(non_null.len() - non_null.n_unique())
