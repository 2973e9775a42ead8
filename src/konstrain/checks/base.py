# src/konstrain/checks/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import polars as pl

from konstrain.types import CheckValue, Constraint


class CheckKind(str, Enum):
    """
    Kinds of per-column checks. Values match the Validation field names.
    """

    DATA_TYPE = "data_type"
    NULLABLE = "nullable"
    UNIQUE = "unique"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MIN_VALUE = "min_value"
    MAX_VALUE = "max_value"
    ALLOWED_VALUES = "allowed_values"

    def __str__(self) -> str:
        return self.value


class BaseCheck(ABC):
    """
    Abstract base class for column checks.

    A check first decides whether it applies to a constraint; when it does
    not, the Validator records None ("not applicable") for it. Otherwise
    ``evaluate`` returns a violation count, or a boolean for the type check.
    """

    kind: CheckKind

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.kind})"

    def __repr__(self) -> str:
        return str(self)

    def applies(self, constraint: Constraint) -> bool:
        """Whether the constraint enables this check. Default: always."""
        return True

    def supports(self, series: pl.Series) -> bool:
        """Whether the observed column can be measured by this check."""
        return True

    @abstractmethod
    def evaluate(self, series: pl.Series, constraint: Constraint) -> CheckValue:
        """Run the check on the column's data."""
        ...

    def run(self, series: pl.Series, constraint: Constraint) -> CheckValue:
        if not self.applies(constraint) or not self.supports(series):
            return None
        return self.evaluate(series, constraint)

    @staticmethod
    def _count(mask: pl.Series) -> int:
        """Number of True cells in a boolean mask; nulls count as False."""
        return int(mask.fill_null(False).sum())
