# src/konstrain/engine/validator.py
"""
Validator - check a table against a ConstraintSet.

Each constraint yields one Validation record. Checks run independently:
a missing column turns every check for that constraint into None, and an
unexpected error in one check or one column is logged without stopping
the others.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import polars as pl

from konstrain.checks.base import BaseCheck
from konstrain.checks.registry import build_checks
from konstrain.connectors.reader import coerce_table
from konstrain.constraints.constraint_set import ConstraintSet
from konstrain.errors import MissingColumnError
from konstrain.logging import get_logger, log_exception
from konstrain.report import ValidationReport
from konstrain.types import CheckValue, Constraint, Validation

_logger = get_logger(__name__)


class Validator:
    """
    Runs every registered check for every constraint.

    Usage:
        report = Validator().validate(df, constraint_set)
        report = Validator(workers=4).validate(df, constraint_set)
    """

    def __init__(
        self,
        *,
        workers: Optional[int] = None,
        checks: Optional[List[BaseCheck]] = None,
    ):
        self.workers = workers
        self.checks: List[BaseCheck] = checks if checks is not None else build_checks()

    def validate(self, table: Any, constraint_set: ConstraintSet) -> ValidationReport:
        df = coerce_table(table)
        constraints = constraint_set.constraints
        t0 = time.perf_counter()

        if self.workers and self.workers > 1 and len(constraints) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                validations = list(
                    pool.map(lambda c: self._validate_isolated(df, c), constraints)
                )
        else:
            validations = [self._validate_isolated(df, c) for c in constraints]

        duration_ms = int((time.perf_counter() - t0) * 1000)
        report = ValidationReport(
            validations,
            constraint_set_name=constraint_set.name,
            row_count=df.height,
            duration_ms=duration_ms,
        )
        _logger.info(
            "Validated %d columns of '%s' in %d ms (%d violations)",
            len(validations),
            constraint_set.name,
            duration_ms,
            report.violation_count,
        )
        return report

    def validate_column(self, table: Any, constraint: Constraint) -> Validation:
        """
        Validate one column.

        Raises:
            MissingColumnError: If the column is not in the table.
        """
        series = self._get_series(coerce_table(table), constraint.name)
        values: Dict[str, CheckValue] = {
            str(check.kind): self._run_check(check, series, constraint)
            for check in self.checks
        }
        return Validation(name=constraint.name, **values)

    def _validate_isolated(self, df: pl.DataFrame, constraint: Constraint) -> Validation:
        try:
            return self.validate_column(df, constraint)
        except MissingColumnError as e:
            _logger.warning("%s; all checks for this constraint are not applicable", e)
            return Validation.not_applicable(constraint.name, column_missing=True)
        except Exception as e:
            log_exception(_logger, "Failed to validate column", e, context=constraint.name)
            return Validation.not_applicable(constraint.name)

    @staticmethod
    def _get_series(df: pl.DataFrame, column: str) -> pl.Series:
        if column not in df.columns:
            raise MissingColumnError(column)
        return df.get_column(column)

    @staticmethod
    def _run_check(check: BaseCheck, series: pl.Series, constraint: Constraint) -> CheckValue:
        try:
            return check.run(series, constraint)
        except Exception as e:
            log_exception(_logger, f"Check {check.kind} failed", e, context=constraint.name)
            return None


def validate(
    table: Any,
    constraint_set: ConstraintSet,
    *,
    workers: Optional[int] = None,
) -> ValidationReport:
    """Validate ``table`` against ``constraint_set`` with the builtin checks."""
    return Validator(workers=workers).validate(table, constraint_set)
