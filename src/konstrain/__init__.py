# src/konstrain/__init__.py
"""
Konstrain - schema contracts for tabular data

Usage:
    # CLI
    $ konstrain profile data.csv --save-constraints users.json
    $ konstrain modify users.json --set age.nullable=true
    $ konstrain validate new_data.csv --validate-against users.json --export-output report.csv

    # Python API - infer a contract
    import konstrain
    constraints = konstrain.infer(df, name="users")
    constraints.modify("age", "nullable", "true")
    constraints.save("users.json")

    # Python API - check data against it
    report = konstrain.validate(new_df, "users.json")
    if not report.passed:
        report.export("report.csv")
"""

from pathlib import Path
from typing import Any, Optional, Union

from konstrain.version import VERSION as __version__

from konstrain.checks.base import CheckKind
from konstrain.config.settings import KonstrainConfig, load_config
from konstrain.connectors.reader import read_table
from konstrain.constraints.constraint_set import ConstraintSet
from konstrain.constraints.editing import EditableField
from konstrain.engine.validator import Validator
from konstrain.errors import (
    ConfigurationError,
    ConstraintEditWarning,
    InvalidDataError,
    KonstrainError,
    MissingColumnError,
    ParseError,
    PersistenceError,
    UnsupportedFormatError,
)
from konstrain.logging import configure_logging
from konstrain.profiling.profiler import ColumnProfiler, profile
from konstrain.report import ValidationReport
from konstrain.types import Constraint, DataType, Validation


def _as_table(data: Any) -> Any:
    if isinstance(data, (str, Path)):
        return read_table(data)
    return data


def infer(
    data: Any,
    name: Optional[str] = None,
    *,
    workers: Optional[int] = None,
) -> ConstraintSet:
    """
    Profile a table into a ConstraintSet.

    Args:
        data: Polars/pandas DataFrame, list of records, dict of columns,
            or a path to a data file.
        name: Constraint set name (defaults to the file stem for paths).
        workers: Profile columns on a thread pool of this size.
    """
    if name is None:
        name = Path(data).stem if isinstance(data, (str, Path)) else "constraints"
    return ConstraintSet.from_table(_as_table(data), name=name, workers=workers)


def load(path: Union[str, Path]) -> ConstraintSet:
    """Load a saved ConstraintSet (.json, .yml, .yaml)."""
    return ConstraintSet.load(path)


def validate(
    data: Any,
    constraints: Union[ConstraintSet, str, Path],
    *,
    workers: Optional[int] = None,
) -> ValidationReport:
    """
    Validate a table against a ConstraintSet or a saved constraint file.

    Returns:
        ValidationReport with one Validation per constraint.
    """
    if not isinstance(constraints, ConstraintSet):
        constraints = ConstraintSet.load(constraints)
    return Validator(workers=workers).validate(_as_table(data), constraints)


__all__ = [
    "__version__",
    # API
    "infer",
    "load",
    "validate",
    "profile",
    "read_table",
    # Types
    "CheckKind",
    "ColumnProfiler",
    "Constraint",
    "ConstraintSet",
    "DataType",
    "EditableField",
    "Validation",
    "ValidationReport",
    "Validator",
    # Config / logging
    "KonstrainConfig",
    "load_config",
    "configure_logging",
    # Errors
    "KonstrainError",
    "ConfigurationError",
    "ConstraintEditWarning",
    "InvalidDataError",
    "MissingColumnError",
    "ParseError",
    "PersistenceError",
    "UnsupportedFormatError",
]
