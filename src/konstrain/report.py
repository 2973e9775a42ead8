# src/konstrain/report.py
"""
ValidationReport - the ordered result of one validation run.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import polars as pl

from konstrain.errors import ConfigurationError, PersistenceError
from konstrain.logging import get_logger
from konstrain.types import Validation

_logger = get_logger(__name__)

DEFAULT_EXPORT_EXTENSION = ".csv"

# Export header -> Validation field
EXPORT_COLUMNS: Dict[str, str] = {
    "Name": "name",
    "Data Type": "data_type",
    "Nullable": "nullable",
    "Unique": "unique",
    "Min Length": "min_length",
    "Max Length": "max_length",
    "Min Value": "min_value",
    "Max Value": "max_value",
    "Value Range": "allowed_values",
}

_EXPORT_SCHEMA = {
    header: (pl.String if f == "name" else pl.Boolean if f == "data_type" else pl.Int64)
    for header, f in EXPORT_COLUMNS.items()
}


class ValidationReport:
    """
    Per-column Validation records, in constraint set order.

    Reports are recomputed on every run and never persisted as contracts;
    ``export`` writes a flat CSV view for downstream tools.
    """

    def __init__(
        self,
        validations: List[Validation],
        *,
        constraint_set_name: str = "",
        row_count: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        self._validations = list(validations)
        self.constraint_set_name = constraint_set_name
        self.row_count = row_count
        self.duration_ms = duration_ms

    def __repr__(self) -> str:
        status = "PASSED" if self.passed else "FAILED"
        return f"ValidationReport({self.constraint_set_name!r}, {len(self)} columns, {status})"

    def __len__(self) -> int:
        return len(self._validations)

    def __iter__(self) -> Iterator[Validation]:
        return iter(self._validations)

    def __getitem__(self, index: int) -> Validation:
        return self._validations[index]

    @property
    def validations(self) -> List[Validation]:
        return list(self._validations)

    def get(self, name: str) -> Optional[Validation]:
        """Validation for a column name, or None."""
        for v in self._validations:
            if v.name == name:
                return v
        return None

    @property
    def passed(self) -> bool:
        return all(v.passed for v in self._validations)

    @property
    def violation_count(self) -> int:
        return sum(v.violation_count for v in self._validations)

    @property
    def failed(self) -> List[Validation]:
        return [v for v in self._validations if not v.passed]

    @property
    def missing_columns(self) -> List[str]:
        return [v.name for v in self._validations if v.column_missing]

    def to_rows(self) -> List[Dict[str, Any]]:
        """One dict per column, keyed by the export header names."""
        return [
            {header: getattr(v, attr) for header, attr in EXPORT_COLUMNS.items()}
            for v in self._validations
        ]

    def to_frame(self) -> pl.DataFrame:
        return pl.DataFrame(self.to_rows(), schema=_EXPORT_SCHEMA)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "constraint_set": self.constraint_set_name,
            "passed": self.passed,
            "violation_count": self.violation_count,
            "row_count": self.row_count,
            "duration_ms": self.duration_ms,
            "validations": [v.to_dict() for v in self._validations],
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def export(
        self,
        path: Union[str, Path],
        *,
        extension: str = DEFAULT_EXPORT_EXTENSION,
        delimiter: str = ",",
    ) -> None:
        """
        Write the report as delimited text, one row per column.

        Raises:
            ConfigurationError: If ``path`` does not end with ``extension``.
                Raised before anything is written.
            PersistenceError: If the file cannot be written.
        """
        p = Path(path)
        if p.suffix.lower() != extension.lower():
            raise ConfigurationError(
                f"Export destination must be a '{extension}' file, got '{p.name}'"
            )

        temp_path = p.with_name(f".{p.name}.tmp")
        try:
            self.to_frame().write_csv(temp_path, separator=delimiter)
            os.replace(temp_path, p)
        except (OSError, pl.exceptions.PolarsError) as e:
            if temp_path.exists():
                temp_path.unlink()
            raise PersistenceError(str(p), f"Failed to export report: {e}") from e

        _logger.info("Exported %d validation rows to %s", len(self), p)
