# src/konstrain/errors.py
"""
Exception types raised by Konstrain.

Every error derives from KonstrainError so callers can catch the whole family
in one place. Type mismatches are not errors: they are reported as a
``False`` type check on the Validation record.
"""

from __future__ import annotations

from typing import Optional


class KonstrainError(Exception):
    """Base class for all Konstrain errors."""


class MissingColumnError(KonstrainError, KeyError):
    """A constraint references a column that is absent from the table."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(column)

    def __str__(self) -> str:
        return f"Column '{self.column}' not found in table"


class ParseError(KonstrainError, ValueError):
    """A constraint file or a point-edit value could not be parsed."""

    def __init__(self, message: str, *, source: Optional[str] = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class PersistenceError(KonstrainError):
    """Opening, creating, reading or writing a file failed."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")

    def __str__(self) -> str:
        return f"{self.path}: {self.detail}"


class ConfigurationError(KonstrainError, ValueError):
    """Invalid destination, settings value or other caller-side configuration."""


class UnsupportedFormatError(ConfigurationError):
    """The table reader does not know how to read this file."""

    def __init__(self, path: str, supported: Optional[list] = None):
        self.path = path
        self.supported = supported or []
        msg = f"Unsupported file format: {path}"
        if self.supported:
            msg += f" (expected one of: {', '.join(self.supported)})"
        super().__init__(msg)


class InvalidDataError(KonstrainError, TypeError):
    """The object passed as a table cannot be turned into a DataFrame."""

    def __init__(self, data_type: str, detail: Optional[str] = None):
        self.data_type = data_type
        msg = f"Unsupported table type: {data_type}"
        if detail:
            msg += f". {detail}"
        super().__init__(msg)


class ConstraintEditWarning(UserWarning):
    """A point edit was rejected and left the constraint set unchanged."""


def format_error_for_cli(exc: BaseException) -> str:
    """Short, user-facing message for an exception."""
    if isinstance(exc, KonstrainError):
        return str(exc)
    if isinstance(exc, FileNotFoundError):
        return f"File not found: {exc.filename or exc}"
    return f"{type(exc).__name__}: {exc}"
