# src/konstrain/constraints/editing.py
"""
Point-edit support: the fixed set of editable constraint fields and the
parser for each one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from konstrain.errors import ParseError
from konstrain.types import ALLOWED_VALUES_SEPARATOR, DataType, strip_value

_NONE_LITERALS = ("", "none", "null")
_TRUE_LITERALS = ("true", "yes", "1")
_FALSE_LITERALS = ("false", "no", "0")


class EditableField(str, Enum):
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

    @classmethod
    def from_str(cls, value: str) -> "EditableField":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ParseError(
                f"unknown field '{value}' "
                f"(expected one of: {', '.join(f.value for f in cls)})"
            ) from None


def _is_none(raw: str) -> bool:
    return raw.strip().lower() in _NONE_LITERALS


def parse_bool(raw: str) -> bool:
    key = raw.strip().lower()
    if key in _TRUE_LITERALS:
        return True
    if key in _FALSE_LITERALS:
        return False
    raise ParseError(f"'{raw}' is not a boolean (use true or false)")


def parse_data_type(raw: str) -> DataType:
    try:
        return DataType.from_str(raw)
    except ValueError:
        raise ParseError(
            f"'{raw}' is not a data type "
            f"(expected one of: {', '.join(t.value for t in DataType)})"
        ) from None


def parse_length(raw: str) -> Optional[int]:
    if _is_none(raw):
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        raise ParseError(f"'{raw}' is not an integer") from None
    if value < 0:
        raise ParseError(f"length must be non-negative, got {value}")
    return value


def parse_value(raw: str) -> Optional[float]:
    if _is_none(raw):
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        raise ParseError(f"'{raw}' is not a number") from None
    if not math.isfinite(value):
        raise ParseError(f"'{raw}' is not a finite number")
    return value


def parse_allowed_values(raw: str) -> Optional[Tuple[str, ...]]:
    """Parse a comma-separated list; stripping matches what profiling does."""
    if raw.strip().lower() in ("none", "null"):
        return None
    values = {strip_value(v.strip()) for v in raw.split(ALLOWED_VALUES_SEPARATOR.strip())}
    values.discard("")
    return tuple(sorted(values))


@dataclass(frozen=True)
class FieldEditor:
    """Constraint attribute an editable field writes to, and its parser."""

    attribute: str
    parse: Callable[[str], Any]


FIELD_EDITORS: Dict[EditableField, FieldEditor] = {
    EditableField.DATA_TYPE: FieldEditor("declared_type", parse_data_type),
    EditableField.NULLABLE: FieldEditor("nullable", parse_bool),
    EditableField.UNIQUE: FieldEditor("unique", parse_bool),
    EditableField.MIN_LENGTH: FieldEditor("min_length", parse_length),
    EditableField.MAX_LENGTH: FieldEditor("max_length", parse_length),
    EditableField.MIN_VALUE: FieldEditor("min_value", parse_value),
    EditableField.MAX_VALUE: FieldEditor("max_value", parse_value),
    EditableField.ALLOWED_VALUES: FieldEditor("allowed_values", parse_allowed_values),
}
