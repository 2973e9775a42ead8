# src/konstrain/types.py
"""
Core data types: column constraints and per-column validation records.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class DataType(str, Enum):
    """Normalized column kinds a constraint can declare."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    DATE = "date"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def is_numeric(self) -> bool:
        return self in (DataType.INT, DataType.FLOAT)

    @property
    def is_string(self) -> bool:
        return self is DataType.STRING

    @property
    def is_temporal(self) -> bool:
        return self is DataType.DATE

    @classmethod
    def from_str(cls, value: str) -> "DataType":
        """Parse a type name, accepting ``str`` as an alias for ``string``."""
        key = value.strip().lower()
        if key == "str":
            key = "string"
        return cls(key)


# Characters removed from allowed values when rendering and comparing.
STRIPPED_CHARS = ("\\", '"')
ALLOWED_VALUES_SEPARATOR = ", "


def strip_value(value: str) -> str:
    """Remove backslashes and double quotes from a categorical value."""
    for ch in STRIPPED_CHARS:
        value = value.replace(ch, "")
    return value


@dataclass
class Constraint:
    """Declarative expectation for one column."""

    name: str
    declared_type: DataType = DataType.UNKNOWN
    nullable: bool = False
    unique: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    allowed_values: Optional[Tuple[str, ...]] = None

    @classmethod
    def neutral(cls, name: str) -> "Constraint":
        """Constraint for a column that could not be observed."""
        return cls(name=name)

    @property
    def allowed_values_text(self) -> Optional[str]:
        """Allowed values as a single comma-joined string."""
        if self.allowed_values is None:
            return None
        return ALLOWED_VALUES_SEPARATOR.join(self.allowed_values)

    def invariant_errors(self) -> list:
        """Return a list of broken invariants (empty when consistent)."""
        errors = []
        for key in ("min_length", "max_length"):
            value = getattr(self, key)
            if value is not None and value < 0:
                errors.append(f"{key} must be non-negative, got {value}")
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            errors.append(
                f"min_length ({self.min_length}) must be <= max_length ({self.max_length})"
            )
        if (
            self.min_value is not None
            and self.max_value is not None
            and self.min_value > self.max_value
        ):
            errors.append(
                f"min_value ({self.min_value}) must be <= max_value ({self.max_value})"
            )
        if self.allowed_values is not None and not self.declared_type.is_string:
            errors.append(
                f"allowed_values is only valid for string columns, not {self.declared_type}"
            )
        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the persisted field names; unset fields become None."""
        d = asdict(self)
        d["declared_type"] = self.declared_type.value
        if self.allowed_values is not None:
            d["allowed_values"] = list(self.allowed_values)
        return d


# Value of one check: a count, a pass/fail flag (type check) or None when
# the check does not apply.
CheckValue = Union[int, bool, None]


@dataclass
class Validation:
    """
    Outcome of checking one column against its constraint.

    ``data_type`` is a boolean (observed type matches the declared type);
    every other field is a violation count. ``None`` means the check was not
    applicable, which is distinct from a count of zero.
    """

    name: str
    data_type: Optional[bool] = None
    nullable: Optional[int] = None
    unique: Optional[int] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    allowed_values: Optional[int] = None

    # Set when the referenced column was not present in the table
    column_missing: bool = field(default=False, compare=False)

    @classmethod
    def not_applicable(cls, name: str, column_missing: bool = False) -> "Validation":
        return cls(name=name, column_missing=column_missing)

    def counts(self) -> Dict[str, Optional[int]]:
        """Count-valued checks keyed by check name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("name", "data_type", "column_missing")
        }

    @property
    def violation_count(self) -> int:
        """Total of all applicable counts."""
        return sum(v for v in self.counts().values() if v is not None)

    @property
    def passed(self) -> bool:
        """True when no count is positive and the type check did not fail."""
        return self.data_type is not False and self.violation_count == 0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d.pop("column_missing")
        return d
