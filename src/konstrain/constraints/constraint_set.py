# src/konstrain/constraints/constraint_set.py
"""
ConstraintSet - the named, ordered schema contract for a table.

A set is created once from a table snapshot, changed only through point
edits (``modify``) and persisted as JSON or YAML:

    {
      "name": "users",
      "set": [
        {"name": "age", "declared_type": "int", "nullable": false, ...},
        ...
      ]
    }
"""

from __future__ import annotations

import json
import os
import warnings
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import yaml
from pydantic import ValidationError

from konstrain.config.models import ConstraintSetSpec
from konstrain.errors import ConstraintEditWarning, ParseError, PersistenceError
from konstrain.logging import get_logger
from konstrain.profiling.profiler import ColumnProfiler
from konstrain.types import Constraint, DataType

from .editing import FIELD_EDITORS, EditableField

_logger = get_logger(__name__)

_YAML_SUFFIXES = (".yml", ".yaml")
DEFAULT_NAME = "constraints"


def _format_for(path: Path, default: str = "json") -> str:
    suffix = path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        return "yaml"
    if suffix == ".json":
        return "json"
    return default


def _atomic_write(path: Path, text: str) -> None:
    """Write via a temp file in the same directory; no partial file on failure."""
    temp_path = path.with_name(f".{path.name}.tmp")
    try:
        with temp_path.open("w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(temp_path, path)
    except OSError as e:
        if temp_path.exists():
            temp_path.unlink()
        raise PersistenceError(str(path), f"Failed to write: {e}") from e


class ConstraintSet:
    """Named, ordered collection of Constraints, unique by column name."""

    def __init__(self, name: str, constraints: Optional[List[Constraint]] = None):
        self.name = name
        self._constraints: List[Constraint] = []
        for constraint in constraints or []:
            if constraint.name in self:
                raise ValueError(f"Duplicate constraint for column '{constraint.name}'")
            self._constraints.append(constraint)

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_table(
        cls,
        table: Any,
        name: str = DEFAULT_NAME,
        *,
        workers: Optional[int] = None,
        profiler: Optional[ColumnProfiler] = None,
    ) -> "ConstraintSet":
        """Profile every column of ``table`` in column order."""
        profiler = profiler or ColumnProfiler()
        constraints = profiler.profile_table(table, workers=workers)
        _logger.info("Profiled %d columns into constraint set '%s'", len(constraints), name)
        return cls(name, constraints)

    @classmethod
    def from_dict(cls, data: Any, *, source: Optional[str] = None) -> "ConstraintSet":
        """
        Build from the persisted ``{name, set}`` structure.

        Raises:
            ParseError: If the structure or any constraint is invalid.
        """
        if not isinstance(data, dict):
            raise ParseError("constraint file must contain an object", source=source)
        try:
            spec = ConstraintSetSpec.model_validate(data)
        except ValidationError as e:
            raise ParseError(f"invalid constraint set: {e}", source=source) from e
        return cls(spec.name, [c.to_constraint() for c in spec.constraints])

    # ------------------------------------------------------------------ #
    # Collection protocol
    # ------------------------------------------------------------------ #

    @property
    def constraints(self) -> List[Constraint]:
        return list(self._constraints)

    @property
    def names(self) -> List[str]:
        return [c.name for c in self._constraints]

    def get(self, name: str) -> Optional[Constraint]:
        for constraint in self._constraints:
            if constraint.name == name:
                return constraint
        return None

    def __len__(self) -> int:
        return len(self._constraints)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self._constraints)

    def __contains__(self, name: object) -> bool:
        return any(c.name == name for c in self._constraints)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return self.name == other.name and self._constraints == other._constraints

    def __repr__(self) -> str:
        return f"ConstraintSet({self.name!r}, {len(self)} constraints)"

    # ------------------------------------------------------------------ #
    # Point edits
    # ------------------------------------------------------------------ #

    def modify(self, column_name: str, field: str, raw_value: str) -> bool:
        """
        Change one field of one constraint.

        Misuse (unknown column, unknown field, unparsable value, or a value
        that would break a constraint invariant) emits a
        ConstraintEditWarning and leaves the set unchanged.

        Returns:
            True if the constraint was updated.
        """
        index = next(
            (i for i, c in enumerate(self._constraints) if c.name == column_name), None
        )
        if index is None:
            return self._reject(f"No constraint for column '{column_name}'")

        try:
            editable = EditableField.from_str(field)
            editor = FIELD_EDITORS[editable]
            value = editor.parse(raw_value)
        except ParseError as e:
            return self._reject(f"Cannot edit '{column_name}': {e}")

        current = self._constraints[index]
        changes: Dict[str, Any] = {editor.attribute: value}
        if editable is EditableField.DATA_TYPE and value is not DataType.STRING:
            changes["allowed_values"] = None
        updated = replace(current, **changes)

        errors = updated.invariant_errors()
        if errors:
            return self._reject(f"Cannot edit '{column_name}': {'; '.join(errors)}")

        self._constraints[index] = updated
        _logger.info("Constraint '%s' updated: %s = %r", column_name, editable, value)
        return True

    @staticmethod
    def _reject(message: str) -> bool:
        _logger.warning(message)
        warnings.warn(message, ConstraintEditWarning, stacklevel=3)
        return False

    # ------------------------------------------------------------------ #
    # Serialization / persistence
    # ------------------------------------------------------------------ #

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "set": [c.to_dict() for c in self._constraints]}

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def save(
        self, path: Union[str, Path], fmt: Optional[str] = None, *, default_format: str = "json"
    ) -> None:
        """
        Persist the set. Format is picked from the suffix (``.yml``/``.yaml``
        for YAML, ``.json`` for JSON, otherwise ``default_format``) unless
        ``fmt`` is given.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        p = Path(path)
        fmt = fmt or _format_for(p, default_format)
        text = self.to_yaml() if fmt == "yaml" else self.to_json()
        _atomic_write(p, text)
        _logger.info("Saved constraint set '%s' to %s", self.name, p)

    @classmethod
    def load(
        cls, path: Union[str, Path], fmt: Optional[str] = None, *, default_format: str = "json"
    ) -> "ConstraintSet":
        """
        Load a set saved with ``save``.

        Raises:
            PersistenceError: If the file cannot be opened or read.
            ParseError: If the content is malformed.
        """
        p = Path(path)
        fmt = fmt or _format_for(p, default_format)
        try:
            with p.open("r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            raise PersistenceError(str(p), f"Failed to read: {e}") from e

        try:
            data = yaml.safe_load(text) if fmt == "yaml" else json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ParseError(f"malformed {fmt.upper()}: {e}", source=str(p)) from e

        constraint_set = cls.from_dict(data, source=str(p))
        _logger.info("Loaded constraint set '%s' (%d constraints)", constraint_set.name, len(constraint_set))
        return constraint_set
