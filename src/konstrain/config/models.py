# src/konstrain/config/models.py
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from konstrain.types import Constraint, DataType


class ConstraintSpec(BaseModel):
    """
    Declarative specification of one column constraint, as stored on disk.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Column name.")
    declared_type: DataType = Field(DataType.UNKNOWN, description="Expected column kind.")
    nullable: bool = Field(False, description="Whether null cells are permitted.")
    unique: bool = Field(False, description="Whether non-null values must be distinct.")
    min_length: Optional[int] = Field(None, ge=0, description="Minimum string length.")
    max_length: Optional[int] = Field(None, ge=0, description="Maximum string length.")
    min_value: Optional[float] = Field(None, description="Minimum numeric/date value.")
    max_value: Optional[float] = Field(None, description="Maximum numeric/date value.")
    allowed_values: Optional[List[str]] = Field(
        None, description="Permitted values for string columns."
    )

    @field_validator("declared_type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return DataType.from_str(value)
            except ValueError:
                raise ValueError(
                    f"unknown data type '{value}' "
                    f"(expected one of: {', '.join(t.value for t in DataType)})"
                ) from None
        return value

    @model_validator(mode="after")
    def _check_invariants(self) -> "ConstraintSpec":
        errors = self.to_constraint().invariant_errors()
        if errors:
            raise ValueError("; ".join(errors))
        return self

    def to_constraint(self) -> Constraint:
        return Constraint(
            name=self.name,
            declared_type=self.declared_type,
            nullable=self.nullable,
            unique=self.unique,
            min_length=self.min_length,
            max_length=self.max_length,
            min_value=self.min_value,
            max_value=self.max_value,
            allowed_values=(
                tuple(self.allowed_values) if self.allowed_values is not None else None
            ),
        )


class ConstraintSetSpec(BaseModel):
    """Top-level constraint file: ``{name, set: [...]}``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    constraints: List[ConstraintSpec] = Field(default_factory=list, alias="set")

    @model_validator(mode="after")
    def _check_unique_names(self) -> "ConstraintSetSpec":
        seen = set()
        for spec in self.constraints:
            if spec.name in seen:
                raise ValueError(f"duplicate constraint for column '{spec.name}'")
            seen.add(spec.name)
        return self
