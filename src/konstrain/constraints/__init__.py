# src/konstrain/constraints/__init__.py
from konstrain.constraints.constraint_set import ConstraintSet
from konstrain.constraints.editing import EditableField

__all__ = ["ConstraintSet", "EditableField"]
