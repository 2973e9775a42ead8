# src/konstrain/engine/__init__.py
from konstrain.engine.validator import Validator, validate

__all__ = ["Validator", "validate"]
