# src/konstrain/config/__init__.py
from konstrain.config.models import ConstraintSetSpec, ConstraintSpec
from konstrain.config.settings import KonstrainConfig, find_config_file, load_config

__all__ = [
    "ConstraintSpec",
    "ConstraintSetSpec",
    "KonstrainConfig",
    "find_config_file",
    "load_config",
]
