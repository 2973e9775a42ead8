# src/konstrain/checks/__init__.py
from konstrain.checks.base import BaseCheck, CheckKind
from konstrain.checks.registry import CHECK_REGISTRY, build_checks, get_check, register_check

__all__ = [
    "BaseCheck",
    "CheckKind",
    "CHECK_REGISTRY",
    "build_checks",
    "get_check",
    "register_check",
]
