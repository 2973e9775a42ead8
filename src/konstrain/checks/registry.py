# src/konstrain/checks/registry.py
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Type

from .base import CheckKind

if TYPE_CHECKING:
    from .base import BaseCheck


# Registry: check kind -> check class
CHECK_REGISTRY: Dict[CheckKind, Type["BaseCheck"]] = {}


def register_check(kind: CheckKind) -> Callable[[Type["BaseCheck"]], Type["BaseCheck"]]:
    """
    Decorator to register a check class under its kind.
    """

    def deco(cls: Type["BaseCheck"]) -> Type["BaseCheck"]:
        if kind in CHECK_REGISTRY:
            raise ValueError(f"Check '{kind}' is already registered.")
        cls.kind = kind
        CHECK_REGISTRY[kind] = cls
        return cls

    return deco


def get_check(kind: CheckKind) -> Type["BaseCheck"]:
    register_default_checks()
    return CHECK_REGISTRY[kind]


def build_checks() -> List["BaseCheck"]:
    """Instantiate one check per kind, in CheckKind declaration order."""
    register_default_checks()
    return [CHECK_REGISTRY[kind]() for kind in CheckKind]


def register_default_checks() -> None:
    """
    Import the builtin checks so their @register_check decorators run.
    """
    from . import builtin  # noqa: F401
