# src/konstrain/logging.py
"""
Package logging helpers.

All loggers live under the ``konstrain`` namespace so applications can tune
verbosity with a single ``logging.getLogger("konstrain").setLevel(...)``.
The level can also be set through ``KONSTRAIN_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

ROOT_LOGGER_NAME = "konstrain"
_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the konstrain namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _resolve_level(level: Union[str, int, None]) -> int:
    if level is None:
        level = os.environ.get("KONSTRAIN_LOG_LEVEL", "WARNING")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(level: Union[str, int, None] = None) -> None:
    """
    Install a stream handler on the package logger.

    Safe to call more than once: the handler is only added the first time,
    later calls just adjust the level.
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_resolve_level(level))

    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
        _configured = True


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    level: int = logging.WARNING,
    context: Optional[str] = None,
) -> None:
    """
    Log a handled exception.

    The traceback is only attached when the logger is in DEBUG mode; otherwise
    a single line with the exception type and message is emitted.
    """
    prefix = f"{message} [{context}]" if context else message
    logger.log(
        level,
        "%s: %s: %s",
        prefix,
        type(exc).__name__,
        exc,
        exc_info=logger.isEnabledFor(logging.DEBUG),
    )
