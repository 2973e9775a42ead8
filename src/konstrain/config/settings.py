# src/konstrain/config/settings.py
"""
Project configuration.

Precedence (lowest to highest):
  1. Built-in defaults
  2. ``.konstrain/config.yml`` found from the working directory upward,
     or the file named by ``KONSTRAIN_CONFIG``
  3. ``KONSTRAIN_<FIELD>`` environment variables

Example config.yml:

    export_extension: .csv
    constraint_format: yaml
    workers: 4
    log_level: INFO
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from konstrain.errors import ConfigurationError
from konstrain.logging import get_logger

_logger = get_logger(__name__)

CONFIG_DIR = ".konstrain"
CONFIG_FILENAME = "config.yml"
ENV_PREFIX = "KONSTRAIN_"
ENV_CONFIG_PATH = "KONSTRAIN_CONFIG"


class KonstrainConfig(BaseModel):
    """Effective settings for a run."""

    model_config = ConfigDict(extra="forbid")

    export_extension: str = Field(".csv", description="Required suffix for report exports.")
    export_delimiter: str = Field(",", min_length=1, max_length=1)
    constraint_format: Literal["json", "yaml"] = Field(
        "json", description="Format used when a constraint path has no known suffix."
    )
    workers: Optional[int] = Field(
        None, ge=1, description="Thread pool size for per-column work (None = sequential)."
    )
    log_level: str = "WARNING"
    csv_try_parse_dates: bool = True

    @field_validator("export_extension")
    @classmethod
    def _normalize_extension(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("export_extension cannot be empty")
        return value if value.startswith(".") else f".{value}"


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Search ``start`` and its parents for ``.konstrain/config.yml``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_DIR / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return raw


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for name in KonstrainConfig.model_fields:
        key = f"{ENV_PREFIX}{name.upper()}"
        if key in environ:
            value = environ[key]
            # "none" clears optional settings such as workers
            overrides[name] = None if value.strip().lower() in ("", "none") else value
    return overrides


def load_config(
    path: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    search_from: Optional[Path] = None,
) -> KonstrainConfig:
    """
    Resolve the effective configuration.

    Args:
        path: Explicit config file. Overrides discovery and KONSTRAIN_CONFIG.
        environ: Environment mapping (defaults to os.environ).
        search_from: Directory to start config discovery from (defaults to cwd).

    Raises:
        ConfigurationError: If the file is unreadable or a value is invalid.
    """
    env = os.environ if environ is None else environ

    config_path: Optional[Path]
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")
    elif env.get(ENV_CONFIG_PATH):
        config_path = Path(env[ENV_CONFIG_PATH])
        if not config_path.is_file():
            raise ConfigurationError(
                f"Config file from {ENV_CONFIG_PATH} not found: {config_path}"
            )
    else:
        config_path = find_config_file(search_from)

    values: Dict[str, Any] = {}
    if config_path is not None:
        _logger.debug("Loading config from %s", config_path)
        values.update(_read_config_file(config_path))
    values.update(_env_overrides(env))

    try:
        return KonstrainConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
