"""
kodable — reporting config loader.

File: src/kodable/config/loader.py

Purpose
- Load effective reporting options from defaults, a TOML file and env vars.

What should be included in this file
- Precedence logic: env (KODABLE_) > file > defaults.
- TOML loading via ``tomllib`` from ``kodable.toml`` (``[reporting]``) or
  ``pyproject.toml`` (``[tool.kodable.reporting]``).
- Deterministic environment variable mapping.

Functional requirements
- A missing default file is not an error; a missing explicit file is.
- Reject invalid values via schema validation.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import structlog

from kodable.config.schema import ReportingConfig, assert_valid_config
from kodable.constants import CONFIG_TABLE, DEFAULT_CONFIG_FILE, ENV_PREFIX, PYPROJECT_FILE

_logger = structlog.get_logger(__name__)

_ENV_FIELDS: Final[tuple[str, ...]] = ("indent_unit",)


class ConfigLoadError(ValueError):
    """Raised when the config file cannot be found, read or parsed."""


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    logger: Any | None = None,
) -> ReportingConfig:
    """Load effective config with deterministic precedence: env > file > defaults."""

    log = logger if logger is not None else _logger
    env_map = dict(os.environ if environ is None else environ)

    resolved_path = _resolve_config_path(config_path)
    if resolved_path is None:
        file_payload: dict[str, Any] = {}
    else:
        file_payload = _load_reporting_table(resolved_path, required=config_path is not None)

    merged = {**file_payload, **_collect_env_overrides(env_map)}
    config = assert_valid_config(merged)
    log.debug(
        "reporting_config_loaded",
        source=str(resolved_path) if resolved_path is not None else None,
        **config.to_dict(),
    )
    return config


def env_name_for(field: str) -> str:
    return f"{ENV_PREFIX}{field.upper()}"


def _resolve_config_path(config_path: str | Path | None) -> Path | None:
    if config_path is not None:
        return Path(config_path).expanduser().resolve()
    for candidate in (DEFAULT_CONFIG_FILE, PYPROJECT_FILE):
        path = (Path.cwd() / candidate).resolve()
        if path.exists():
            return path
    return None


def _load_reporting_table(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc

    table_path: tuple[str, ...] = (
        ("tool", "kodable", CONFIG_TABLE) if path.name == PYPROJECT_FILE else (CONFIG_TABLE,)
    )
    node: object = parsed
    for part in table_path:
        if not isinstance(node, Mapping):
            raise ConfigLoadError(f"{'.'.join(table_path)} must be a table in {path}")
        node = node.get(part, {})
    if not isinstance(node, Mapping):
        raise ConfigLoadError(f"{'.'.join(table_path)} must be a table in {path}")
    return dict(node)


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    # Whitespace is significant for indent units, so values are taken verbatim.
    overrides: dict[str, Any] = {}
    for field in _ENV_FIELDS:
        raw = environ.get(env_name_for(field))
        if raw is not None:
            overrides[field] = raw
    return overrides


__all__ = ["ConfigLoadError", "env_name_for", "load_config"]
