"""
kodable config package public API.

File: src/kodable/config/__init__.py

Purpose
- Export reporting config loading/validation entrypoints and error types.

Functional requirements
- Support loading from ``kodable.toml`` / ``pyproject.toml`` + ``KODABLE_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from kodable.config.loader import ConfigLoadError, env_name_for, load_config
from kodable.config.schema import (
    KNOWN_FIELDS,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    ReportingConfig,
    assert_valid_config,
    default_config,
    validate_config,
)

__all__ = [
    "KNOWN_FIELDS",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "ReportingConfig",
    "assert_valid_config",
    "default_config",
    "env_name_for",
    "load_config",
    "validate_config",
]
