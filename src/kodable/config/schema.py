"""
kodable — reporting configuration schema and validation.

File: src/kodable/config/schema.py

Purpose
- Define the defaults and validation rules for error rendering options.

Functional requirements
- Validate config payloads and return structured issues (field path + message).
- Reject unknown fields so typos surface instead of silently falling back.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, cast

from kodable.constants import CONFIG_TABLE, DEFAULT_INDENT_UNIT

KNOWN_FIELDS: Final[frozenset[str]] = frozenset({"indent_unit"})


@dataclass(frozen=True, slots=True)
class ReportingConfig:
    """Options consumed by :func:`kodable.rendering.render`."""

    indent_unit: str = DEFAULT_INDENT_UNIT

    def to_dict(self) -> dict[str, Any]:
        return {"indent_unit": self.indent_unit}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Validation result with the parsed config when no issues were found."""

    config: ReportingConfig | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.config is not None and not self.issues


class ConfigValidationError(ValueError):
    """Raised when strict config validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")


_DEFAULT_CONFIG: Final[ReportingConfig] = ReportingConfig()


def default_config() -> ReportingConfig:
    """Return the built-in defaults."""

    return _DEFAULT_CONFIG


def validate_config(payload: Mapping[str, object]) -> ConfigValidationResult:
    """Validate a ``[reporting]`` table; missing fields fall back to defaults."""

    issues: list[ConfigValidationIssue] = []

    for key in sorted(str(item) for item in payload):
        if key not in KNOWN_FIELDS:
            issues.append(ConfigValidationIssue(f"{CONFIG_TABLE}.{key}", "unknown field"))

    indent_unit = payload.get("indent_unit", DEFAULT_INDENT_UNIT)
    if not isinstance(indent_unit, str):
        issues.append(
            ConfigValidationIssue(
                f"{CONFIG_TABLE}.indent_unit",
                f"expected string, got {type(indent_unit).__name__}",
            )
        )
    elif not indent_unit or indent_unit.strip():
        issues.append(
            ConfigValidationIssue(
                f"{CONFIG_TABLE}.indent_unit", "must be a non-empty run of whitespace"
            )
        )

    if issues:
        return ConfigValidationResult(config=None, issues=tuple(issues))
    return ConfigValidationResult(
        config=ReportingConfig(indent_unit=cast(str, indent_unit)), issues=()
    )


def assert_valid_config(payload: Mapping[str, object]) -> ReportingConfig:
    """Validate ``payload`` and return the config, raising on any issue."""

    result = validate_config(payload)
    if result.config is None:
        raise ConfigValidationError(result.issues)
    return result.config


__all__ = [
    "KNOWN_FIELDS",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "ReportingConfig",
    "assert_valid_config",
    "default_config",
    "validate_config",
]
