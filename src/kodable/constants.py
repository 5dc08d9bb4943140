"""Stable constants shared across the key, container and reporting modules."""

from __future__ import annotations

from typing import Final

# Rendering layout.
DEFAULT_INDENT_UNIT: Final[str] = "  "

# Configuration discovery.
DEFAULT_CONFIG_FILE: Final[str] = "kodable.toml"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
CONFIG_TABLE: Final[str] = "reporting"
ENV_PREFIX: Final[str] = "KODABLE_"

# Coding path display.
CODING_PATH_SEPARATOR: Final[str] = "."
ROOT_PATH_LABEL: Final[str] = "<root>"

__all__ = [
    "CODING_PATH_SEPARATOR",
    "CONFIG_TABLE",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_INDENT_UNIT",
    "ENV_PREFIX",
    "PYPROJECT_FILE",
    "ROOT_PATH_LABEL",
]
