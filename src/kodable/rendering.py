"""Render a ``DecodeError`` chain as an indented, top-down diagnostic.

The walk follows ``inner`` links from the outermost error. Property failures
contribute one indented frame each; type failures and wrappers around another
``DecodeError`` are transparent. The first non-recursive node is the root
cause and closes the message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from kodable.config.schema import ReportingConfig, default_config
from kodable.errors import (
    DecodeError,
    PropertyDecodeFailed,
    TypeDecodeFailed,
    Wrapped,
    type_display_name,
)

_logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ChainFrame:
    """One visible level of a rendered chain."""

    owner_type: object
    property_name: str
    key: str

    def describe(self) -> str:
        owner = type_display_name(self.owner_type)
        if self.property_name == self.key:
            return f'failing property: "{self.property_name}" of type {owner}'
        return f'failing property: "{self.property_name}"(key: "{self.key}") of type {owner}'


def unwind(
    error: DecodeError,
    *,
    logger: Any | None = None,
) -> tuple[tuple[ChainFrame, ...], DecodeError]:
    """Split ``error`` into its ordered frames (outermost first) and its terminal error."""

    log = logger if logger is not None else _logger

    frames: list[ChainFrame] = []
    seen: set[int] = set()
    current = error
    while True:
        if id(current) in seen:
            log.warning(
                "decode_error_chain_truncated",
                reason="cycle",
                visited=len(seen),
                stopped_at=type(current).__name__,
            )
            return tuple(frames), current
        seen.add(id(current))

        next_error = _next_link(current)
        if next_error is None:
            return tuple(frames), current
        if isinstance(current, PropertyDecodeFailed):
            frames.append(
                ChainFrame(
                    owner_type=current.owner_type,
                    property_name=current.property_name,
                    key=current.key,
                )
            )
        current = next_error


def render(
    error: DecodeError,
    *,
    config: ReportingConfig | None = None,
    logger: Any | None = None,
) -> str:
    """Return the full diagnostic text for ``error``."""

    cfg = config if config is not None else default_config()
    frames, terminal = unwind(error, logger=logger)
    if not frames:
        return terminal.description

    unit = cfg.indent_unit
    lines = [f"{unit * (depth + 1)}{frame.describe()}" for depth, frame in enumerate(frames)]
    lines.append("")
    lines.append(f"{unit * (len(frames) + 1)}{terminal.description}")
    return "\n".join(lines) + "\n\n"


def _next_link(error: DecodeError) -> DecodeError | None:
    if isinstance(error, Wrapped):
        return error.cause if isinstance(error.cause, DecodeError) else None
    if isinstance(error, (PropertyDecodeFailed, TypeDecodeFailed)):
        return error.inner
    return None


__all__ = ["ChainFrame", "render", "unwind"]
