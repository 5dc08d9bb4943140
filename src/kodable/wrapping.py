"""Helpers that build ``DecodeError`` chains while a decode unwinds.

A decoding routine wraps each declared property in :func:`decoding_property`
and the whole type in :func:`decoding_type`. Foreign failures become
``Wrapped`` leaves, so every recursive frame always has a real inner cause.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

import structlog

from kodable.errors import (
    DecodeError,
    PropertyDecodeFailed,
    TypeDecodeFailed,
    ValidationFailed,
    Wrapped,
    type_display_name,
)

TValue = TypeVar("TValue")
Validator = Callable[[Any], bool]

_logger = structlog.get_logger(__name__)


def as_decode_error(exc: BaseException) -> DecodeError:
    """Return ``exc`` unchanged when it is a ``DecodeError``; otherwise wrap it."""

    if isinstance(exc, DecodeError):
        return exc
    return Wrapped(exc)


@contextmanager
def decoding_property(
    owner_type: object,
    property_name: str,
    key: str | None = None,
    *,
    logger: Any | None = None,
) -> Iterator[None]:
    """Re-raise failures in scope as ``PropertyDecodeFailed`` for ``property_name``.

    ``key`` is the string used to look the property up and defaults to the
    property name itself.
    """

    lookup_key = property_name if key is None else key
    try:
        yield
    except Exception as exc:
        inner = as_decode_error(exc)
        (logger if logger is not None else _logger).debug(
            "decode_property_failed",
            owner_type=type_display_name(owner_type),
            property_name=property_name,
            key=lookup_key,
            inner=type(inner).__name__,
        )
        raise PropertyDecodeFailed(property_name, lookup_key, owner_type, inner) from exc


@contextmanager
def decoding_type(owner_type: object, *, logger: Any | None = None) -> Iterator[None]:
    """Re-raise failures in scope as ``TypeDecodeFailed`` for ``owner_type``."""

    try:
        yield
    except Exception as exc:
        inner = as_decode_error(exc)
        (logger if logger is not None else _logger).debug(
            "decode_type_failed",
            owner_type=type_display_name(owner_type),
            inner=type(inner).__name__,
        )
        raise TypeDecodeFailed(owner_type, inner) from exc


def ensure_valid(
    owner_type: object,
    property_name: str,
    value: TValue,
    *validators: Validator,
    logger: Any | None = None,
) -> TValue:
    """Run ``validators`` in order and raise ``ValidationFailed`` on the first rejection."""

    for index, validator in enumerate(validators):
        if validator(value):
            continue
        (logger if logger is not None else _logger).debug(
            "decode_validation_failed",
            owner_type=type_display_name(owner_type),
            property_name=property_name,
            validator_index=index,
        )
        raise ValidationFailed(owner_type, property_name, value)
    return value


__all__ = [
    "Validator",
    "as_decode_error",
    "decoding_property",
    "decoding_type",
    "ensure_valid",
]
