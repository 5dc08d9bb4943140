"""
kodable — keyed container contract and string-keyed adapters.

File: src/kodable/containers.py

Purpose
- Describe the capabilities a keyed decode/encode engine must offer.
- Let callers address container fields by plain strings instead of building
  coding keys by hand.

Functional requirements
- Every adapter call builds a fresh ``AnyKey`` and delegates exactly once.
- Failures raised by the wrapped container propagate unchanged; wrapping them
  into ``DecodeError`` frames is the caller's responsibility.

Non-functional requirements
- No state, no retries, no caching.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

from kodable.constants import CODING_PATH_SEPARATOR, ROOT_PATH_LABEL
from kodable.keys import AnyKey

T = TypeVar("T")
TDecodable = TypeVar("TDecodable", bound="Decodable")


@runtime_checkable
class CodingKey(Protocol):
    """Key contract shared by every keyed container."""

    @property
    def string_value(self) -> str: ...

    @property
    def int_value(self) -> int | None: ...


class KeyedDecodingContainer(Protocol):
    """Capabilities required from the underlying decode engine."""

    @property
    def coding_path(self) -> tuple[CodingKey, ...]: ...

    def contains(self, key: CodingKey) -> bool: ...

    def decode(self, type_: type[T], key: CodingKey) -> T: ...

    def decode_if_present(self, type_: type[T], key: CodingKey) -> T | None: ...

    def nested_container(self, key: CodingKey) -> KeyedDecodingContainer: ...


class KeyedEncodingContainer(Protocol):
    """Capabilities required from the underlying encode engine."""

    @property
    def coding_path(self) -> tuple[CodingKey, ...]: ...

    def encode(self, value: object, key: CodingKey) -> None: ...

    def encode_if_present(self, value: object | None, key: CodingKey) -> None: ...

    def nested_container(self, key: CodingKey) -> KeyedEncodingContainer: ...


class Decoder(Protocol):
    """Source of a top-level keyed decoding container."""

    def container(self) -> KeyedDecodingContainer: ...


class Encoder(Protocol):
    """Sink exposing a top-level keyed encoding container."""

    def container(self) -> KeyedEncodingContainer: ...


class DynamicDecodingContainer:
    """String-keyed view over a :class:`KeyedDecodingContainer`."""

    __slots__ = ("_container",)

    def __init__(self, container: KeyedDecodingContainer) -> None:
        self._container = container

    @property
    def raw(self) -> KeyedDecodingContainer:
        return self._container

    @property
    def coding_path(self) -> tuple[CodingKey, ...]:
        return self._container.coding_path

    def contains(self, field_name: str) -> bool:
        return self._container.contains(AnyKey(field_name))

    def decode(self, type_: type[T], field_name: str) -> T:
        return self._container.decode(type_, AnyKey(field_name))

    def decode_if_present(self, type_: type[T], field_name: str) -> T | None:
        return self._container.decode_if_present(type_, AnyKey(field_name))

    def nested_container(self, field_name: str) -> DynamicDecodingContainer:
        return DynamicDecodingContainer(self._container.nested_container(AnyKey(field_name)))


class DynamicEncodingContainer:
    """String-keyed view over a :class:`KeyedEncodingContainer`."""

    __slots__ = ("_container",)

    def __init__(self, container: KeyedEncodingContainer) -> None:
        self._container = container

    @property
    def raw(self) -> KeyedEncodingContainer:
        return self._container

    @property
    def coding_path(self) -> tuple[CodingKey, ...]:
        return self._container.coding_path

    def encode(self, value: object, field_name: str) -> None:
        self._container.encode(value, AnyKey(field_name))

    def encode_if_present(self, value: object | None, field_name: str) -> None:
        self._container.encode_if_present(value, AnyKey(field_name))

    def nested_container(self, field_name: str) -> DynamicEncodingContainer:
        return DynamicEncodingContainer(self._container.nested_container(AnyKey(field_name)))


def any_decoding_container(decoder: Decoder) -> DynamicDecodingContainer:
    """Return the decoder's top-level container addressed by plain strings."""

    return DynamicDecodingContainer(decoder.container())


def any_encoding_container(encoder: Encoder) -> DynamicEncodingContainer:
    """Return the encoder's top-level container addressed by plain strings."""

    return DynamicEncodingContainer(encoder.container())


class Decodable(abc.ABC):
    """Mixin for types that can be built from a :class:`Decoder`."""

    @classmethod
    @abc.abstractmethod
    def decode_from(cls: type[TDecodable], decoder: Decoder) -> TDecodable:
        """Build an instance from the keyed container of ``decoder``."""

    @classmethod
    def decode_if_present(
        cls: type[TDecodable],
        container: DynamicDecodingContainer,
        field_name: str,
    ) -> TDecodable | None:
        return container.decode_if_present(cls, field_name)


class Encodable(abc.ABC):
    """Mixin for types that can write themselves into an :class:`Encoder`."""

    @abc.abstractmethod
    def encode_to(self, encoder: Encoder) -> None:
        """Write every field into the keyed container of ``encoder``."""

    def encode_if_present(self, container: DynamicEncodingContainer, field_name: str) -> None:
        container.encode_if_present(self, field_name)


def coding_path_text(path: Sequence[CodingKey], *, separator: str = CODING_PATH_SEPARATOR) -> str:
    """Render a coding path as ``a.b.0.c``; the empty path is ``<root>``."""

    if not path:
        return ROOT_PATH_LABEL
    return separator.join(key.string_value for key in path)


__all__ = [
    "CodingKey",
    "Decodable",
    "Decoder",
    "DynamicDecodingContainer",
    "DynamicEncodingContainer",
    "Encodable",
    "Encoder",
    "KeyedDecodingContainer",
    "KeyedEncodingContainer",
    "any_decoding_container",
    "any_encoding_container",
    "coding_path_text",
]
