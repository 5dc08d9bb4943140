"""
kodable — reference keyed container engine over plain mappings.

File: src/kodable/mapping.py

Purpose
- Implement the keyed decode/encode container contract for already-parsed
  ``dict``/``list`` payloads (JSON, TOML or YAML documents after loading).

What should be included in this file
- ``MappingDecoder`` / ``MappingEncoder`` and their keyed containers.
- Engine failures (``ContainerError`` subclasses) carrying the coding path.

Functional requirements
- Strict scalar typing: ``bool`` is never accepted as ``int``; ``int`` widens
  to ``float``.
- ``Decodable`` / ``Encodable`` values recurse through nested decoders and
  encoders; ``list[T]`` and ``tuple[T, ...]`` decode element-wise.

Non-functional requirements
- The engine reads values only; it never parses text or catches its own errors.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final, TypeVar, cast, get_args, get_origin

from kodable.containers import CodingKey, Decodable, Encodable, coding_path_text
from kodable.errors import type_display_name
from kodable.keys import AnyKey

T = TypeVar("T")

_SCALAR_TYPES: Final[tuple[type, ...]] = (bool, int, float, str)
_PASSTHROUGH_TYPES: Final[tuple[object, ...]] = (object, Any)

CodingPath = tuple[CodingKey, ...]


class ContainerError(Exception):
    """Failure reported by the mapping engine, tagged with the coding path."""

    def __init__(self, message: str, coding_path: Sequence[CodingKey]) -> None:
        self.coding_path: CodingPath = tuple(coding_path)
        self.message = message
        super().__init__(f"{message} (at {coding_path_text(self.coding_path)})")


class KeyNotFoundError(ContainerError):
    """A required key is missing from the payload."""

    def __init__(self, key: CodingKey, coding_path: Sequence[CodingKey]) -> None:
        self.key = key
        super().__init__(f'no value associated with key "{key.string_value}"', coding_path)


class ValueNotFoundError(ContainerError):
    """A required value is present but null."""

    def __init__(self, expected: object, coding_path: Sequence[CodingKey]) -> None:
        self.expected = expected
        super().__init__(
            f"expected {type_display_name(expected)} value but found null", coding_path
        )


class TypeMismatchError(ContainerError):
    """A value has a different type than the one requested."""

    def __init__(self, expected: object, actual: object, coding_path: Sequence[CodingKey]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected to decode {type_display_name(expected)} but found {type(actual).__name__}",
            coding_path,
        )


class InvalidValueError(ContainerError):
    """A value cannot be encoded."""

    def __init__(self, value: object, coding_path: Sequence[CodingKey]) -> None:
        self.value = value
        super().__init__(f"cannot encode value of type {type(value).__name__}", coding_path)


class MappingDecoder:
    """Decoder reading from a single already-parsed value."""

    __slots__ = ("_coding_path", "_value")

    def __init__(self, value: object, coding_path: Sequence[CodingKey] = ()) -> None:
        self._value = value
        self._coding_path: CodingPath = tuple(coding_path)

    @property
    def coding_path(self) -> CodingPath:
        return self._coding_path

    @property
    def value(self) -> object:
        return self._value

    def container(self) -> MappingDecodingContainer:
        if self._value is None:
            raise ValueNotFoundError(dict, self._coding_path)
        if not isinstance(self._value, Mapping):
            raise TypeMismatchError(dict, self._value, self._coding_path)
        return MappingDecodingContainer(self._value, self._coding_path)


class MappingDecodingContainer:
    """Keyed decoding container over a ``Mapping[str, object]``."""

    __slots__ = ("_coding_path", "_payload")

    def __init__(
        self, payload: Mapping[str, object], coding_path: Sequence[CodingKey] = ()
    ) -> None:
        self._payload = payload
        self._coding_path: CodingPath = tuple(coding_path)

    @property
    def coding_path(self) -> CodingPath:
        return self._coding_path

    def all_keys(self) -> tuple[AnyKey, ...]:
        return tuple(AnyKey(str(key)) for key in self._payload)

    def contains(self, key: CodingKey) -> bool:
        return key.string_value in self._payload

    def decode(self, type_: type[T], key: CodingKey) -> T:
        if key.string_value not in self._payload:
            raise KeyNotFoundError(key, self._coding_path)
        return decode_value(type_, self._payload[key.string_value], (*self._coding_path, key))

    def decode_if_present(self, type_: type[T], key: CodingKey) -> T | None:
        raw = self._payload.get(key.string_value)
        if raw is None:
            return None
        return decode_value(type_, raw, (*self._coding_path, key))

    def nested_container(self, key: CodingKey) -> MappingDecodingContainer:
        if key.string_value not in self._payload:
            raise KeyNotFoundError(key, self._coding_path)
        nested_path = (*self._coding_path, key)
        return MappingDecoder(self._payload[key.string_value], nested_path).container()


def decode_value(type_: Any, raw: object, coding_path: Sequence[CodingKey]) -> Any:
    """Decode ``raw`` as ``type_`` at ``coding_path``."""

    path = tuple(coding_path)
    if raw is None:
        raise ValueNotFoundError(type_, path)

    if type_ in _PASSTHROUGH_TYPES:
        return raw

    if isinstance(type_, type) and issubclass(type_, Decodable):
        return type_.decode_from(MappingDecoder(raw, path))

    origin = get_origin(type_)
    if origin in (list, tuple):
        return _decode_sequence(type_, origin, raw, path)
    if origin is dict or type_ is dict:
        if not isinstance(raw, Mapping):
            raise TypeMismatchError(type_, raw, path)
        return dict(raw)

    if type_ is float:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise TypeMismatchError(type_, raw, path)
        return float(raw)
    if type_ is int:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeMismatchError(type_, raw, path)
        return raw
    if type_ in _SCALAR_TYPES or type_ in (list, tuple):
        if not isinstance(raw, type_):
            raise TypeMismatchError(type_, raw, path)
        return raw

    raise TypeMismatchError(type_, raw, path)


def _decode_sequence(type_: Any, origin: type, raw: object, path: CodingPath) -> Any:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise TypeMismatchError(type_, raw, path)
    args = get_args(type_)
    element_type: Any = args[0] if args else object
    decoded = [
        decode_value(element_type, item, (*path, AnyKey.from_int(index)))
        for index, item in enumerate(raw)
    ]
    return tuple(decoded) if origin is tuple else decoded


class MappingEncoder:
    """Encoder collecting a plain ``dict`` payload."""

    __slots__ = ("_coding_path", "_payload")

    def __init__(self, coding_path: Sequence[CodingKey] = ()) -> None:
        self._payload: dict[str, object] = {}
        self._coding_path: CodingPath = tuple(coding_path)

    @property
    def payload(self) -> dict[str, object]:
        return self._payload

    def container(self) -> MappingEncodingContainer:
        return MappingEncodingContainer(self._payload, self._coding_path)


class MappingEncodingContainer:
    """Keyed encoding container writing into a ``dict``."""

    __slots__ = ("_coding_path", "_payload")

    def __init__(self, payload: dict[str, object], coding_path: Sequence[CodingKey] = ()) -> None:
        self._payload = payload
        self._coding_path: CodingPath = tuple(coding_path)

    @property
    def coding_path(self) -> CodingPath:
        return self._coding_path

    def encode(self, value: object, key: CodingKey) -> None:
        self._payload[key.string_value] = encode_value(value, (*self._coding_path, key))

    def encode_if_present(self, value: object | None, key: CodingKey) -> None:
        if value is None:
            return
        self.encode(value, key)

    def nested_container(self, key: CodingKey) -> MappingEncodingContainer:
        existing = self._payload.get(key.string_value)
        if not isinstance(existing, dict):
            existing = {}
            self._payload[key.string_value] = existing
        return MappingEncodingContainer(
            cast(dict[str, object], existing), (*self._coding_path, key)
        )


def encode_value(value: object, coding_path: Sequence[CodingKey]) -> object:
    """Convert ``value`` into its plain payload form at ``coding_path``."""

    path = tuple(coding_path)
    if value is None or isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, Encodable):
        encoder = MappingEncoder(path)
        value.encode_to(encoder)
        return encoder.payload
    if isinstance(value, Mapping):
        encoded: dict[str, object] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidValueError(key, path)
            encoded[key] = encode_value(item, (*path, AnyKey(key)))
        return encoded
    if isinstance(value, (list, tuple)):
        return [
            encode_value(item, (*path, AnyKey.from_int(index)))
            for index, item in enumerate(value)
        ]
    raise InvalidValueError(value, path)


__all__ = [
    "ContainerError",
    "InvalidValueError",
    "KeyNotFoundError",
    "MappingDecoder",
    "MappingDecodingContainer",
    "MappingEncoder",
    "MappingEncodingContainer",
    "TypeMismatchError",
    "ValueNotFoundError",
    "decode_value",
    "encode_value",
]
