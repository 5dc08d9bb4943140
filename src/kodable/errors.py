"""
kodable — decode error chain model.

File: src/kodable/errors.py

Purpose
- Model "this property failed because its nested decode failed because ..."
  as a closed set of exception variants.

What should be included in this file
- The five ``DecodeError`` variants, their one-line descriptions and the
  equality rules used by tests.

Functional requirements
- ``PropertyDecodeFailed`` and ``TypeDecodeFailed`` each own exactly one inner
  error; chains are built bottom-up and never self-referenced.
- ``str(error)`` renders the whole chain (see ``kodable.rendering``).

Non-functional requirements
- Fields are read-only properties and safe to share for reading.
"""

from __future__ import annotations

import abc
from typing import final


def type_display_name(owner_type: object) -> str:
    """Display name for an owning type: classes by qualified name, others via ``str``."""

    if isinstance(owner_type, type):
        return owner_type.__qualname__
    return str(owner_type)


class DecodeError(Exception, metaclass=abc.ABCMeta):
    """Base of the closed decode error union. Never instantiated directly."""

    def __init__(self, *args: object) -> None:
        if type(self) is DecodeError:
            raise TypeError("DecodeError is abstract; raise one of its variants")
        super().__init__(*args)

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """One-line description of this node alone, ignoring any inner error."""

    def __str__(self) -> str:
        from kodable.rendering import render

        return render(self)

    def __repr__(self) -> str:
        # Nested errors are shown by type only; the full chain is what str() is for.
        parts = []
        for name in self.__match_args__:
            value = getattr(self, name)
            if isinstance(value, DecodeError):
                parts.append(f"{name}={type(value).__name__}(...)")
            else:
                parts.append(f"{name}={value!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


@final
class Wrapped(DecodeError):
    """Failure raised by the underlying engine that is not a ``DecodeError``."""

    __match_args__ = ("cause",)

    def __init__(self, cause: object) -> None:
        super().__init__(cause)
        self._cause = cause

    @property
    def cause(self) -> object:
        return self._cause

    @property
    def description(self) -> str:
        return f"Cause: {self.cause}"

    # Opaque causes cannot be compared; a Wrapped value equals nothing, not even itself.
    def __eq__(self, other: object) -> bool:
        if isinstance(other, DecodeError):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return id(self)


@final
class DateParseFailed(DecodeError):
    """A string value could not be parsed into a date."""

    __match_args__ = ("source",)

    def __init__(self, source: str) -> None:
        super().__init__(source)
        self._source = source

    @property
    def source(self) -> str:
        return self._source

    @property
    def description(self) -> str:
        return f"Could not parse Date from this value: {self.source}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DateParseFailed):
            return self.source == other.source
        if isinstance(other, DecodeError):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((DateParseFailed, self.source))


@final
class ValidationFailed(DecodeError):
    """A post-decode validator rejected an otherwise decoded value."""

    __match_args__ = ("owner_type", "property_name", "parsed_value")

    def __init__(self, owner_type: object, property_name: str, parsed_value: object) -> None:
        super().__init__(owner_type, property_name, parsed_value)
        self._owner_type = owner_type
        self._property_name = property_name
        self._parsed_value = parsed_value

    @property
    def owner_type(self) -> object:
        return self._owner_type

    @property
    def property_name(self) -> str:
        return self._property_name

    @property
    def parsed_value(self) -> object:
        return self._parsed_value

    @property
    def description(self) -> str:
        return (
            f"Could not decode type {type_display_name(self.owner_type)}. "
            f"Validation for the property {self.property_name} failed. "
            f"The parsed value was {self.parsed_value}"
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValidationFailed):
            return self.property_name == other.property_name
        if isinstance(other, DecodeError):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((ValidationFailed, self.property_name))


@final
class PropertyDecodeFailed(DecodeError):
    """Decoding one named property of ``owner_type`` failed because of ``inner``."""

    __match_args__ = ("property_name", "key", "owner_type", "inner")

    def __init__(
        self, property_name: str, key: str, owner_type: object, inner: DecodeError
    ) -> None:
        if not isinstance(inner, DecodeError):
            raise TypeError(
                f"inner must be a DecodeError, got {type(inner).__name__}; wrap it with Wrapped"
            )
        super().__init__(property_name, key, owner_type, inner)
        self._property_name = property_name
        self._key = key
        self._owner_type = owner_type
        self._inner = inner

    @property
    def property_name(self) -> str:
        return self._property_name

    @property
    def key(self) -> str:
        return self._key

    @property
    def owner_type(self) -> object:
        return self._owner_type

    @property
    def inner(self) -> DecodeError:
        return self._inner

    @property
    def description(self) -> str:
        return (
            f"Could not decode type {type_display_name(self.owner_type)}. "
            f"Failed to decode property {self.property_name} for key {self.key}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyDecodeFailed):
            return False if isinstance(other, DecodeError) else NotImplemented
        # A repeated pair of frames means both chains cycle identically.
        left: DecodeError = self
        right: DecodeError = other
        seen: set[tuple[int, int]] = set()
        while isinstance(left, PropertyDecodeFailed) and isinstance(right, PropertyDecodeFailed):
            if (id(left), id(right)) in seen:
                return True
            seen.add((id(left), id(right)))
            if (
                type_display_name(left.owner_type) != type_display_name(right.owner_type)
                or left.property_name != right.property_name
            ):
                return False
            left, right = left.inner, right.inner
        return left == right

    def __hash__(self) -> int:
        return hash((PropertyDecodeFailed, self.property_name, type_display_name(self.owner_type)))


@final
class TypeDecodeFailed(DecodeError):
    """Decoding the whole of ``owner_type`` failed because of ``inner``."""

    __match_args__ = ("owner_type", "inner")

    def __init__(self, owner_type: object, inner: DecodeError) -> None:
        if not isinstance(inner, DecodeError):
            raise TypeError(
                f"inner must be a DecodeError, got {type(inner).__name__}; wrap it with Wrapped"
            )
        super().__init__(owner_type, inner)
        self._owner_type = owner_type
        self._inner = inner

    @property
    def owner_type(self) -> object:
        return self._owner_type

    @property
    def inner(self) -> DecodeError:
        return self._inner

    @property
    def description(self) -> str:
        return f"Could not decode an instance of {type_display_name(self.owner_type)}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypeDecodeFailed):
            return type_display_name(self.owner_type) == type_display_name(other.owner_type)
        if isinstance(other, DecodeError):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((TypeDecodeFailed, type_display_name(self.owner_type)))


__all__ = [
    "DateParseFailed",
    "DecodeError",
    "PropertyDecodeFailed",
    "TypeDecodeFailed",
    "ValidationFailed",
    "Wrapped",
    "type_display_name",
]
