"""String and integer coding keys for dynamically addressed containers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, init=False)
class AnyKey:
    """Coding key built from an arbitrary string or integer.

    Keyed containers are normally addressed by a closed set of keys. ``AnyKey``
    satisfies the same :class:`~kodable.containers.CodingKey` contract for any
    field name, so generic decode/encode helpers can be written once.
    """

    string_value: str
    int_value: int | None

    def __init__(self, key: str) -> None:
        object.__setattr__(self, "string_value", key)
        object.__setattr__(self, "int_value", None)

    @classmethod
    def from_string(cls, string_value: str) -> AnyKey:
        return cls(string_value)

    @classmethod
    def from_int(cls, int_value: int) -> AnyKey:
        key = cls(str(int_value))
        object.__setattr__(key, "int_value", int_value)
        return key

    def __str__(self) -> str:
        return self.string_value


__all__ = ["AnyKey"]
