"""Unit tests for dynamic coding keys."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kodable.containers import CodingKey
from kodable.keys import AnyKey


@given(st.text())
def test_from_string_keeps_value_and_has_no_int(value: str) -> None:
    key = AnyKey.from_string(value)
    assert key.string_value == value
    assert key.int_value is None
    assert key == AnyKey(value)
    assert str(key) == value


@given(st.integers())
def test_from_int_sets_both_fields(value: int) -> None:
    key = AnyKey.from_int(value)
    assert key.string_value == str(value)
    assert key.int_value == value


def test_int_and_string_keys_with_same_text_are_distinct() -> None:
    assert AnyKey.from_int(3) != AnyKey("3")
    assert len({AnyKey("a"), AnyKey("a"), AnyKey.from_int(1), AnyKey.from_int(1)}) == 2


def test_keys_are_immutable() -> None:
    key = AnyKey("name")
    with pytest.raises(FrozenInstanceError):
        key.string_value = "other"  # type: ignore[misc]


def test_key_satisfies_coding_key_contract() -> None:
    assert isinstance(AnyKey("name"), CodingKey)
    assert isinstance(AnyKey.from_int(0), CodingKey)
