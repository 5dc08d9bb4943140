"""Unit tests for the mapping-backed reference container engine."""

from __future__ import annotations

from typing import Any

import pytest

from kodable.containers import any_decoding_container, any_encoding_container
from kodable.keys import AnyKey
from kodable.mapping import (
    InvalidValueError,
    KeyNotFoundError,
    MappingDecoder,
    MappingEncoder,
    TypeMismatchError,
    ValueNotFoundError,
    decode_value,
)


def _container(payload: dict[str, Any]) -> Any:
    return any_decoding_container(MappingDecoder(payload))


def test_scalars_decode_strictly() -> None:
    container = _container({"name": "Ada", "age": 36, "ratio": 2, "active": True})

    assert container.decode(str, "name") == "Ada"
    assert container.decode(int, "age") == 36
    assert container.decode(float, "ratio") == 2.0
    assert isinstance(container.decode(float, "ratio"), float)
    assert container.decode(bool, "active") is True

    with pytest.raises(TypeMismatchError, match="expected to decode int but found bool"):
        container.decode(int, "active")
    with pytest.raises(TypeMismatchError, match="expected to decode str but found int"):
        container.decode(str, "age")


def test_missing_key_reports_key_and_parent_path() -> None:
    container = _container({})

    with pytest.raises(KeyNotFoundError) as exc_info:
        container.decode(str, "name")

    error = exc_info.value
    assert error.key == AnyKey("name")
    assert error.coding_path == ()
    assert str(error) == 'no value associated with key "name" (at <root>)'


def test_null_value_reports_value_not_found() -> None:
    container = _container({"name": None})

    with pytest.raises(ValueNotFoundError) as exc_info:
        container.decode(str, "name")
    assert exc_info.value.coding_path == (AnyKey("name"),)
    assert str(exc_info.value) == "expected str value but found null (at name)"


def test_decode_if_present_treats_missing_and_null_as_absent() -> None:
    container = _container({"nickname": None, "title": "Countess"})

    assert container.decode_if_present(str, "nickname") is None
    assert container.decode_if_present(str, "missing") is None
    assert container.decode_if_present(str, "title") == "Countess"
    with pytest.raises(TypeMismatchError):
        container.decode_if_present(int, "title")


def test_nested_container_extends_coding_path() -> None:
    container = _container({"address": {"zip": 2134}})
    nested = container.nested_container("address")

    assert nested.coding_path == (AnyKey("address"),)
    with pytest.raises(TypeMismatchError) as exc_info:
        nested.decode(str, "zip")
    assert [key.string_value for key in exc_info.value.coding_path] == ["address", "zip"]
    assert str(exc_info.value).endswith("(at address.zip)")


def test_nested_container_rejects_missing_and_non_mapping_values() -> None:
    container = _container({"address": "221B Baker Street"})

    with pytest.raises(KeyNotFoundError):
        container.nested_container("billing")
    with pytest.raises(TypeMismatchError, match="expected to decode dict but found str"):
        container.nested_container("address")


def test_sequences_decode_elementwise_with_index_keys() -> None:
    path = (AnyKey("scores"),)
    assert decode_value(list[int], [1, 2, 3], path) == [1, 2, 3]
    assert decode_value(tuple[str, ...], ["a", "b"], path) == ("a", "b")

    with pytest.raises(TypeMismatchError) as exc_info:
        decode_value(list[int], [1, "two"], path)
    last = exc_info.value.coding_path[-1]
    assert last.int_value == 1
    assert last.string_value == "1"

    with pytest.raises(TypeMismatchError):
        decode_value(list[str], "not a list", path)


def test_passthrough_and_dict_types() -> None:
    assert decode_value(object, {"any": [1]}, ()) == {"any": [1]}
    assert decode_value(Any, 3, ()) == 3
    assert decode_value(dict[str, int], {"a": 1}, ()) == {"a": 1}
    with pytest.raises(TypeMismatchError):
        decode_value(dict, [1], ())


def test_unsupported_target_type_is_a_mismatch() -> None:
    with pytest.raises(TypeMismatchError):
        decode_value(bytes, "abc", ())


def test_top_level_decoder_requires_mapping() -> None:
    with pytest.raises(TypeMismatchError):
        MappingDecoder([1, 2]).container()
    with pytest.raises(ValueNotFoundError):
        MappingDecoder(None).container()


def test_all_keys_lists_payload_keys() -> None:
    container = MappingDecoder({"a": 1, "b": 2}).container()
    assert container.all_keys() == (AnyKey("a"), AnyKey("b"))


def test_encoder_builds_nested_payload() -> None:
    encoder = MappingEncoder()
    container = any_encoding_container(encoder)

    container.encode("Ada", "name")
    container.encode_if_present(None, "nickname")
    container.encode([1, 2], "scores")
    address = container.nested_container("address")
    address.encode("02134", "zip")
    container.nested_container("address").encode("Boston", "city")

    assert encoder.payload == {
        "name": "Ada",
        "scores": [1, 2],
        "address": {"zip": "02134", "city": "Boston"},
    }


def test_encoder_rejects_unsupported_values() -> None:
    container = any_encoding_container(MappingEncoder())

    with pytest.raises(InvalidValueError) as exc_info:
        container.encode({"ok": [object()]}, "blob")
    assert [key.string_value for key in exc_info.value.coding_path] == ["blob", "ok", "0"]

    with pytest.raises(InvalidValueError):
        container.encode({1: "x"}, "blob")
