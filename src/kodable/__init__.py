"""
kodable — string-keyed containers and decode error chains.

File: src/kodable/__init__.py

Purpose
- Package root. Exposes the string-keyed container adapters, the
  ``DecodeError`` variants and the chain renderer.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

from kodable.containers import (
    CodingKey,
    Decodable,
    Decoder,
    DynamicDecodingContainer,
    DynamicEncodingContainer,
    Encodable,
    Encoder,
    KeyedDecodingContainer,
    KeyedEncodingContainer,
    any_decoding_container,
    any_encoding_container,
)
from kodable.errors import (
    DateParseFailed,
    DecodeError,
    PropertyDecodeFailed,
    TypeDecodeFailed,
    ValidationFailed,
    Wrapped,
)
from kodable.keys import AnyKey
from kodable.rendering import ChainFrame, render, unwind
from kodable.wrapping import as_decode_error, decoding_property, decoding_type, ensure_valid

__version__ = "0.1.0"

__all__ = [
    "AnyKey",
    "ChainFrame",
    "CodingKey",
    "DateParseFailed",
    "Decodable",
    "DecodeError",
    "Decoder",
    "DynamicDecodingContainer",
    "DynamicEncodingContainer",
    "Encodable",
    "Encoder",
    "KeyedDecodingContainer",
    "KeyedEncodingContainer",
    "PropertyDecodeFailed",
    "TypeDecodeFailed",
    "ValidationFailed",
    "Wrapped",
    "__version__",
    "any_decoding_container",
    "any_encoding_container",
    "as_decode_error",
    "decoding_property",
    "decoding_type",
    "ensure_valid",
    "render",
    "unwind",
]
