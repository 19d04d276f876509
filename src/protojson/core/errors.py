"""
Exception types raised by schema construction, encoding, decoding and settings.

Provides typed exceptions for codec failures:
- SchemaError for descriptor/registry construction faults (unrecoverable at startup).
- DecodeError and its subclasses for malformed or schema-incompatible JSON input.
- EncodeError for values that cannot be rendered (unknown enum numbers).
- ConfigError for invalid settings.

Every codec error carries an ErrorCode and the path of the offending field,
rendered as a dotted path with list indices and map keys (e.g.
``lifecycle[1].state`` or ``labels["zone"]``).

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Errors are never recovered inside the codec; callers decide what a failure means.

Examples:
    Inspect the path of a decode failure.

    >>> from protojson.core.errors import InvalidNumberError
    >>> err = InvalidNumberError("value out of range for uint32", path=("txs", 2, "index"))
    >>> str(err)
    'txs[2].index: value out of range for uint32'
    >>> err.code.value
    'invalid_number'
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum

__all__ = [
    "ErrorCode",
    "CodecError",
    "SchemaError",
    "ConfigError",
    "EncodeError",
    "EnumEncodeError",
    "DecodeError",
    "UnknownFieldError",
    "DuplicateFieldError",
    "InvalidNumberError",
    "InvalidBytesError",
    "UnknownEnumValueError",
    "TypeMismatchError",
    "InvalidTimestampError",
    "NestingTooDeepError",
    "MalformedJsonError",
    "format_path",
    "map_key_element",
]

PathElement = str | int


class ErrorCode(Enum):
    """Stable, lower_snake identifiers for every failure class."""

    SCHEMA = "schema"
    CONFIG = "config"
    UNKNOWN_FIELD = "unknown_field"
    DUPLICATE_FIELD = "duplicate_field"
    INVALID_NUMBER = "invalid_number"
    INVALID_BYTES = "invalid_bytes"
    UNKNOWN_ENUM_VALUE = "unknown_enum_value"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_TIMESTAMP = "invalid_timestamp"
    NESTING_TOO_DEEP = "nesting_too_deep"
    MALFORMED_JSON = "malformed_json"


def format_path(path: Sequence[PathElement]) -> str:
    """
    Render a field path as ``a.b[3].c`` with map keys quoted.

    Args:
        path (Sequence[str | int]): Path elements; ints are list indices, strings
            are field names. Map keys are stored pre-quoted by the decoder.

    Returns:
        str: Dotted rendering, or ``"<root>"`` for an empty path.
    """
    out = ""
    for element in path:
        if isinstance(element, int):
            out += f"[{element}]"
        elif element.startswith("["):
            out += element
        else:
            out += f".{element}" if out else element
    return out or "<root>"


def map_key_element(key: object) -> str:
    """Path element for a map entry: ``["zone"]`` for string keys, ``[7]`` otherwise."""
    if isinstance(key, str):
        return f"[{json.dumps(key, ensure_ascii=False)}]"
    if isinstance(key, bool):
        return "[true]" if key else "[false]"
    return f"[{key}]"


class CodecError(ValueError):
    """Base class for every error raised by protojson."""

    code: ErrorCode = ErrorCode.SCHEMA

    def __init__(self, message: str, *, path: Sequence[PathElement] = ()) -> None:
        self.message = message
        self.path: tuple[PathElement, ...] = tuple(path)
        super().__init__(message)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{format_path(self.path)}: {self.message}"


class SchemaError(CodecError):
    """Invalid descriptor or registry (duplicate names, bad enum table, bad map key)."""

    code = ErrorCode.SCHEMA


class ConfigError(CodecError):
    """Invalid codec settings (e.g., a non-positive nesting cap)."""

    code = ErrorCode.CONFIG


# ---------------------------------------------------------------------------
# Encode side
# ---------------------------------------------------------------------------


class EncodeError(CodecError):
    """A well-typed instance held a value that has no JSON rendering."""


class EnumEncodeError(EncodeError):
    """Numeric enum value has no symbolic name in its descriptor."""

    code = ErrorCode.UNKNOWN_ENUM_VALUE

    def __init__(self, enum_name: str, number: int, *, path: Sequence[PathElement] = ()) -> None:
        self.enum_name = enum_name
        self.number = number
        super().__init__(f"{number} is not a value of enum {enum_name}", path=path)


# ---------------------------------------------------------------------------
# Decode side
# ---------------------------------------------------------------------------


class DecodeError(CodecError):
    """JSON input does not describe a valid instance of the requested message."""


class UnknownFieldError(DecodeError):
    """Key does not name any field (raised only in strict-unknown-field mode)."""

    code = ErrorCode.UNKNOWN_FIELD

    def __init__(self, key: str, message_name: str, *, path: Sequence[PathElement] = ()) -> None:
        self.key = key
        self.message_name = message_name
        super().__init__(f"unknown field {key!r} for {message_name}", path=path)


class DuplicateFieldError(DecodeError):
    """Field (or another member of its oneof group) was already populated."""

    code = ErrorCode.DUPLICATE_FIELD

    def __init__(
        self,
        field_name: str,
        *,
        oneof: str | None = None,
        path: Sequence[PathElement] = (),
    ) -> None:
        self.field_name = field_name
        self.oneof = oneof
        if oneof is None:
            message = f"duplicate field {field_name!r}"
        else:
            message = f"duplicate field {field_name!r}: oneof {oneof!r} is already set"
        super().__init__(message, path=path)


class InvalidNumberError(DecodeError):
    """Malformed or out-of-range integer (JSON number or decimal string)."""

    code = ErrorCode.INVALID_NUMBER


class InvalidBytesError(DecodeError):
    """Malformed base64 payload for a bytes field."""

    code = ErrorCode.INVALID_BYTES


class UnknownEnumValueError(DecodeError):
    """Neither a recognized symbolic name nor a recognized numeric code."""

    code = ErrorCode.UNKNOWN_ENUM_VALUE

    def __init__(self, enum_name: str, value: object, *, path: Sequence[PathElement] = ()) -> None:
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"{value!r} is not a value of enum {enum_name}", path=path)


class TypeMismatchError(DecodeError):
    """JSON value shape does not match the field kind (e.g., array where object expected)."""

    code = ErrorCode.TYPE_MISMATCH


class InvalidTimestampError(DecodeError):
    """String is not an RFC 3339 timestamp inside the representable window."""

    code = ErrorCode.INVALID_TIMESTAMP


class NestingTooDeepError(DecodeError):
    """Message nesting exceeded the configured cap."""

    code = ErrorCode.NESTING_TOO_DEEP


class MalformedJsonError(DecodeError):
    """Input text is not well-formed JSON."""

    code = ErrorCode.MALFORMED_JSON
