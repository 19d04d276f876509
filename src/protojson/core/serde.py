"""
JSON text helpers around the encoder and decoder.

Provides `json_loads` / `json_loads_pairs` as thin wrappers around the stdlib
`json` module, `json_dumps` for compact output, and the text-level entry points
`encode_json` / `decode_json`. This module is zero-IO.

Notes:
    - `json_loads_pairs` keeps every object as `JsonPairs`, so a document that
      repeats a literal key is reported as a duplicate field instead of being
      collapsed last-wins by `dict`.
    - `NaN`/`Infinity` literals are rejected; they are not JSON.
    - Output keeps the encoder's key order (schema declaration order); keys are
      never sorted.
"""

from __future__ import annotations

import json
from typing import Any

from .decoder import DecodeOptions, JsonPairs, decode
from .encoder import encode
from .errors import MalformedJsonError
from .schema import MessageDescriptor
from .values import Message

__all__ = [
    "JsonPairs",
    "json_loads",
    "json_loads_pairs",
    "json_dumps",
    "encode_json",
    "decode_json",
]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def json_loads(s: str | bytes) -> Any:
    """
    Deserialize a JSON document to plain Python objects (dicts for objects).

    Raises:
        MalformedJsonError: If s is not well-formed JSON.
    """
    try:
        return json.loads(s, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedJsonError(str(exc)) from exc


def json_loads_pairs(s: str | bytes) -> Any:
    """
    Deserialize a JSON document keeping objects as ordered `JsonPairs`.

    Args:
        s (str | bytes): JSON text.

    Returns:
        Any: Decoded value; every JSON object becomes a JsonPairs.

    Raises:
        MalformedJsonError: If s is not well-formed JSON.

    Examples:
        >>> json_loads_pairs('{"a": 1, "a": 2}')
        JsonPairs([('a', 1), ('a', 2)])
    """
    try:
        return json.loads(s, object_pairs_hook=JsonPairs, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedJsonError(str(exc)) from exc


def json_dumps(obj: Any, indent: int | None = None) -> str:
    """
    Serialize a JSON-compatible value without reordering keys.

    Compact separators are used unless indent is given; non-ASCII text is
    written as-is.
    """
    if indent is None:
        return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(obj, indent=indent, ensure_ascii=False)


def encode_json(message: Message, indent: int | None = None) -> str:
    """
    Encode a message to canonical JSON text.

    Args:
        message (Message): Instance to encode.
        indent (int | None): Pretty-print indentation; compact when None.

    Returns:
        str: JSON text with keys in schema declaration order.

    Raises:
        EnumEncodeError: If an enum field holds a number with no symbolic name.
    """
    return json_dumps(encode(message), indent=indent)


def decode_json(
    text: str | bytes,
    descriptor: MessageDescriptor,
    options: DecodeOptions | None = None,
) -> Message:
    """
    Parse JSON text and decode it as descriptor.

    Repeated literal keys in the text are detected (see `json_loads_pairs`).

    Raises:
        MalformedJsonError: If text is not well-formed JSON.
        DecodeError: Any other decode failure.

    Examples:
        >>> from protojson.core.schema import FieldDescriptor, MessageDescriptor, Scalar
        >>> desc = MessageDescriptor("demo.v1.Key", (FieldDescriptor("index", Scalar.UINT32),))
        >>> decode_json('{"index": 4}', desc)
        Key(index=4)
        >>> decode_json('{"index": 4, "index": 5}', desc)
        Traceback (most recent call last):
        ...
        protojson.core.errors.DuplicateFieldError: index: duplicate field 'index'
    """
    return decode(json_loads_pairs(text), descriptor, options)
