"""
Canonical JSON value -> Message, validated against a MessageDescriptor.

The decoder is a single loop over an object's key/value pairs with one
accumulator per field slot:

1. Resolve the key with the descriptor's FieldNameResolver (wire name or JSON
   name). Unresolved keys are skipped, or raise UnknownFieldError when
   ``DecodeOptions.strict_unknown_fields`` is set.
2. A field seen twice in the same object (under either spelling) raises
   DuplicateFieldError; so does populating a second member of a oneof group.
3. ``null`` leaves the field absent. The key still counts as seen.
4. The value is parsed per field kind, and the first failure aborts the whole
   decode with the offending path attached.

Accepted inputs per kind
- int32/int64/uint32/uint64: JSON integer, integral float, or decimal string.
- bool: JSON boolean. string: JSON string.
- bytes: base64, standard or URL-safe alphabet, padded or not.
- enum: symbolic name (case-sensitive) or a known numeric code.
- Timestamp: RFC 3339 string.
- message: JSON object. repeated: JSON array. map: JSON object whose keys are
  parsed per key kind.

Objects may be given as any Mapping or as ``JsonPairs``; the latter keeps
repeated literal keys, which a dict silently collapses
(see ``protojson.core.serde.json_loads_pairs``).
"""

from __future__ import annotations

import base64
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Final

from .constants import DEFAULT_MAX_DEPTH
from .errors import (
    ConfigError,
    DuplicateFieldError,
    InvalidBytesError,
    InvalidNumberError,
    InvalidTimestampError,
    NestingTooDeepError,
    PathElement,
    TypeMismatchError,
    UnknownEnumValueError,
    UnknownFieldError,
    map_key_element,
)
from .schema import (
    EnumDescriptor,
    EnumKind,
    FieldDescriptor,
    FieldKind,
    MapKind,
    MessageDescriptor,
    MessageKind,
    Scalar,
)
from .values import INTEGER_RANGES, Message
from .wellknown import Timestamp

__all__ = [
    "DecodeOptions",
    "JsonPairs",
    "decode",
    "parse_integer",
    "parse_bytes",
]

_Path = tuple[PathElement, ...]

_DECIMAL_RE: Final[re.Pattern[str]] = re.compile(r"-?[0-9]+", re.ASCII)
_URLSAFE_TO_STANDARD: Final[dict[int, int]] = str.maketrans("-_", "+/")
_MAX_DIGITS: Final[int] = len(str(2**64 - 1))
_PREVIEW_CHARS: Final[int] = 32


class JsonPairs(tuple):
    """A JSON object as its ordered ``(key, value)`` pairs, repeated keys preserved."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"JsonPairs({list(self)!r})"


@dataclass(frozen=True)
class DecodeOptions:
    """
    Per-call decode policy.

    Attributes:
        strict_unknown_fields (bool): Raise UnknownFieldError for keys that name
            no field instead of skipping them.
        max_depth (int): Maximum message nesting, the root message counting as 1.

    Raises:
        ConfigError: If max_depth is not a positive integer.
    """

    strict_unknown_fields: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigError(f"max_depth must be an integer, got {type(self.max_depth).__name__}")
        if self.max_depth < 1:
            raise ConfigError(f"max_depth must be >= 1, got {self.max_depth}")


def decode(
    data: Any,
    descriptor: MessageDescriptor,
    options: DecodeOptions | None = None,
) -> Message:
    """
    Decode a parsed JSON value into a new Message.

    Args:
        data (Any): Parsed JSON object (Mapping or JsonPairs).
        descriptor (MessageDescriptor): Expected message type.
        options (DecodeOptions | None): Decode policy; defaults to lenient
            unknown-field handling and the default nesting cap.

    Returns:
        Message: Fresh instance owned by the caller.

    Raises:
        DecodeError: Any subclass, on the first structural problem; no partial
            instance is returned.

    Examples:
        >>> from protojson.core.schema import FieldDescriptor, MessageDescriptor, Scalar
        >>> desc = MessageDescriptor("demo.v1.Info", (FieldDescriptor("epoch_number", Scalar.UINT64),))
        >>> decode({"epochNumber": "18446744073709551615"}, desc)["epoch_number"]
        18446744073709551615
        >>> decode({"epoch_number": 7, "unknown": 1}, desc)["epoch_number"]
        7
    """
    return _Decoder(options or DecodeOptions()).message(data, descriptor, (), 1)


class _Decoder:
    __slots__ = ("_options",)

    def __init__(self, options: DecodeOptions) -> None:
        self._options = options

    def message(self, data: Any, descriptor: MessageDescriptor, path: _Path, depth: int) -> Message:
        if depth > self._options.max_depth:
            raise NestingTooDeepError(
                f"message nesting exceeds max_depth={self._options.max_depth}", path=path
            )
        instance = Message(descriptor)
        seen: set[str] = set()
        populated_groups: set[str] = set()
        for key, value in _object_items(data, path):
            fd = descriptor.lookup_field(key)
            if fd is None:
                if self._options.strict_unknown_fields:
                    raise UnknownFieldError(key, descriptor.full_name, path=path)
                continue
            field_path = (*path, fd.json_name)
            if fd.name in seen:
                raise DuplicateFieldError(fd.json_name, path=field_path)
            seen.add(fd.name)
            if value is None:
                continue
            if fd.oneof is not None:
                if fd.oneof in populated_groups:
                    raise DuplicateFieldError(fd.json_name, oneof=fd.oneof, path=field_path)
                populated_groups.add(fd.oneof)
            instance._assign(fd, self.field(fd, value, field_path, depth))
        return instance

    def field(self, fd: FieldDescriptor, value: Any, path: _Path, depth: int) -> Any:
        kind = fd.kind
        if isinstance(kind, MapKind):
            return self.map(kind, fd, value, path, depth)
        if fd.is_repeated:
            if not _is_array(value):
                raise TypeMismatchError(f"expected a JSON array, got {_json_type(value)}", path=path)
            items = []
            for index, item in enumerate(value):
                item_path = (*path, index)
                if item is None:
                    raise TypeMismatchError("null is not allowed inside a repeated field", path=item_path)
                items.append(self.value(kind, item, item_path, depth))
            return items
        return self.value(kind, value, path, depth)

    def map(self, kind: MapKind, fd: FieldDescriptor, value: Any, path: _Path, depth: int) -> dict[Any, Any]:
        entries: dict[Any, Any] = {}
        for raw_key, item in _object_items(value, path):
            key = _parse_map_key(kind.key, raw_key, (*path, map_key_element(raw_key)))
            entry_path = (*path, map_key_element(key))
            if key in entries:
                raise DuplicateFieldError(fd.json_name, path=entry_path)
            if item is None:
                raise TypeMismatchError("null is not allowed as a map value", path=entry_path)
            entries[key] = self.value(kind.value, item, entry_path, depth)
        return entries

    def value(self, kind: FieldKind, value: Any, path: _Path, depth: int) -> Any:
        if isinstance(kind, MessageKind):
            return self.message(value, kind.descriptor, path, depth + 1)
        if isinstance(kind, EnumKind):
            return _parse_enum(kind.enum, value, path)
        if kind in INTEGER_RANGES:
            return parse_integer(kind, value, path)
        if kind is Scalar.BOOL:
            if not isinstance(value, bool):
                raise TypeMismatchError(f"expected a JSON boolean, got {_json_type(value)}", path=path)
            return value
        if kind is Scalar.STRING:
            if not isinstance(value, str):
                raise TypeMismatchError(f"expected a JSON string, got {_json_type(value)}", path=path)
            return value
        if kind is Scalar.BYTES:
            return parse_bytes(value, path)
        if kind is Scalar.TIMESTAMP:
            return _parse_timestamp(value, path)
        raise TypeMismatchError(f"unsupported field kind {kind!r}", path=path)  # pragma: no cover


# ---------------------------------------------------------------------------
# Scalar parsers
# ---------------------------------------------------------------------------


def parse_integer(kind: Scalar, value: Any, path: _Path = ()) -> int:
    """
    Parse a JSON number or decimal string as an integer of the given width.

    Args:
        kind (Scalar): One of INT32, INT64, UINT32, UINT64.
        value (Any): JSON integer, integral float, or ``-?[0-9]+`` string.
        path (tuple): Field path for diagnostics.

    Returns:
        int: Value checked against the width's range.

    Raises:
        TypeMismatchError: If value is a boolean or not a number/string.
        InvalidNumberError: If value is malformed, fractional or out of range.

    Examples:
        >>> parse_integer(Scalar.UINT64, "18446744073709551615")
        18446744073709551615
        >>> parse_integer(Scalar.INT32, 3.0)
        3
    """
    if isinstance(value, bool):
        raise TypeMismatchError(f"expected {kind.value}, got boolean", path=path)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidNumberError(f"{value!r} is not an integer", path=path)
        number = int(value)
    elif isinstance(value, str):
        if _DECIMAL_RE.fullmatch(value) is None:
            raise InvalidNumberError(f"{_preview(value)} is not a decimal integer", path=path)
        # Every supported width fits in 20 significant digits.
        if len(value.lstrip("-").lstrip("0")) > _MAX_DIGITS:
            raise InvalidNumberError(f"{_preview(value)} out of range for {kind.value}", path=path)
        try:
            number = int(value)
        except ValueError as exc:
            raise InvalidNumberError(f"{_preview(value)} is not a decimal integer", path=path) from exc
    else:
        raise TypeMismatchError(f"expected {kind.value}, got {_json_type(value)}", path=path)
    lo, hi = INTEGER_RANGES[kind]
    if not lo <= number <= hi:
        raise InvalidNumberError(f"{number} out of range for {kind.value}", path=path)
    return number


def parse_bytes(value: Any, path: _Path = ()) -> bytes:
    """
    Decode a base64 JSON string (standard or URL-safe, padding optional).

    Raises:
        TypeMismatchError: If value is not a string.
        InvalidBytesError: If value is not valid base64.

    Examples:
        >>> parse_bytes("AQID")
        b'\\x01\\x02\\x03'
        >>> parse_bytes("-_8")
        b'\\xfb\\xff'
    """
    if not isinstance(value, str):
        raise TypeMismatchError(f"expected a base64 string, got {_json_type(value)}", path=path)
    body = value.rstrip("=")
    padding = len(value) - len(body)
    if padding and (padding > 2 or len(value) % 4):
        raise InvalidBytesError(f"bad base64 padding in {value!r}", path=path)
    if len(body) % 4 == 1:
        raise InvalidBytesError(f"bad base64 length in {value!r}", path=path)
    body = body.translate(_URLSAFE_TO_STANDARD)
    try:
        return base64.b64decode(body + "=" * (-len(body) % 4), validate=True)
    except ValueError as exc:
        raise InvalidBytesError(f"invalid base64 {value!r}: {exc}", path=path) from exc


def _parse_enum(enum: EnumDescriptor, value: Any, path: _Path) -> int:
    if isinstance(value, str):
        number = enum.number_for(value)
        if number is None:
            raise UnknownEnumValueError(enum.full_name, value, path=path)
        return number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatchError(
            f"expected an enum name or number, got {_json_type(value)}", path=path
        )
    if isinstance(value, float) and not value.is_integer():
        raise UnknownEnumValueError(enum.full_name, value, path=path)
    number = int(value)
    if enum.name_for(number) is None:
        raise UnknownEnumValueError(enum.full_name, value, path=path)
    return number


def _parse_timestamp(value: Any, path: _Path) -> Timestamp:
    if not isinstance(value, str):
        raise TypeMismatchError(f"expected an RFC 3339 string, got {_json_type(value)}", path=path)
    try:
        return Timestamp.parse(value)
    except ValueError as exc:
        raise InvalidTimestampError(str(exc), path=path) from exc


def _parse_map_key(kind: Scalar, raw: Any, path: _Path) -> Any:
    if not isinstance(raw, str):
        raise TypeMismatchError(f"map keys must be strings, got {_json_type(raw)}", path=path)
    if kind is Scalar.STRING:
        return raw
    if kind is Scalar.BOOL:
        if raw == "true":
            return True
        if raw == "false":
            return False
        raise TypeMismatchError(f"map key {raw!r} is not 'true' or 'false'", path=path)
    return parse_integer(kind, raw, path)


# ---------------------------------------------------------------------------
# JSON shape helpers
# ---------------------------------------------------------------------------


def _object_items(value: Any, path: _Path) -> Iterable[tuple[Any, Any]]:
    if isinstance(value, JsonPairs):
        items: Iterable[tuple[Any, Any]] = value
    elif isinstance(value, Mapping):
        items = value.items()
    else:
        raise TypeMismatchError(f"expected a JSON object, got {_json_type(value)}", path=path)
    for key, item in items:
        if not isinstance(key, str):
            raise TypeMismatchError(f"object keys must be strings, got {_json_type(key)}", path=path)
        yield key, item


def _preview(text: str) -> str:
    if len(text) <= _PREVIEW_CHARS:
        return repr(text)
    return f"{text[:_PREVIEW_CHARS]!r}... ({len(text)} chars)"


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and not isinstance(value, JsonPairs)


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (JsonPairs, Mapping)):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__
