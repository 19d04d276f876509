"""
Message -> canonical JSON value.

Fields are visited in schema declaration order, and the output object's keys
follow that order. A field is omitted when it holds its implicit default and
has no explicit presence:

- singular scalars/enums: omitted at 0, False, "", b"" or enum number 0;
- repeated/map: omitted when empty;
- optional fields, message/Timestamp fields and oneof members: emitted when
  present, even at a zero value, and omitted when absent.

Rendering rules
- int32/uint32 -> JSON number; int64/uint64 -> decimal JSON string.
- bytes -> standard, padded base64.
- enum -> symbolic name; an unknown number raises EnumEncodeError.
- Timestamp -> RFC 3339 UTC string.
- map keys -> strings (``"true"``/``"false"`` for bool keys).

Notes
- Pure function of its inputs: no IO, no logging, no shared mutable state.
- Encoding never mutates the instance.
"""

from __future__ import annotations

import base64
from typing import Any

from .errors import EnumEncodeError, PathElement, map_key_element
from .schema import EnumKind, FieldDescriptor, FieldKind, MapKind, MessageDescriptor, MessageKind, Scalar
from .values import Message, is_default
from .wellknown import Timestamp

__all__ = [
    "encode",
    "render_map_key",
]

_NUMBER_SCALARS = frozenset({Scalar.INT32, Scalar.UINT32})
_STRING_INT_SCALARS = frozenset({Scalar.INT64, Scalar.UINT64})


def encode(instance: Message, descriptor: MessageDescriptor | None = None) -> dict[str, Any]:
    """
    Encode a message instance to a JSON-compatible dict.

    Args:
        instance (Message): Instance to encode (borrowed, not modified).
        descriptor (MessageDescriptor | None): Schema to encode with; defaults
            to the instance's own descriptor and must be the same object when given.

    Returns:
        dict[str, Any]: JSON object keyed by JSON names in declaration order.

    Raises:
        EnumEncodeError: If an enum field holds a number with no symbolic name.
        TypeError: If descriptor does not describe instance.

    Examples:
        >>> from protojson.core.schema import FieldDescriptor, MessageDescriptor, Scalar
        >>> desc = MessageDescriptor("demo.v1.Info", (
        ...     FieldDescriptor("epoch_number", Scalar.UINT64),
        ...     FieldDescriptor("block_hash", Scalar.BYTES),
        ... ))
        >>> encode(Message(desc, epoch_number=2**64 - 1, block_hash=b"\\x01\\x02\\x03"))
        {'epochNumber': '18446744073709551615', 'blockHash': 'AQID'}
        >>> encode(Message(desc))
        {}
    """
    if descriptor is None:
        descriptor = instance.descriptor
    elif instance.descriptor is not descriptor:
        raise TypeError(
            f"cannot encode {instance.descriptor.full_name} with descriptor {descriptor.full_name}"
        )
    return _encode_message(instance, ())


def _encode_message(instance: Message, path: tuple[PathElement, ...]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for fd in instance.descriptor.fields:
        if fd.oneof is not None:
            slot = instance.oneof_value(fd.oneof)
            if slot is None or slot.field != fd.name:
                continue
            value = slot.value
        elif fd.tracks_presence:
            if not instance.has(fd.name):
                continue
            value = instance.get(fd.name)
        else:
            value = instance.get(fd.name)
            if is_default(fd, value):
                continue
        out[fd.json_name] = _encode_field(fd, value, (*path, fd.json_name))
    return out


def _encode_field(fd: FieldDescriptor, value: Any, path: tuple[PathElement, ...]) -> Any:
    kind = fd.kind
    if isinstance(kind, MapKind):
        return {
            render_map_key(kind.key, k): _encode_value(kind.value, v, (*path, map_key_element(k)))
            for k, v in value.items()
        }
    if fd.is_repeated:
        return [_encode_value(kind, v, (*path, i)) for i, v in enumerate(value)]
    return _encode_value(kind, value, path)


def _encode_value(kind: FieldKind, value: Any, path: tuple[PathElement, ...]) -> Any:
    if isinstance(kind, EnumKind):
        name = kind.enum.name_for(value)
        if name is None:
            raise EnumEncodeError(kind.enum.full_name, value, path=path)
        return name
    if isinstance(kind, MessageKind):
        return _encode_message(value, path)
    if kind in _STRING_INT_SCALARS:
        return str(int(value))
    if kind in _NUMBER_SCALARS:
        return int(value)
    if kind is Scalar.BYTES:
        return base64.b64encode(bytes(value)).decode("ascii")
    if kind is Scalar.TIMESTAMP:
        ts = value if isinstance(value, Timestamp) else Timestamp.from_datetime(value)
        return ts.to_rfc3339()
    # bool and string render natively
    return value


def render_map_key(kind: Scalar, key: Any) -> str:
    """Render a map key as its JSON object key string."""
    if kind is Scalar.BOOL:
        return "true" if key else "false"
    if kind is Scalar.STRING:
        return key
    return str(int(key))