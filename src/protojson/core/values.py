"""
In-memory message instances, independent of any wire format.

``Message`` owns one value slot per declared field of its MessageDescriptor:

- singular scalar/enum fields hold a value and fall back to the zero value;
- optional, message and Timestamp fields track explicit presence;
- repeated and map fields hold a ``RepeatedField``/``MapField`` created eagerly
  at construction; in-place edits (``append``, item assignment) are validated
  like whole-field assignment;
- each oneof group is a single tagged slot (``OneofValue``), so at most one
  member can ever be populated; setting a member replaces its siblings.

Values are coerced and validated on assignment (integer widths, bytes-like to
``bytes``, enum names to numbers, ``datetime`` to Timestamp). Enum numbers
missing from the descriptor are accepted from producers that carry open enum
values and are rejected at encode time; the decoder never builds them.

Examples
--------
>>> from protojson.core.schema import FieldDescriptor, MessageDescriptor, Scalar
>>> desc = MessageDescriptor("demo.v1.Key", (
...     FieldDescriptor("index", Scalar.UINT32),
...     FieldDescriptor("hash", Scalar.BYTES),
... ))
>>> key = Message(desc, index=3, hash=bytearray(b"\\x01"))
>>> key["hash"]
b'\\x01'
>>> key.has("index"), Message(desc).has("index")
(True, False)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping, MutableSequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .constants import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, UINT32_MAX, UINT64_MAX
from .schema import (
    EnumKind,
    FieldDescriptor,
    FieldKind,
    MapKind,
    MessageDescriptor,
    MessageKind,
    Scalar,
)
from .wellknown import Timestamp

__all__ = [
    "Message",
    "OneofValue",
    "RepeatedField",
    "MapField",
    "INTEGER_RANGES",
    "zero_value",
    "is_default",
    "coerce_value",
]

INTEGER_RANGES: dict[Scalar, tuple[int, int]] = {
    Scalar.INT32: (INT32_MIN, INT32_MAX),
    Scalar.INT64: (INT64_MIN, INT64_MAX),
    Scalar.UINT32: (0, UINT32_MAX),
    Scalar.UINT64: (0, UINT64_MAX),
}


@dataclass(frozen=True)
class OneofValue:
    """The populated member of a oneof group."""

    field: str
    value: Any


def _kind_zero(kind: FieldKind) -> Any:
    if isinstance(kind, EnumKind):
        return 0
    if isinstance(kind, MessageKind) or kind is Scalar.TIMESTAMP:
        return None
    if kind is Scalar.BOOL:
        return False
    if kind is Scalar.STRING:
        return ""
    if kind is Scalar.BYTES:
        return b""
    return 0


def zero_value(fd: FieldDescriptor) -> Any:
    """Return a fresh zero/default value for a field."""
    if fd.is_repeated:
        return []
    if fd.is_map:
        return {}
    return _kind_zero(fd.kind)


def is_default(fd: FieldDescriptor, value: Any) -> bool:
    """
    True if value is the implicit default for fd.

    Covers 0, False, "", b"", enum number 0, empty repeated/map, and None for
    message/Timestamp fields.
    """
    if fd.is_repeated or fd.is_map:
        return not value
    if isinstance(fd.kind, MessageKind) or fd.kind is Scalar.TIMESTAMP:
        return value is None
    if fd.kind is Scalar.BOOL:
        return value is False
    return value == _kind_zero(fd.kind)


def _coerce_integer(kind: Scalar, value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{where}: expected int for {kind.value}, got {type(value).__name__}")
    lo, hi = INTEGER_RANGES[kind]
    if not lo <= value <= hi:
        raise ValueError(f"{where}: {value} out of range for {kind.value}")
    return int(value)


def coerce_value(kind: FieldKind, value: Any, where: str = "value") -> Any:
    """
    Validate and normalize a single (non-repeated) value for kind.

    Args:
        kind (FieldKind): Target kind (maps are handled per entry by callers).
        value (Any): Candidate Python value.
        where (str): Label used in error messages.

    Returns:
        Any: Normalized value.

    Raises:
        TypeError: If value has the wrong Python type.
        ValueError: If value is out of range or names an unknown enum symbol.
    """
    if isinstance(kind, EnumKind):
        if isinstance(value, str):
            number = kind.enum.number_for(value)
            if number is None:
                raise ValueError(f"{where}: {value!r} is not a value of enum {kind.enum.full_name}")
            return number
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{where}: expected enum name or number, got {type(value).__name__}")
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(f"{where}: enum number {value} outside int32")
        return int(value)
    if isinstance(kind, MessageKind):
        expected = kind.descriptor
        if not isinstance(value, Message) or value.descriptor is not expected:
            raise TypeError(f"{where}: expected a {expected.full_name} Message")
        return value
    if kind in INTEGER_RANGES:
        return _coerce_integer(kind, value, where)
    if kind is Scalar.BOOL:
        if not isinstance(value, bool):
            raise TypeError(f"{where}: expected bool, got {type(value).__name__}")
        return value
    if kind is Scalar.STRING:
        if not isinstance(value, str):
            raise TypeError(f"{where}: expected str, got {type(value).__name__}")
        return value
    if kind is Scalar.BYTES:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"{where}: expected bytes, got {type(value).__name__}")
        return bytes(value)
    if kind is Scalar.TIMESTAMP:
        if isinstance(value, datetime):
            return Timestamp.from_datetime(value)
        if not isinstance(value, Timestamp):
            raise TypeError(f"{where}: expected Timestamp or datetime, got {type(value).__name__}")
        return value
    raise TypeError(f"{where}: unsupported kind {kind!r}")  # pragma: no cover


class RepeatedField(MutableSequence):
    """
    List-like slot of a repeated field that validates every element it stores.

    Supports the usual in-place list operations (``append``, ``extend``,
    ``insert``, item/slice assignment, ``del``); each new element goes through
    ``coerce_value`` so the slot never holds a value the field cannot encode.
    Compares equal to lists and tuples with the same elements.
    """

    __slots__ = ("_fd", "_items")

    def __init__(self, fd: FieldDescriptor, items: Iterable[Any] = ()) -> None:
        self._fd = fd
        self._items: list[Any] = []
        self.extend(items)

    @classmethod
    def _trusted(cls, fd: FieldDescriptor, items: list[Any]) -> RepeatedField:
        # Elements were already validated (decoder, _coerce_field, copy).
        field = cls.__new__(cls)
        field._fd = fd
        field._items = items
        return field

    def _coerce(self, value: Any, index: int) -> Any:
        return coerce_value(self._fd.kind, value, f"{self._fd.name}[{index}]")

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return list(self._items[index])
        return self._items[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
                raise TypeError(f"{self._fd.name}: expected a sequence, got {type(value).__name__}")
            self._items[index] = [self._coerce(v, i) for i, v in enumerate(value)]
        else:
            self._items[index] = self._coerce(value, index)

    def __delitem__(self, index: Any) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: Any) -> None:
        self._items.insert(index, self._coerce(value, index))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RepeatedField):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return repr(self._items)


class MapField(MutableMapping):
    """Dict-like slot of a map field that validates every key and value it stores."""

    __slots__ = ("_fd", "_entries")

    def __init__(self, fd: FieldDescriptor, entries: Mapping[Any, Any] | None = None) -> None:
        self._fd = fd
        self._entries: dict[Any, Any] = {}
        if entries:
            self.update(entries)

    @classmethod
    def _trusted(cls, fd: FieldDescriptor, entries: dict[Any, Any]) -> MapField:
        field = cls.__new__(cls)
        field._fd = fd
        field._entries = entries
        return field

    def __getitem__(self, key: Any) -> Any:
        return self._entries[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        kind = self._fd.kind
        where = self._fd.name
        key = coerce_value(kind.key, key, f"{where} key")
        self._entries[key] = coerce_value(kind.value, value, f"{where}[{key!r}]")

    def __delitem__(self, key: Any) -> None:
        del self._entries[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return repr(self._entries)


def _coerce_field(fd: FieldDescriptor, value: Any) -> Any:
    where = fd.name
    if isinstance(fd.kind, MapKind):
        if not isinstance(value, Mapping):
            raise TypeError(f"{where}: expected a mapping, got {type(value).__name__}")
        return MapField(fd, value)
    if fd.is_repeated:
        if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
            raise TypeError(f"{where}: expected a sequence, got {type(value).__name__}")
        return RepeatedField(fd, value)
    return coerce_value(fd.kind, value, where)


class Message:
    """
    Mutable instance of one MessageDescriptor.

    Args:
        descriptor (MessageDescriptor): Schema of this instance.
        **values: Initial field values keyed by wire name or JSON name.

    Notes:
        - ``msg[name]`` / ``msg.get(name)`` never raise for declared fields:
          unset fields read as their zero value (None for message/Timestamp).
        - Assigning None clears a field.
        - Instances are unhashable; equality compares descriptor identity and
          the observable value/presence of every field.
    """

    __slots__ = ("_descriptor", "_values", "_oneofs")

    def __init__(self, descriptor: MessageDescriptor, /, **values: Any) -> None:
        self._descriptor = descriptor
        self._values: dict[str, Any] = {}
        self._oneofs: dict[str, OneofValue] = {}
        for fd in descriptor.fields:
            if fd.is_repeated or fd.is_map:
                self._values[fd.name] = _empty_container(fd)
        for key, value in values.items():
            self.set(key, value)

    @property
    def descriptor(self) -> MessageDescriptor:
        return self._descriptor

    # -- access ------------------------------------------------------------

    def get(self, name: str) -> Any:
        """
        Return the value of a field (wire or JSON name), or its zero value.

        Raises:
            KeyError: If the message has no such field.
        """
        fd = self._descriptor.get_field(name)
        if fd.oneof is not None:
            slot = self._oneofs.get(fd.oneof)
            if slot is not None and slot.field == fd.name:
                return slot.value
            return zero_value(fd)
        if fd.name in self._values:
            return self._values[fd.name]
        return zero_value(fd)

    def set(self, name: str, value: Any) -> None:
        """
        Assign a field, replacing any other member of its oneof group.

        Raises:
            KeyError: If the message has no such field.
            TypeError: If value has the wrong type for the field.
            ValueError: If value is out of range for the field.
        """
        fd = self._descriptor.get_field(name)
        if value is None:
            self.clear(fd.name)
            return
        self._assign(fd, _coerce_field(fd, value))

    def _assign(self, fd: FieldDescriptor, value: Any) -> None:
        # Trusted path for values that are already validated (decoder).
        if fd.oneof is not None:
            self._oneofs[fd.oneof] = OneofValue(fd.name, value)
        elif fd.is_map and not isinstance(value, MapField):
            self._values[fd.name] = MapField._trusted(fd, dict(value))
        elif fd.is_repeated and not isinstance(value, RepeatedField):
            self._values[fd.name] = RepeatedField._trusted(fd, list(value))
        else:
            self._values[fd.name] = value

    def clear(self, name: str) -> None:
        """Reset a field to absent/zero."""
        fd = self._descriptor.get_field(name)
        if fd.oneof is not None:
            slot = self._oneofs.get(fd.oneof)
            if slot is not None and slot.field == fd.name:
                del self._oneofs[fd.oneof]
        elif fd.is_repeated or fd.is_map:
            self._values[fd.name] = _empty_container(fd)
        else:
            self._values.pop(fd.name, None)

    def has(self, name: str) -> bool:
        """
        Report whether a field would be emitted by the encoder.

        Presence-tracking fields (optional, message, Timestamp, oneof members)
        report explicit presence; other fields report a non-default value.
        """
        fd = self._descriptor.get_field(name)
        if fd.oneof is not None:
            slot = self._oneofs.get(fd.oneof)
            return slot is not None and slot.field == fd.name
        if fd.tracks_presence:
            return fd.name in self._values
        return not is_default(fd, self.get(fd.name))

    def which_oneof(self, group: str) -> str | None:
        """
        Return the wire name of the populated member of a oneof group, if any.

        Raises:
            KeyError: If the message has no such oneof group.
        """
        if group not in self._descriptor.oneofs:
            raise KeyError(f"{self._descriptor.full_name} has no oneof {group!r}")
        slot = self._oneofs.get(group)
        return slot.field if slot is not None else None

    def oneof_value(self, group: str) -> OneofValue | None:
        """Return the tagged slot of a oneof group (None when unset)."""
        return self._oneofs.get(group)

    def present_fields(self) -> Iterator[tuple[FieldDescriptor, Any]]:
        """Yield ``(field, value)`` for fields that ``has()`` reports, in declaration order."""
        for fd in self._descriptor.fields:
            if self.has(fd.name):
                yield fd, self.get(fd.name)

    def copy(self) -> Message:
        """Return a deep copy (nested messages and containers are copied)."""
        clone = Message(self._descriptor)
        for fd, value in self.present_fields():
            clone._assign(fd, _deep_copy(value))
        return clone

    # -- dunder protocol -----------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        self.clear(name)

    def _state(self) -> list[tuple[str, bool, Any]]:
        return [(fd.name, self.has(fd.name), self.get(fd.name)) for fd in self._descriptor.fields]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self._descriptor is other._descriptor and self._state() == other._state()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        parts = ", ".join(f"{fd.name}={value!r}" for fd, value in self.present_fields())
        return f"{self._descriptor.name}({parts})"


def _deep_copy(value: Any) -> Any:
    if isinstance(value, Message):
        return value.copy()
    if isinstance(value, (list, RepeatedField)):
        return [_deep_copy(v) for v in value]
    if isinstance(value, (dict, MapField)):
        return {k: _deep_copy(v) for k, v in value.items()}
    return value


def _empty_container(fd: FieldDescriptor) -> RepeatedField | MapField:
    if fd.is_map:
        return MapField._trusted(fd, {})
    return RepeatedField._trusted(fd, [])
