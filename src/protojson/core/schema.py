"""
Static, immutable descriptions of message and enum types.

A MessageDescriptor is an ordered tuple of FieldDescriptors; declaration order
drives encoding output and is irrelevant for decoding. Field kinds form a small
tagged variant:

- ``Scalar`` members for integers, bool, string, bytes and Timestamp.
- ``EnumKind`` wrapping an EnumDescriptor.
- ``MessageKind`` wrapping a MessageDescriptor (or a zero-argument callable
  returning one, for recursive and forward references).
- ``MapKind`` with a scalar key kind and any non-map value kind.

Responsibilities
- Validate descriptors at construction; every failure is a SchemaError and is
  treated as an unrecoverable startup fault, never as a per-call error.
- Provide ``lookup_field`` (both spellings, via FieldNameResolver) and
  ``SchemaRegistry.describe`` (full name -> MessageDescriptor).

Notes
- Descriptors are frozen and built once; they are safe to share across threads
  because nothing mutates them after construction.
- Message descriptors compare by identity.

Examples
--------
>>> from protojson.core.schema import (
...     EnumDescriptor, EnumKind, EnumValue, FieldDescriptor, MessageDescriptor, Scalar,
... )
>>> status = EnumDescriptor(
...     "demo.v1.Status",
...     (EnumValue("UNSPECIFIED", 0), EnumValue("CONFIRMED", 1), EnumValue("FINALIZED", 2)),
... )
>>> item = MessageDescriptor(
...     "demo.v1.Item",
...     (FieldDescriptor("epoch_num", Scalar.UINT64), FieldDescriptor("status", EnumKind(status))),
... )
>>> lookup_field(item, "epochNum").name
'epoch_num'
>>> status.name_for(2)
'FINALIZED'
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .constants import INT32_MAX, INT32_MIN
from .errors import SchemaError
from .naming import FieldNameResolver, assert_identifier, is_full_name, to_json_name

__all__ = [
    "Scalar",
    "Presence",
    "EnumValue",
    "EnumDescriptor",
    "EnumKind",
    "MessageKind",
    "MapKind",
    "FieldKind",
    "FieldDescriptor",
    "MessageDescriptor",
    "SchemaRegistry",
    "lookup_field",
    "INTEGER_SCALARS",
    "MAP_KEY_SCALARS",
]

logger = logging.getLogger(__name__)


class Scalar(Enum):
    """
    Scalar field kinds.

    Notes:
        JSON rendering:
          * int32 / uint32     -> JSON number
          * int64 / uint64     -> decimal JSON string
          * bool               -> JSON boolean
          * string             -> JSON string
          * bytes              -> padded standard base64 string
          * timestamp          -> RFC 3339 string (google.protobuf.Timestamp)
    """

    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"
    TIMESTAMP = "timestamp"


INTEGER_SCALARS: frozenset[Scalar] = frozenset(
    {Scalar.INT32, Scalar.INT64, Scalar.UINT32, Scalar.UINT64}
)
MAP_KEY_SCALARS: frozenset[Scalar] = INTEGER_SCALARS | {Scalar.BOOL, Scalar.STRING}


class Presence(Enum):
    """Field cardinality: implicit-default singular, explicit-presence optional, or repeated."""

    SINGULAR = "singular"
    OPTIONAL = "optional"
    REPEATED = "repeated"


# ============================================================================
# Enums
# ============================================================================


@dataclass(frozen=True)
class EnumValue:
    """One symbolic name/number pair of an enum."""

    name: str
    number: int


@dataclass(frozen=True)
class EnumDescriptor:
    """
    Ordered enum table.

    Attributes:
        full_name (str): Fully-qualified enum name (e.g., "babylon.epoching.v1.BondState").
        values (tuple[EnumValue, ...]): Declared values in order.
        allow_alias (bool): Permit several names for one number; the first
            declared name is used when encoding.

    Raises:
        SchemaError: If the table is empty, has no value 0, repeats a name,
            repeats a number without allow_alias, or holds a number outside int32.
    """

    full_name: str
    values: tuple[EnumValue, ...]
    allow_alias: bool = False
    _by_name: dict[str, int] = field(init=False, repr=False, compare=False, hash=False)
    _by_number: dict[int, str] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        if not is_full_name(self.full_name):
            raise SchemaError(f"enum name must be a dotted identifier (got: {self.full_name!r})")
        values = tuple(self.values)
        object.__setattr__(self, "values", values)
        if not values:
            raise SchemaError(f"enum {self.full_name} declares no values")
        by_name: dict[str, int] = {}
        by_number: dict[int, str] = {}
        for value in values:
            assert_identifier(value.name, f"{self.full_name} value name")
            if isinstance(value.number, bool) or not isinstance(value.number, int):
                raise SchemaError(f"{self.full_name}.{value.name}: number must be an int")
            if not INT32_MIN <= value.number <= INT32_MAX:
                raise SchemaError(f"{self.full_name}.{value.name}: {value.number} outside int32")
            if value.name in by_name:
                raise SchemaError(f"{self.full_name}: duplicate value name {value.name!r}")
            if value.number in by_number and not self.allow_alias:
                raise SchemaError(
                    f"{self.full_name}: {value.name!r} reuses number {value.number} "
                    f"of {by_number[value.number]!r} (set allow_alias)"
                )
            by_name[value.name] = value.number
            by_number.setdefault(value.number, value.name)
        if 0 not in by_number:
            raise SchemaError(f"enum {self.full_name} has no value for number 0")
        object.__setattr__(self, "_by_name", by_name)
        object.__setattr__(self, "_by_number", by_number)

    @classmethod
    def from_pairs(cls, full_name: str, pairs: Iterable[tuple[str, int]], **kwargs: bool) -> EnumDescriptor:
        """Build from ``(name, number)`` pairs."""
        return cls(full_name, tuple(EnumValue(n, v) for n, v in pairs), **kwargs)

    @property
    def default_name(self) -> str:
        """Symbolic name of number 0."""
        return self._by_number[0]

    def name_for(self, number: int) -> str | None:
        """Return the symbolic name for number, or None if unknown."""
        return self._by_number.get(number)

    def number_for(self, name: str) -> int | None:
        """Return the number for a symbolic name (case-sensitive), or None."""
        return self._by_name.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(v.name for v in self.values)


# ============================================================================
# Field kinds
# ============================================================================


@dataclass(frozen=True)
class EnumKind:
    """Field kind holding a number of the wrapped enum."""

    enum: EnumDescriptor


@dataclass(frozen=True, eq=False)
class MessageKind:
    """
    Field kind holding a nested message.

    ``target`` is either a MessageDescriptor or a zero-argument callable that
    returns one; the callable form allows self-referencing and forward
    references without mutating descriptors after construction.
    """

    target: MessageDescriptor | Callable[[], MessageDescriptor]

    @property
    def descriptor(self) -> MessageDescriptor:
        target = self.target
        if isinstance(target, MessageDescriptor):
            return target
        resolved = target()
        if not isinstance(resolved, MessageDescriptor):
            raise SchemaError(f"message reference resolved to {type(resolved).__name__}")
        return resolved

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageKind):
            return NotImplemented
        return self.descriptor is other.descriptor

    def __hash__(self) -> int:
        # Resolved lazily so a thunk and a direct reference hash alike.
        return id(self.descriptor)


@dataclass(frozen=True)
class MapKind:
    """
    Field kind holding a mapping.

    Raises:
        SchemaError: If the key is not an integer/bool/string scalar, or the value is a map.
    """

    key: Scalar
    value: FieldKind

    def __post_init__(self) -> None:
        if self.key not in MAP_KEY_SCALARS:
            raise SchemaError(f"map key kind must be integer, bool or string (got {self.key})")
        if isinstance(self.value, MapKind):
            raise SchemaError("map values cannot themselves be maps")
        if not isinstance(self.value, (Scalar, EnumKind, MessageKind)):
            raise SchemaError(f"unsupported map value kind {self.value!r}")


FieldKind = Union[Scalar, EnumKind, MessageKind, MapKind]


# ============================================================================
# Fields and messages
# ============================================================================


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One declared field.

    Attributes:
        name (str): Wire name (snake_case as declared).
        kind (FieldKind): Scalar, EnumKind, MessageKind or MapKind.
        presence (Presence): SINGULAR, OPTIONAL or REPEATED.
        oneof (str | None): Oneof group this field belongs to.
        json_name (str): lowerCamelCase JSON name; derived from name when empty.

    Raises:
        SchemaError: On invalid names or unsupported kind/presence combinations.
    """

    name: str
    kind: FieldKind
    presence: Presence = Presence.SINGULAR
    oneof: str | None = None
    json_name: str = ""

    def __post_init__(self) -> None:
        assert_identifier(self.name, "field name")
        if not self.json_name:
            object.__setattr__(self, "json_name", to_json_name(self.name))
        if not isinstance(self.kind, (Scalar, EnumKind, MessageKind, MapKind)):
            raise SchemaError(f"field {self.name!r}: unsupported kind {self.kind!r}")
        if isinstance(self.kind, MapKind) and self.presence is not Presence.SINGULAR:
            raise SchemaError(f"map field {self.name!r} cannot be {self.presence.value}")
        if self.oneof is not None:
            assert_identifier(self.oneof, "oneof name")
            if self.presence is not Presence.SINGULAR:
                raise SchemaError(f"oneof member {self.name!r} cannot be {self.presence.value}")
            if isinstance(self.kind, MapKind):
                raise SchemaError(f"oneof member {self.name!r} cannot be a map")

    @property
    def is_repeated(self) -> bool:
        return self.presence is Presence.REPEATED

    @property
    def is_map(self) -> bool:
        return isinstance(self.kind, MapKind)

    @property
    def tracks_presence(self) -> bool:
        """True if "set to the zero value" differs from "absent" for this field."""
        if self.presence is Presence.REPEATED or self.is_map:
            return False
        if self.oneof is not None or self.presence is Presence.OPTIONAL:
            return True
        return isinstance(self.kind, MessageKind) or self.kind is Scalar.TIMESTAMP


@dataclass(frozen=True, eq=False)
class MessageDescriptor:
    """
    Ordered field table for one message type.

    Attributes:
        full_name (str): Fully-qualified message name.
        fields (tuple[FieldDescriptor, ...]): Fields in declaration order.

    Raises:
        SchemaError: On duplicate field names or spelling collisions between fields.

    Notes:
        - ``oneofs`` maps each group name to its member field names in order.
        - ``lookup_field`` accepts either spelling of a field name.
    """

    full_name: str
    fields: tuple[FieldDescriptor, ...]
    _resolver: FieldNameResolver = field(init=False, repr=False)
    _by_name: dict[str, FieldDescriptor] = field(init=False, repr=False)
    _oneofs: dict[str, tuple[str, ...]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not is_full_name(self.full_name):
            raise SchemaError(f"message name must be a dotted identifier (got: {self.full_name!r})")
        fields = tuple(self.fields)
        object.__setattr__(self, "fields", fields)
        by_name: dict[str, FieldDescriptor] = {}
        oneofs: dict[str, list[str]] = {}
        for fd in fields:
            if not isinstance(fd, FieldDescriptor):
                raise SchemaError(f"{self.full_name}: expected FieldDescriptor, got {fd!r}")
            if fd.name in by_name:
                raise SchemaError(f"{self.full_name}: duplicate field name {fd.name!r}")
            by_name[fd.name] = fd
            if fd.oneof is not None:
                oneofs.setdefault(fd.oneof, []).append(fd.name)
        for group in oneofs:
            if group in by_name:
                raise SchemaError(f"{self.full_name}: oneof {group!r} clashes with a field")
        object.__setattr__(self, "_resolver", FieldNameResolver(fields, self.full_name))
        object.__setattr__(self, "_by_name", by_name)
        object.__setattr__(self, "_oneofs", {k: tuple(v) for k, v in oneofs.items()})

    @property
    def name(self) -> str:
        """Short (unqualified) message name."""
        return self.full_name.rsplit(".", 1)[-1]

    @property
    def oneofs(self) -> dict[str, tuple[str, ...]]:
        return dict(self._oneofs)

    def get_field(self, name: str) -> FieldDescriptor:
        """
        Return a field by exact wire name or JSON name.

        Raises:
            KeyError: If no such field exists.
        """
        fd = self._by_name.get(name) or self._resolver.resolve(name)
        if fd is None:
            raise KeyError(f"{self.full_name} has no field {name!r}")
        return fd

    def lookup_field(self, key: str) -> FieldDescriptor | None:
        return self._resolver.resolve(key)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


def lookup_field(descriptor: MessageDescriptor, name: str) -> FieldDescriptor | None:
    """
    Resolve a JSON key (either casing) to a field of descriptor.

    Args:
        descriptor (MessageDescriptor): Message to search.
        name (str): Wire name or JSON name, matched case-sensitively.

    Returns:
        FieldDescriptor | None: The field, or None if neither spelling matches.
    """
    return descriptor.lookup_field(name)


# ============================================================================
# Registry
# ============================================================================


class SchemaRegistry:
    """
    Queryable set of message and enum descriptors keyed by full name.

    ``register`` walks nested message and enum kinds transitively, so
    registering a top-level message registers everything it references.

    Raises:
        SchemaError: If two different descriptors share a full name.

    Examples:
        >>> from protojson.core.schema import FieldDescriptor, MessageDescriptor, Scalar
        >>> leaf = MessageDescriptor("demo.v1.Leaf", (FieldDescriptor("hash", Scalar.BYTES),))
        >>> reg = SchemaRegistry([leaf])
        >>> reg.describe("demo.v1.Leaf") is leaf
        True
    """

    def __init__(
        self,
        messages: Iterable[MessageDescriptor] = (),
        enums: Iterable[EnumDescriptor] = (),
    ) -> None:
        self._messages: dict[str, MessageDescriptor] = {}
        self._enums: dict[str, EnumDescriptor] = {}
        self.register(*messages, enums=enums)

    def register(self, *descriptors: MessageDescriptor, enums: Iterable[EnumDescriptor] = ()) -> None:
        """
        Register descriptors, every message/enum they reference, and ``enums``.

        All-or-nothing: the whole batch is checked before anything is added,
        so a conflict leaves the registry unchanged.

        Raises:
            SchemaError: If a name is already bound to a different descriptor.
        """
        staged_messages: dict[str, MessageDescriptor] = {}
        staged_enums: dict[str, EnumDescriptor] = {}
        for enum in enums:
            self._stage_enum(staged_enums, enum)
        pending = list(descriptors)
        while pending:
            desc = pending.pop()
            existing = staged_messages.get(desc.full_name)
            if existing is None:
                existing = self._messages.get(desc.full_name)
            if existing is desc:
                continue
            if existing is not None:
                raise SchemaError(f"two different descriptors named {desc.full_name}")
            staged_messages[desc.full_name] = desc
            for fd in desc.fields:
                kind = fd.kind.value if isinstance(fd.kind, MapKind) else fd.kind
                if isinstance(kind, MessageKind):
                    pending.append(kind.descriptor)
                elif isinstance(kind, EnumKind):
                    self._stage_enum(staged_enums, kind.enum)

        self._enums.update(staged_enums)
        self._messages.update(staged_messages)
        for enum in staged_enums.values():
            logger.debug("registered enum %s (%d values)", enum.full_name, len(enum.values))
        for desc in staged_messages.values():
            logger.debug("registered message %s (%d fields)", desc.full_name, len(desc.fields))

    def register_enums(self, *enums: EnumDescriptor) -> None:
        """Register enums that no registered message references."""
        self.register(enums=enums)

    def _stage_enum(self, staged: dict[str, EnumDescriptor], enum: EnumDescriptor) -> None:
        existing = staged.get(enum.full_name)
        if existing is None:
            existing = self._enums.get(enum.full_name)
        if existing is None:
            staged[enum.full_name] = enum
        elif existing != enum:
            raise SchemaError(f"two different enums named {enum.full_name}")

    def describe(self, message_type: str) -> MessageDescriptor:
        """
        Look up a message descriptor by full name.

        Raises:
            KeyError: If the message type is not registered.
        """
        try:
            return self._messages[message_type]
        except KeyError as exc:
            raise KeyError(f"unknown message type: {message_type}") from exc

    def describe_enum(self, enum_type: str) -> EnumDescriptor:
        """
        Look up an enum descriptor by full name.

        Raises:
            KeyError: If the enum type is not registered.
        """
        try:
            return self._enums[enum_type]
        except KeyError as exc:
            raise KeyError(f"unknown enum type: {enum_type}") from exc

    def list_messages(self) -> list[MessageDescriptor]:
        """All registered messages sorted by full name."""
        return [self._messages[k] for k in sorted(self._messages)]

    def list_enums(self) -> list[EnumDescriptor]:
        return [self._enums[k] for k in sorted(self._enums)]

    def __contains__(self, full_name: object) -> bool:
        return full_name in self._messages or full_name in self._enums

    def __len__(self) -> int:
        return len(self._messages)
