"""
Field naming rules and the dual-casing field name resolver.

Every field has two accepted JSON spellings: its wire name (snake_case, as
declared) and its JSON name (lowerCamelCase, derived the way protoc derives
``json_name``). Encoding always emits the JSON name; decoding accepts either.

Responsibilities
- Derive JSON names from wire names (``to_json_name``).
- Validate identifiers and fully-qualified type names.
- Resolve incoming JSON object keys to field descriptors (``FieldNameResolver``).

Notes
- Lookup is case-sensitive on exactly the two accepted spellings; there is no
  fuzzy matching and no case folding.
- A spelling shared by two different fields is a SchemaError at construction.

Examples
--------
>>> from protojson.core.naming import to_json_name
>>> to_json_name("earliest_btc_block_hash")
'earliestBtcBlockHash'
>>> to_json_name("bls_multi_sig")
'blsMultiSig'
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Final

from .errors import SchemaError

if TYPE_CHECKING:
    from .schema import FieldDescriptor

__all__ = [
    "to_json_name",
    "is_identifier",
    "is_full_name",
    "assert_identifier",
    "FieldNameResolver",
]

_IDENTIFIER_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_FULL_NAME_RE: Final[re.Pattern[str]] = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*$"
)


def to_json_name(name: str) -> str:
    """
    Derive the lowerCamelCase JSON name for a wire field name.

    Underscores are dropped and the character following each underscore is
    upper-cased; all other characters are kept verbatim (protoc semantics).

    Args:
        name (str): Wire (snake_case) field name.

    Returns:
        str: JSON field name.
    """
    out: list[str] = []
    upper_next = False
    for ch in name:
        if ch == "_":
            upper_next = True
        elif upper_next:
            out.append(ch.upper())
            upper_next = False
        else:
            out.append(ch)
    return "".join(out)


def is_identifier(value: str) -> bool:
    """Return True if value is a valid protobuf identifier."""
    return bool(_IDENTIFIER_RE.match(value or ""))


def is_full_name(value: str) -> bool:
    """Return True if value is a dot-separated sequence of identifiers."""
    return bool(_FULL_NAME_RE.match(value or ""))


def assert_identifier(value: str, what: str = "name") -> None:
    """
    Validate a protobuf identifier.

    Raises:
        SchemaError: If value is not an identifier.
    """
    if not is_identifier(value):
        raise SchemaError(f"{what} must be an identifier (got: {value!r})")


class FieldNameResolver:
    """
    Map JSON object keys to field descriptors, accepting both spellings.

    Args:
        fields (Iterable[FieldDescriptor]): Fields of one message, in declaration order.
        message_name (str): Owning message, used in error messages.

    Raises:
        SchemaError: If one spelling maps to two different fields.

    Examples:
        >>> from protojson.core.schema import FieldDescriptor, Scalar
        >>> resolver = FieldNameResolver([FieldDescriptor("epoch_num", Scalar.UINT64)])
        >>> resolver.resolve("epochNum") is resolver.resolve("epoch_num")
        True
        >>> resolver.resolve("EpochNum") is None
        True
    """

    __slots__ = ("_by_key", "_message_name")

    def __init__(self, fields: Iterable[FieldDescriptor], message_name: str = "<message>") -> None:
        self._message_name = message_name
        self._by_key: dict[str, FieldDescriptor] = {}
        for field in fields:
            for key in (field.name, field.json_name):
                existing = self._by_key.get(key)
                if existing is not None and existing.name != field.name:
                    raise SchemaError(
                        f"{message_name}: key {key!r} names both {existing.name!r} and {field.name!r}"
                    )
                self._by_key[key] = field

    def resolve(self, key: str) -> FieldDescriptor | None:
        """Return the field for an exact wire-name or JSON-name match, else None."""
        return self._by_key.get(key)

    def accepted_keys(self) -> tuple[str, ...]:
        """All spellings accepted by this resolver, in declaration order."""
        return tuple(self._by_key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_key)

    def __len__(self) -> int:
        return len(self._by_key)
