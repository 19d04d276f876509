"""
Declarative schema documents compiled into a SchemaRegistry.

A schema document describes one package of enums and messages in YAML or
JSON and is validated by the pydantic v2 models below before compilation:

.. code-block:: yaml

    package: demo.v1
    enums:
      - name: Status
        values: {UNSPECIFIED: 0, CONFIRMED: 1, FINALIZED: 2}
    messages:
      - name: Item
        fields:
          - {name: epoch_num, type: uint64}
          - {name: status, type: Status}
          - {name: labels, type: "map<string, uint64>"}
          - {name: parent, type: Item}
          - {name: tx_hash, type: bytes, oneof: ref}
          - {name: tx_index, type: uint32, oneof: ref}
          - {name: created, type: google.protobuf.Timestamp}

Field ``type`` is one of
- a scalar keyword: int32, int64, uint32, uint64, bool, string, bytes,
  timestamp (or google.protobuf.Timestamp);
- a type name: relative names are looked up in the document ``package``
  first, then as written; a leading dot makes a name absolute;
- ``map<K, V>`` with an integer/bool/string scalar key.

Names that resolve to neither a document type nor a type of the ``base``
registry are a SchemaError. Message references may be recursive or forward.

Notes:
    - Validation failures (pydantic or descriptor construction) surface as
      SchemaError.
    - ``.yaml``/``.yml`` files are read with PyYAML ``safe_load``; ``.json``
      files with the stdlib json module.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import SchemaError
from .naming import is_full_name, is_identifier
from .schema import (
    EnumDescriptor,
    EnumKind,
    EnumValue,
    FieldDescriptor,
    FieldKind,
    MapKind,
    MessageDescriptor,
    MessageKind,
    Presence,
    Scalar,
    SchemaRegistry,
)

__all__ = [
    "EnumSpec",
    "FieldSpec",
    "MessageSpec",
    "SchemaDocument",
    "compile_document",
    "registry_from_mapping",
    "load_schema_document",
]

logger = logging.getLogger(__name__)

SCALAR_KEYWORDS: dict[str, Scalar] = {
    "int32": Scalar.INT32,
    "int64": Scalar.INT64,
    "uint32": Scalar.UINT32,
    "uint64": Scalar.UINT64,
    "bool": Scalar.BOOL,
    "string": Scalar.STRING,
    "bytes": Scalar.BYTES,
    "timestamp": Scalar.TIMESTAMP,
    "google.protobuf.Timestamp": Scalar.TIMESTAMP,
}

_MAP_RE = re.compile(r"^map\s*<\s*([A-Za-z0-9_]+)\s*,\s*(\.?[A-Za-z_][A-Za-z0-9_.]*)\s*>$")


# ============================================================================
# Document models
# ============================================================================


class EnumSpec(BaseModel):
    """
    One enum declaration.

    Attributes:
        name (str): Simple name (qualified by the document package).
        values (dict[str, int]): Symbolic name -> number, in declaration order.
            A list of ``{name, number}`` mappings is accepted too.
        allow_alias (bool): Permit several names for one number.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    values: dict[str, int]
    allow_alias: bool = False

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not is_identifier(v):
            raise ValueError(f"enum name must be an identifier, got {v!r}")
        return v

    @field_validator("values", mode="before")
    @classmethod
    def _pairs_to_mapping(cls, v: Any) -> Any:
        """Accept ``[{name: A, number: 0}, ...]`` as well as ``{A: 0, ...}``."""
        if not isinstance(v, list):
            return v
        out: dict[str, Any] = {}
        for item in v:
            if not isinstance(item, Mapping) or set(item) != {"name", "number"}:
                raise ValueError("enum value entries need exactly 'name' and 'number'")
            if item["name"] in out:
                raise ValueError(f"duplicate enum value name {item['name']!r}")
            out[item["name"]] = item["number"]
        return out


class FieldSpec(BaseModel):
    """
    One field declaration.

    Attributes:
        name (str): Wire name (snake_case).
        type (str): Scalar keyword, type name, or ``map<K, V>``.
        label (Literal["singular","optional","repeated"]): Cardinality.
        oneof (str | None): Oneof group name.
        json_name (str | None): Override for the derived lowerCamelCase name.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str
    label: Literal["singular", "optional", "repeated"] = "singular"
    oneof: str | None = None
    json_name: str | None = None

    @field_validator("type")
    @classmethod
    def _check_type(cls, v: str) -> str:
        v = v.strip()
        if v in SCALAR_KEYWORDS or _MAP_RE.match(v) or is_full_name(v.lstrip(".")):
            return v
        raise ValueError(f"unrecognized field type {v!r}")


class MessageSpec(BaseModel):
    """One message declaration: a name and its ordered fields."""

    model_config = ConfigDict(extra="forbid")

    name: str
    fields: list[FieldSpec] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not is_identifier(v):
            raise ValueError(f"message name must be an identifier, got {v!r}")
        return v


class SchemaDocument(BaseModel):
    """
    A package of enum and message declarations.

    Raises:
        pydantic.ValidationError: If the document is malformed or declares a
            type name twice.
    """

    model_config = ConfigDict(extra="forbid")

    package: str
    enums: list[EnumSpec] = Field(default_factory=list)
    messages: list[MessageSpec] = Field(default_factory=list)

    @field_validator("package")
    @classmethod
    def _check_package(cls, v: str) -> str:
        if not is_full_name(v):
            raise ValueError(f"package must be a dotted identifier, got {v!r}")
        return v

    @model_validator(mode="after")
    def _unique_type_names(self) -> SchemaDocument:
        seen: set[str] = set()
        for spec in [*self.enums, *self.messages]:
            if spec.name in seen:
                raise ValueError(f"type {spec.name!r} is declared twice in {self.package}")
            seen.add(spec.name)
        return self

    def full_name(self, name: str) -> str:
        return f"{self.package}.{name}"


# ============================================================================
# Compilation
# ============================================================================


class _Compiler:
    """Turns a validated SchemaDocument into descriptors."""

    def __init__(self, doc: SchemaDocument, base: SchemaRegistry | None) -> None:
        self.doc = doc
        self.base = base
        self.enums: dict[str, EnumDescriptor] = {}
        self.messages: dict[str, MessageDescriptor] = {}
        self.declared = {doc.full_name(m.name) for m in doc.messages}

    def run(self) -> list[MessageDescriptor]:
        for spec in self.doc.enums:
            full = self.doc.full_name(spec.name)
            self.enums[full] = EnumDescriptor(
                full,
                tuple(EnumValue(n, v) for n, v in spec.values.items()),
                allow_alias=spec.allow_alias,
            )
        for spec in self.doc.messages:
            full = self.doc.full_name(spec.name)
            fields = tuple(self.field(full, f) for f in spec.fields)
            self.messages[full] = MessageDescriptor(full, fields)
        return list(self.messages.values())

    def field(self, owner: str, spec: FieldSpec) -> FieldDescriptor:
        try:
            kind = self.kind(spec.type)
        except SchemaError as exc:
            raise SchemaError(f"{owner}.{spec.name}: {exc.message}") from exc
        return FieldDescriptor(
            spec.name,
            kind,
            presence=Presence(spec.label),
            oneof=spec.oneof,
            json_name=spec.json_name or "",
        )

    def kind(self, type_name: str) -> FieldKind:
        if type_name in SCALAR_KEYWORDS:
            return SCALAR_KEYWORDS[type_name]
        match = _MAP_RE.match(type_name)
        if match is not None:
            key = SCALAR_KEYWORDS.get(match.group(1))
            if key is None:
                raise SchemaError(f"map key type {match.group(1)!r} is not a scalar")
            value = self.kind(match.group(2))
            return MapKind(key, value)
        return self.named(type_name)

    def named(self, type_name: str) -> FieldKind:
        if type_name.startswith("."):
            candidates = [type_name[1:]]
        else:
            candidates = [self.doc.full_name(type_name), type_name]
        for full in candidates:
            if full in self.enums:
                return EnumKind(self.enums[full])
            if full in self.declared:
                return MessageKind(lambda full=full: self.messages[full])
            if self.base is not None and full in self.base:
                try:
                    return MessageKind(self.base.describe(full))
                except KeyError:
                    return EnumKind(self.base.describe_enum(full))
        raise SchemaError(f"unknown type {type_name!r}")


def compile_document(
    doc: SchemaDocument, base: SchemaRegistry | None = None
) -> tuple[list[MessageDescriptor], list[EnumDescriptor]]:
    """
    Compile a validated document into message descriptors.

    Args:
        doc (SchemaDocument): Validated document.
        base (SchemaRegistry | None): Registry supplying types the document
            references but does not declare.

    Returns:
        tuple[list[MessageDescriptor], list[EnumDescriptor]]: Message and enum
        descriptors in declaration order.

    Raises:
        SchemaError: On unknown type names or invalid descriptors.
    """
    compiler = _Compiler(doc, base)
    messages = compiler.run()
    logger.debug(
        "compiled schema document %s: %d messages, %d enums",
        doc.package,
        len(messages),
        len(doc.enums),
    )
    return messages, list(compiler.enums.values())


def registry_from_mapping(
    data: Mapping[str, Any],
    registry: SchemaRegistry | None = None,
) -> SchemaRegistry:
    """
    Validate a parsed schema document and register its types.

    Args:
        data (Mapping[str, Any]): Parsed YAML/JSON document.
        registry (SchemaRegistry | None): Registry to extend; its types can be
            referenced by the document. A new registry is created when None.

    Returns:
        SchemaRegistry: The registry holding the document's messages and enums.

    Raises:
        SchemaError: If the document is invalid or references unknown types.

    Examples:
        >>> reg = registry_from_mapping({
        ...     "package": "demo.v1",
        ...     "messages": [{"name": "Key", "fields": [{"name": "index", "type": "uint32"}]}],
        ... })
        >>> reg.describe("demo.v1.Key").fields[0].json_name
        'index'
    """
    try:
        doc = SchemaDocument.model_validate(dict(data))
    except ValidationError as exc:
        raise SchemaError(f"invalid schema document: {exc}") from exc
    messages, enums = compile_document(doc, registry)
    target = registry if registry is not None else SchemaRegistry()
    target.register(*messages, enums=enums)
    logger.info("registered %d messages from package %s", len(messages), doc.package)
    return target


def load_schema_document(
    path: str | Path,
    registry: SchemaRegistry | None = None,
) -> SchemaRegistry:
    """
    Load a ``.yaml``/``.yml`` or ``.json`` schema document from disk.

    Raises:
        SchemaError: If the file type is unsupported, the file does not parse,
            or the document is invalid.
        OSError: If the file cannot be read.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    text = p.read_text(encoding="utf-8")
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        elif suffix == ".json":
            data = json.loads(text)
        else:
            raise SchemaError(f"unsupported schema document type {suffix!r} ({p})")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SchemaError(f"cannot parse schema document {p}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise SchemaError(f"schema document {p} must be a mapping at the top level")
    logger.debug("loading schema document %s", p)
    return registry_from_mapping(data, registry)
