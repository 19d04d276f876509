"""
protojson: canonical proto3 JSON codec driven by message descriptors.

## Responsibilities
- Encode `Message` instances to canonical JSON (camelCase keys, string-encoded
  64-bit integers, base64 bytes, symbolic enums, RFC 3339 timestamps).
- Decode JSON into `Message` instances, rejecting duplicate fields, oneof
  conflicts, malformed numbers/bytes and unknown enum values.
- Ship compiled-in descriptors for Babylon's checkpointing, epoching and
  zone-concierge messages (`protojson.catalog`).

## Examples
```python
from protojson import decode_json, encode_json
from protojson.catalog import get_message

desc = get_message("babylon.btccheckpoint.v1.TransactionKey")
msg = decode_json('{"index": 3, "hash": "AQID"}', desc)
encode_json(msg)  # '{"index":3,"hash":"AQID"}'
```
"""

from __future__ import annotations

from .core.config import CodecSettings
from .core.decoder import DecodeOptions, decode
from .core.encoder import encode
from .core.errors import CodecError, DecodeError, EncodeError, SchemaError
from .core.schema import (
    EnumDescriptor,
    EnumKind,
    EnumValue,
    FieldDescriptor,
    MapKind,
    MessageDescriptor,
    MessageKind,
    Presence,
    Scalar,
    SchemaRegistry,
    lookup_field,
)
from .core.serde import decode_json, encode_json
from .core.values import Message
from .core.wellknown import Timestamp

__version__ = "0.1.0"

__all__ = [
    "CodecSettings",
    "DecodeOptions",
    "decode",
    "encode",
    "decode_json",
    "encode_json",
    "CodecError",
    "DecodeError",
    "EncodeError",
    "SchemaError",
    "EnumDescriptor",
    "EnumKind",
    "EnumValue",
    "FieldDescriptor",
    "MapKind",
    "MessageDescriptor",
    "MessageKind",
    "Presence",
    "Scalar",
    "SchemaRegistry",
    "lookup_field",
    "Message",
    "Timestamp",
    "__version__",
]
