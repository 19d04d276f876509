"""
Core package aggregator for the protojson codec (schema, values, encoder/decoder, errors, settings).

## Contracts
- Schema: frozen descriptors (`schema`) and the dual-casing field resolver (`naming`).
- Values: `Message` instances with per-field presence and tagged oneof slots (`values`).
- Codec: `encoder.encode` and `decoder.decode`, plus text helpers in `serde`.
- Well-known types: `wellknown.Timestamp`.
- Errors: typed `ValueError` subclasses carrying a code and a field path (`errors`).
- Settings/logging: `config.CodecSettings`, `logging.setup_logging`.
- Schema documents: YAML/JSON declarations validated by pydantic (`document`).

## Notes
- The codec is pure: no IO, no logging on the encode/decode path, no shared mutable state.
- Descriptors are immutable after construction and safe to share across threads.
- JSON names are lowerCamelCase; decoders accept the snake_case wire name too.

## Examples
```python
from protojson.core.schema import FieldDescriptor, MessageDescriptor, Scalar
from protojson.core.values import Message
from protojson.core.encoder import encode
from protojson.core.decoder import decode

desc = MessageDescriptor("demo.v1.Info", (FieldDescriptor("epoch_number", Scalar.UINT64),))
encode(Message(desc, epoch_number=2**64 - 1))  # {'epochNumber': '18446744073709551615'}
decode({"epoch_number": "7"}, desc)["epoch_number"]  # 7
```
"""
