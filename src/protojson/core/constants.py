"""
Numeric limits and defaults shared by the codec.

Defines integer width bounds, the Timestamp validity window and decode
defaults consumed by the encoder, decoder, value model and settings. This
module is zero-IO and uses only the Python standard library.

Notes:
    - Integer bounds follow the protobuf scalar widths.
    - The Timestamp window is 0001-01-01T00:00:00Z .. 9999-12-31T23:59:59Z,
      matching the canonical JSON mapping for google.protobuf.Timestamp.
"""

from __future__ import annotations

__all__ = [
    "INT32_MIN",
    "INT32_MAX",
    "UINT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "TIMESTAMP_MIN_SECONDS",
    "TIMESTAMP_MAX_SECONDS",
    "NANOS_PER_SECOND",
    "DEFAULT_MAX_DEPTH",
    "ENV_PREFIX",
]

INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1
UINT32_MAX: int = 2**32 - 1
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1
UINT64_MAX: int = 2**64 - 1

# Seconds relative to the Unix epoch.
TIMESTAMP_MIN_SECONDS: int = -62135596800
TIMESTAMP_MAX_SECONDS: int = 253402300799
NANOS_PER_SECOND: int = 1_000_000_000

# Nesting cap applied by the decoder unless callers configure another one.
DEFAULT_MAX_DEPTH: int = 100

# Prefix for environment-variable configuration (see protojson.core.config).
ENV_PREFIX: str = "PROTOJSON_"
