"""
Descriptors for package ``babylon.btclightclient.v1``.

Schema:
- BTCHeaderInfo: header bytes, hash bytes, height uint64, work bytes
"""

from __future__ import annotations

from ..core.schema import FieldDescriptor, MessageDescriptor, Scalar

__all__ = ["BTC_HEADER_INFO_DESC", "BTCLIGHTCLIENT_MESSAGES"]

BTC_HEADER_INFO_DESC = MessageDescriptor(
    "babylon.btclightclient.v1.BTCHeaderInfo",
    (
        FieldDescriptor("header", Scalar.BYTES),
        FieldDescriptor("hash", Scalar.BYTES),
        FieldDescriptor("height", Scalar.UINT64),
        FieldDescriptor("work", Scalar.BYTES),
    ),
)

BTCLIGHTCLIENT_MESSAGES: tuple[MessageDescriptor, ...] = (BTC_HEADER_INFO_DESC,)
