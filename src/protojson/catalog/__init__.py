"""
Compiled-in descriptors for the Babylon chain's JSON-facing messages.

Notes:
    - One module per protobuf package; ``external`` holds the tendermint and
      cosmos-sdk types Babylon messages embed.
    - Descriptors are built at import and never mutated; CATALOG is safe to
      share across threads.
    - Full names match the protobuf package names (e.g.
      ``babylon.btccheckpoint.v1.BTCCheckpointInfo``).

Examples:
    >>> from protojson.catalog import get_message
    >>> get_message("babylon.epoching.v1.Validator").fields[1].json_name
    'power'
"""

from __future__ import annotations

import logging

from ..core.schema import EnumDescriptor, MessageDescriptor, SchemaRegistry
from .btccheckpoint import BTC_STATUS_ENUM, BTCCHECKPOINT_MESSAGES
from .btclightclient import BTCLIGHTCLIENT_MESSAGES
from .checkpointing import CHECKPOINT_STATUS_ENUM, CHECKPOINTING_MESSAGES
from .epoching import BOND_STATE_ENUM, EPOCHING_MESSAGES
from .external import EXTERNAL_MESSAGES
from .zoneconcierge import ZONECONCIERGE_MESSAGES

__all__ = [
    "CATALOG",
    "PACKAGES",
    "get_message",
    "get_enum",
    "list_messages",
]

logger = logging.getLogger(__name__)

# Registry
PACKAGES: dict[str, tuple[MessageDescriptor, ...]] = {
    "babylon.btccheckpoint.v1": BTCCHECKPOINT_MESSAGES,
    "babylon.btclightclient.v1": BTCLIGHTCLIENT_MESSAGES,
    "babylon.checkpointing.v1": CHECKPOINTING_MESSAGES,
    "babylon.epoching.v1": EPOCHING_MESSAGES,
    "babylon.zoneconcierge.v1": ZONECONCIERGE_MESSAGES,
}

CATALOG = SchemaRegistry(
    [*EXTERNAL_MESSAGES, *(d for msgs in PACKAGES.values() for d in msgs)],
    enums=[BTC_STATUS_ENUM, CHECKPOINT_STATUS_ENUM, BOND_STATE_ENUM],
)
logger.debug("catalog holds %d messages", len(CATALOG))


def get_message(name: str) -> MessageDescriptor:
    """
    Look up a catalog message by full name.

    Args:
        name (str): Fully-qualified message name.

    Returns:
        MessageDescriptor: Descriptor for the requested message.

    Raises:
        KeyError: If the catalog has no such message.
    """
    return CATALOG.describe(name)


def get_enum(name: str) -> EnumDescriptor:
    """Look up a catalog enum by full name (KeyError if absent)."""
    return CATALOG.describe_enum(name)


def list_messages(package: str | None = None) -> list[MessageDescriptor]:
    """
    Return catalog messages sorted by full name.

    Args:
        package (str | None): Restrict to one protobuf package (e.g.
            "babylon.epoching.v1"); external types are included when None.

    Returns:
        list[MessageDescriptor]: Matching descriptors.
    """
    if package is None:
        return CATALOG.list_messages()
    return [d for d in CATALOG.list_messages() if d.full_name.rsplit(".", 1)[0] == package]
