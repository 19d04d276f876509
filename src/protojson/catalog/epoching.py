"""
Descriptors for package ``babylon.epoching.v1``.

Purpose:
- Epoch boundaries, the queue of staking messages delayed to the end of an
  epoch, and validator/delegation bond-state lifecycles.

Schema:
- enums: BondState (CREATED=0, BONDED=1, UNBONDING=2, UNBONDED=3, REMOVED=4)
- messages: Epoch, QueuedMessage, QueuedMessageList, ValStateUpdate,
  ValidatorLifecycle, DelegationStateUpdate, DelegationLifecycle, Validator

Notes:
- QueuedMessage carries exactly one staking message in oneof ``msg``
  (msg_create_validator | msg_delegate | msg_undelegate | msg_begin_redelegate).
- Validator.power is int64; every other counter here is uint64.
"""

from __future__ import annotations

from ..core.schema import (
    EnumDescriptor,
    EnumKind,
    EnumValue,
    FieldDescriptor,
    MessageDescriptor,
    MessageKind,
    Presence,
    Scalar,
)
from .external import (
    HEADER_DESC,
    MSG_BEGIN_REDELEGATE_DESC,
    MSG_CREATE_VALIDATOR_DESC,
    MSG_DELEGATE_DESC,
    MSG_UNDELEGATE_DESC,
)

__all__ = [
    "BOND_STATE_ENUM",
    "EPOCH_DESC",
    "QUEUED_MESSAGE_DESC",
    "QUEUED_MESSAGE_LIST_DESC",
    "VAL_STATE_UPDATE_DESC",
    "VALIDATOR_LIFECYCLE_DESC",
    "DELEGATION_STATE_UPDATE_DESC",
    "DELEGATION_LIFECYCLE_DESC",
    "VALIDATOR_DESC",
    "EPOCHING_MESSAGES",
]

PACKAGE = "babylon.epoching.v1"

BOND_STATE_ENUM = EnumDescriptor(
    f"{PACKAGE}.BondState",
    (
        EnumValue("CREATED", 0),
        EnumValue("BONDED", 1),
        EnumValue("UNBONDING", 2),
        EnumValue("UNBONDED", 3),
        EnumValue("REMOVED", 4),
    ),
)

EPOCH_DESC = MessageDescriptor(
    f"{PACKAGE}.Epoch",
    (
        FieldDescriptor("epoch_number", Scalar.UINT64),
        FieldDescriptor("current_epoch_interval", Scalar.UINT64),
        FieldDescriptor("first_block_height", Scalar.UINT64),
        FieldDescriptor("last_block_header", MessageKind(HEADER_DESC)),
        FieldDescriptor("app_hash_root", Scalar.BYTES),
        FieldDescriptor("sealer_header", MessageKind(HEADER_DESC)),
    ),
)

QUEUED_MESSAGE_DESC = MessageDescriptor(
    f"{PACKAGE}.QueuedMessage",
    (
        FieldDescriptor("tx_id", Scalar.BYTES),
        FieldDescriptor("msg_id", Scalar.BYTES),
        FieldDescriptor("block_height", Scalar.UINT64),
        FieldDescriptor("block_time", Scalar.TIMESTAMP),
        FieldDescriptor("msg_create_validator", MessageKind(MSG_CREATE_VALIDATOR_DESC), oneof="msg"),
        FieldDescriptor("msg_delegate", MessageKind(MSG_DELEGATE_DESC), oneof="msg"),
        FieldDescriptor("msg_undelegate", MessageKind(MSG_UNDELEGATE_DESC), oneof="msg"),
        FieldDescriptor("msg_begin_redelegate", MessageKind(MSG_BEGIN_REDELEGATE_DESC), oneof="msg"),
    ),
)

QUEUED_MESSAGE_LIST_DESC = MessageDescriptor(
    f"{PACKAGE}.QueuedMessageList",
    (
        FieldDescriptor("epoch_number", Scalar.UINT64),
        FieldDescriptor("msgs", MessageKind(QUEUED_MESSAGE_DESC), Presence.REPEATED),
    ),
)

VAL_STATE_UPDATE_DESC = MessageDescriptor(
    f"{PACKAGE}.ValStateUpdate",
    (
        FieldDescriptor("state", EnumKind(BOND_STATE_ENUM)),
        FieldDescriptor("block_height", Scalar.UINT64),
        FieldDescriptor("block_time", Scalar.TIMESTAMP),
    ),
)

VALIDATOR_LIFECYCLE_DESC = MessageDescriptor(
    f"{PACKAGE}.ValidatorLifecycle",
    (
        FieldDescriptor("val_addr", Scalar.STRING),
        FieldDescriptor("val_life", MessageKind(VAL_STATE_UPDATE_DESC), Presence.REPEATED),
    ),
)

DELEGATION_STATE_UPDATE_DESC = MessageDescriptor(
    f"{PACKAGE}.DelegationStateUpdate",
    (
        FieldDescriptor("state", EnumKind(BOND_STATE_ENUM)),
        FieldDescriptor("val_addr", Scalar.STRING),
        FieldDescriptor("block_height", Scalar.UINT64),
        FieldDescriptor("block_time", Scalar.TIMESTAMP),
    ),
)

DELEGATION_LIFECYCLE_DESC = MessageDescriptor(
    f"{PACKAGE}.DelegationLifecycle",
    (
        FieldDescriptor("del_addr", Scalar.STRING),
        FieldDescriptor("del_life", MessageKind(DELEGATION_STATE_UPDATE_DESC), Presence.REPEATED),
    ),
)

VALIDATOR_DESC = MessageDescriptor(
    f"{PACKAGE}.Validator",
    (
        FieldDescriptor("addr", Scalar.BYTES),
        FieldDescriptor("power", Scalar.INT64),
    ),
)

EPOCHING_MESSAGES: tuple[MessageDescriptor, ...] = (
    EPOCH_DESC,
    QUEUED_MESSAGE_DESC,
    QUEUED_MESSAGE_LIST_DESC,
    VAL_STATE_UPDATE_DESC,
    VALIDATOR_LIFECYCLE_DESC,
    DELEGATION_STATE_UPDATE_DESC,
    DELEGATION_LIFECYCLE_DESC,
    VALIDATOR_DESC,
)
