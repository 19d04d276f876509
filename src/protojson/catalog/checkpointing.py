"""
Descriptors for package ``babylon.checkpointing.v1``.

Purpose:
- Raw BLS-signed epoch checkpoints, their status lifecycle, and the
  validator/BLS key pairs they are verified against.

Schema:
- enums: CheckpointStatus (CKPT_STATUS_ACCUMULATING=0, CKPT_STATUS_SEALED=1,
  CKPT_STATUS_SUBMITTED=2, CKPT_STATUS_CONFIRMED=3, CKPT_STATUS_FINALIZED=4)
- messages: RawCheckpoint, CheckpointStateUpdate, RawCheckpointWithMeta,
  BlsSig, ValidatorWithBlsKey
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

__all__ = [
    "CHECKPOINT_STATUS_ENUM",
    "RAW_CHECKPOINT_DESC",
    "CHECKPOINT_STATE_UPDATE_DESC",
    "RAW_CHECKPOINT_WITH_META_DESC",
    "BLS_SIG_DESC",
    "VALIDATOR_WITH_BLS_KEY_DESC",
    "CHECKPOINTING_MESSAGES",
]

PACKAGE = "babylon.checkpointing.v1"

CHECKPOINT_STATUS_ENUM = EnumDescriptor(
    f"{PACKAGE}.CheckpointStatus",
    (
        EnumValue("CKPT_STATUS_ACCUMULATING", 0),
        EnumValue("CKPT_STATUS_SEALED", 1),
        EnumValue("CKPT_STATUS_SUBMITTED", 2),
        EnumValue("CKPT_STATUS_CONFIRMED", 3),
        EnumValue("CKPT_STATUS_FINALIZED", 4),
    ),
)

RAW_CHECKPOINT_DESC = MessageDescriptor(
    f"{PACKAGE}.RawCheckpoint",
    (
        FieldDescriptor("epoch_num", Scalar.UINT64),
        FieldDescriptor("last_commit_hash", Scalar.BYTES),
        FieldDescriptor("bitmap", Scalar.BYTES),
        FieldDescriptor("bls_multi_sig", Scalar.BYTES),
    ),
)

CHECKPOINT_STATE_UPDATE_DESC = MessageDescriptor(
    f"{PACKAGE}.CheckpointStateUpdate",
    (
        FieldDescriptor("state", EnumKind(CHECKPOINT_STATUS_ENUM)),
        FieldDescriptor("block_height", Scalar.UINT64),
        FieldDescriptor("block_time", Scalar.TIMESTAMP),
    ),
)

RAW_CHECKPOINT_WITH_META_DESC = MessageDescriptor(
    f"{PACKAGE}.RawCheckpointWithMeta",
    (
        FieldDescriptor("ckpt", MessageKind(RAW_CHECKPOINT_DESC)),
        FieldDescriptor("status", EnumKind(CHECKPOINT_STATUS_ENUM)),
        FieldDescriptor("bls_aggr_pk", Scalar.BYTES),
        FieldDescriptor("power_sum", Scalar.UINT64),
        FieldDescriptor("lifecycle", MessageKind(CHECKPOINT_STATE_UPDATE_DESC), Presence.REPEATED),
    ),
)

BLS_SIG_DESC = MessageDescriptor(
    f"{PACKAGE}.BlsSig",
    (
        FieldDescriptor("epoch_num", Scalar.UINT64),
        FieldDescriptor("last_commit_hash", Scalar.BYTES),
        FieldDescriptor("bls_sig", Scalar.BYTES),
        FieldDescriptor("signer_address", Scalar.STRING),
    ),
)

VALIDATOR_WITH_BLS_KEY_DESC = MessageDescriptor(
    f"{PACKAGE}.ValidatorWithBlsKey",
    (
        FieldDescriptor("validator_address", Scalar.STRING),
        FieldDescriptor("bls_pub_key", Scalar.BYTES),
        FieldDescriptor("voting_power", Scalar.UINT64),
    ),
)

CHECKPOINTING_MESSAGES: tuple[MessageDescriptor, ...] = (
    RAW_CHECKPOINT_DESC,
    CHECKPOINT_STATE_UPDATE_DESC,
    RAW_CHECKPOINT_WITH_META_DESC,
    BLS_SIG_DESC,
    VALIDATOR_WITH_BLS_KEY_DESC,
)
