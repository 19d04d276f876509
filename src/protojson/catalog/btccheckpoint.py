"""
Descriptors for package ``babylon.btccheckpoint.v1``.

Purpose:
- Bitcoin checkpoint submissions: SPV proofs, submission keys/data, and the
  per-epoch checkpoint info served by queries.

Schema:
- enums: BtcStatus (EPOCH_STATUS_SUBMITTED=0, EPOCH_STATUS_CONFIRMED=1,
  EPOCH_STATUS_FINALIZED=2)
- messages: BTCSpvProof, TransactionKey, TransactionInfo, SubmissionKey,
  CheckpointAddresses, SubmissionData, EpochData, BTCCheckpointInfo

Notes:
- Block numbers and epochs are uint64 (JSON strings); transaction indexes
  are uint32 (JSON numbers).
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
    "BTC_STATUS_ENUM",
    "BTC_SPV_PROOF_DESC",
    "TRANSACTION_KEY_DESC",
    "TRANSACTION_INFO_DESC",
    "SUBMISSION_KEY_DESC",
    "CHECKPOINT_ADDRESSES_DESC",
    "SUBMISSION_DATA_DESC",
    "EPOCH_DATA_DESC",
    "BTC_CHECKPOINT_INFO_DESC",
    "BTCCHECKPOINT_MESSAGES",
]

PACKAGE = "babylon.btccheckpoint.v1"

BTC_STATUS_ENUM = EnumDescriptor(
    f"{PACKAGE}.BtcStatus",
    (
        EnumValue("EPOCH_STATUS_SUBMITTED", 0),
        EnumValue("EPOCH_STATUS_CONFIRMED", 1),
        EnumValue("EPOCH_STATUS_FINALIZED", 2),
    ),
)

BTC_SPV_PROOF_DESC = MessageDescriptor(
    f"{PACKAGE}.BTCSpvProof",
    (
        FieldDescriptor("btc_transaction", Scalar.BYTES),
        FieldDescriptor("btc_transaction_index", Scalar.UINT32),
        FieldDescriptor("merkle_nodes", Scalar.BYTES),
        FieldDescriptor("confirming_btc_header", Scalar.BYTES),
    ),
)

TRANSACTION_KEY_DESC = MessageDescriptor(
    f"{PACKAGE}.TransactionKey",
    (
        FieldDescriptor("index", Scalar.UINT32),
        FieldDescriptor("hash", Scalar.BYTES),
    ),
)

TRANSACTION_INFO_DESC = MessageDescriptor(
    f"{PACKAGE}.TransactionInfo",
    (
        FieldDescriptor("key", MessageKind(TRANSACTION_KEY_DESC)),
        FieldDescriptor("transaction", Scalar.BYTES),
        FieldDescriptor("proof", Scalar.BYTES),
    ),
)

SUBMISSION_KEY_DESC = MessageDescriptor(
    f"{PACKAGE}.SubmissionKey",
    (FieldDescriptor("key", MessageKind(TRANSACTION_KEY_DESC), Presence.REPEATED),),
)

CHECKPOINT_ADDRESSES_DESC = MessageDescriptor(
    f"{PACKAGE}.CheckpointAddresses",
    (
        FieldDescriptor("submitter", Scalar.BYTES),
        FieldDescriptor("reporter", Scalar.BYTES),
    ),
)

SUBMISSION_DATA_DESC = MessageDescriptor(
    f"{PACKAGE}.SubmissionData",
    (
        FieldDescriptor("vigilante_addresses", MessageKind(CHECKPOINT_ADDRESSES_DESC)),
        FieldDescriptor("txs_info", MessageKind(TRANSACTION_INFO_DESC), Presence.REPEATED),
        FieldDescriptor("epoch", Scalar.UINT64),
    ),
)

EPOCH_DATA_DESC = MessageDescriptor(
    f"{PACKAGE}.EpochData",
    (
        FieldDescriptor("key", MessageKind(SUBMISSION_KEY_DESC), Presence.REPEATED),
        FieldDescriptor("status", EnumKind(BTC_STATUS_ENUM)),
    ),
)

BTC_CHECKPOINT_INFO_DESC = MessageDescriptor(
    f"{PACKAGE}.BTCCheckpointInfo",
    (
        FieldDescriptor("epoch_number", Scalar.UINT64),
        FieldDescriptor("earliest_btc_block_number", Scalar.UINT64),
        FieldDescriptor("earliest_btc_block_hash", Scalar.BYTES),
        FieldDescriptor(
            "earliest_btc_block_txs", MessageKind(TRANSACTION_INFO_DESC), Presence.REPEATED
        ),
        FieldDescriptor(
            "vigilante_address_list", MessageKind(CHECKPOINT_ADDRESSES_DESC), Presence.REPEATED
        ),
    ),
)

BTCCHECKPOINT_MESSAGES: tuple[MessageDescriptor, ...] = (
    BTC_SPV_PROOF_DESC,
    TRANSACTION_KEY_DESC,
    TRANSACTION_INFO_DESC,
    SUBMISSION_KEY_DESC,
    CHECKPOINT_ADDRESSES_DESC,
    SUBMISSION_DATA_DESC,
    EPOCH_DATA_DESC,
    BTC_CHECKPOINT_INFO_DESC,
)
