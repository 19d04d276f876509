"""
Descriptors for package ``babylon.zoneconcierge.v1``.

Purpose:
- Headers of consumer chains indexed by Babylon, their forks, and the proofs
  that a chain's header was finalized through a BTC-checkpointed epoch.

Schema:
- IndexedHeader, Forks, ChainInfo, ProofEpochSealed, ProofFinalizedChainInfo

Notes:
- ProofFinalizedChainInfo ties together tendermint proofs, a sealed-epoch proof
  over checkpointing.v1.ValidatorWithBlsKey, and btccheckpoint.v1.TransactionInfo
  submissions.
"""

from __future__ import annotations

from ..core.schema import FieldDescriptor, MessageDescriptor, MessageKind, Presence, Scalar
from .btccheckpoint import TRANSACTION_INFO_DESC
from .checkpointing import VALIDATOR_WITH_BLS_KEY_DESC
from .external import HEADER_DESC, PROOF_DESC, PROOF_OPS_DESC, TX_PROOF_DESC

__all__ = [
    "INDEXED_HEADER_DESC",
    "FORKS_DESC",
    "CHAIN_INFO_DESC",
    "PROOF_EPOCH_SEALED_DESC",
    "PROOF_FINALIZED_CHAIN_INFO_DESC",
    "ZONECONCIERGE_MESSAGES",
]

PACKAGE = "babylon.zoneconcierge.v1"

INDEXED_HEADER_DESC = MessageDescriptor(
    f"{PACKAGE}.IndexedHeader",
    (
        FieldDescriptor("chain_id", Scalar.STRING),
        FieldDescriptor("hash", Scalar.BYTES),
        FieldDescriptor("height", Scalar.UINT64),
        FieldDescriptor("babylon_header", MessageKind(HEADER_DESC)),
        FieldDescriptor("babylon_epoch", Scalar.UINT64),
        FieldDescriptor("babylon_tx_hash", Scalar.BYTES),
    ),
)

FORKS_DESC = MessageDescriptor(
    f"{PACKAGE}.Forks",
    (FieldDescriptor("headers", MessageKind(INDEXED_HEADER_DESC), Presence.REPEATED),),
)

CHAIN_INFO_DESC = MessageDescriptor(
    f"{PACKAGE}.ChainInfo",
    (
        FieldDescriptor("chain_id", Scalar.STRING),
        FieldDescriptor("latest_header", MessageKind(INDEXED_HEADER_DESC)),
        FieldDescriptor("latest_forks", MessageKind(FORKS_DESC)),
        FieldDescriptor("timestamped_headers_count", Scalar.UINT64),
    ),
)

PROOF_EPOCH_SEALED_DESC = MessageDescriptor(
    f"{PACKAGE}.ProofEpochSealed",
    (
        FieldDescriptor(
            "validator_set", MessageKind(VALIDATOR_WITH_BLS_KEY_DESC), Presence.REPEATED
        ),
        FieldDescriptor("proof_epoch_info", MessageKind(PROOF_OPS_DESC)),
        FieldDescriptor("proof_epoch_val_set", MessageKind(PROOF_OPS_DESC)),
    ),
)

PROOF_FINALIZED_CHAIN_INFO_DESC = MessageDescriptor(
    f"{PACKAGE}.ProofFinalizedChainInfo",
    (
        FieldDescriptor("proof_tx_in_block", MessageKind(TX_PROOF_DESC)),
        FieldDescriptor("proof_header_in_epoch", MessageKind(PROOF_DESC)),
        FieldDescriptor("proof_epoch_sealed", MessageKind(PROOF_EPOCH_SEALED_DESC)),
        FieldDescriptor(
            "proof_epoch_submitted", MessageKind(TRANSACTION_INFO_DESC), Presence.REPEATED
        ),
    ),
)

ZONECONCIERGE_MESSAGES: tuple[MessageDescriptor, ...] = (
    INDEXED_HEADER_DESC,
    FORKS_DESC,
    CHAIN_INFO_DESC,
    PROOF_EPOCH_SEALED_DESC,
    PROOF_FINALIZED_CHAIN_INFO_DESC,
)
