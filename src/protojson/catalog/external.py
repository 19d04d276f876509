"""
Descriptors for the tendermint and cosmos-sdk types embedded by Babylon messages.

Purpose:
- Provide just enough of the external schemas for Babylon messages to encode
  and decode end to end: block headers, Merkle proofs, coins and the staking
  messages queued by the epoching module.

Packages:
- tendermint.version: Consensus
- tendermint.types: PartSetHeader, BlockID, Header, TxProof
- tendermint.crypto: ProofOp, ProofOps, Proof
- cosmos.base.v1beta1: Coin
- cosmos.staking.v1beta1: Description, CommissionRates, MsgCreateValidator,
  MsgDelegate, MsgUndelegate, MsgBeginRedelegate

Notes:
- Decimal and integer amounts in cosmos messages are strings on the wire
  (cosmos ``Dec``/``Int``), so they are declared as string fields here.
- MsgCreateValidator omits ``pubkey`` (a google.protobuf.Any); the field is
  skipped when decoding leniently.
"""

from __future__ import annotations

from ..core.schema import FieldDescriptor, MessageDescriptor, MessageKind, Presence, Scalar

__all__ = [
    "CONSENSUS_DESC",
    "PART_SET_HEADER_DESC",
    "BLOCK_ID_DESC",
    "HEADER_DESC",
    "PROOF_OP_DESC",
    "PROOF_OPS_DESC",
    "PROOF_DESC",
    "TX_PROOF_DESC",
    "COIN_DESC",
    "DESCRIPTION_DESC",
    "COMMISSION_RATES_DESC",
    "MSG_CREATE_VALIDATOR_DESC",
    "MSG_DELEGATE_DESC",
    "MSG_UNDELEGATE_DESC",
    "MSG_BEGIN_REDELEGATE_DESC",
    "EXTERNAL_MESSAGES",
]

# ---------------------------------------------------------------------------
# tendermint
# ---------------------------------------------------------------------------

CONSENSUS_DESC = MessageDescriptor(
    "tendermint.version.Consensus",
    (
        FieldDescriptor("block", Scalar.UINT64),
        FieldDescriptor("app", Scalar.UINT64),
    ),
)

PART_SET_HEADER_DESC = MessageDescriptor(
    "tendermint.types.PartSetHeader",
    (
        FieldDescriptor("total", Scalar.UINT32),
        FieldDescriptor("hash", Scalar.BYTES),
    ),
)

BLOCK_ID_DESC = MessageDescriptor(
    "tendermint.types.BlockID",
    (
        FieldDescriptor("hash", Scalar.BYTES),
        FieldDescriptor("part_set_header", MessageKind(PART_SET_HEADER_DESC)),
    ),
)

HEADER_DESC = MessageDescriptor(
    "tendermint.types.Header",
    (
        FieldDescriptor("version", MessageKind(CONSENSUS_DESC)),
        FieldDescriptor("chain_id", Scalar.STRING),
        FieldDescriptor("height", Scalar.INT64),
        FieldDescriptor("time", Scalar.TIMESTAMP),
        FieldDescriptor("last_block_id", MessageKind(BLOCK_ID_DESC)),
        FieldDescriptor("last_commit_hash", Scalar.BYTES),
        FieldDescriptor("data_hash", Scalar.BYTES),
        FieldDescriptor("validators_hash", Scalar.BYTES),
        FieldDescriptor("next_validators_hash", Scalar.BYTES),
        FieldDescriptor("consensus_hash", Scalar.BYTES),
        FieldDescriptor("app_hash", Scalar.BYTES),
        FieldDescriptor("last_results_hash", Scalar.BYTES),
        FieldDescriptor("evidence_hash", Scalar.BYTES),
        FieldDescriptor("proposer_address", Scalar.BYTES),
    ),
)

PROOF_OP_DESC = MessageDescriptor(
    "tendermint.crypto.ProofOp",
    (
        FieldDescriptor("type", Scalar.STRING),
        FieldDescriptor("key", Scalar.BYTES),
        FieldDescriptor("data", Scalar.BYTES),
    ),
)

PROOF_OPS_DESC = MessageDescriptor(
    "tendermint.crypto.ProofOps",
    (FieldDescriptor("ops", MessageKind(PROOF_OP_DESC), Presence.REPEATED),),
)

PROOF_DESC = MessageDescriptor(
    "tendermint.crypto.Proof",
    (
        FieldDescriptor("total", Scalar.INT64),
        FieldDescriptor("index", Scalar.INT64),
        FieldDescriptor("leaf_hash", Scalar.BYTES),
        FieldDescriptor("aunts", Scalar.BYTES, Presence.REPEATED),
    ),
)

TX_PROOF_DESC = MessageDescriptor(
    "tendermint.types.TxProof",
    (
        FieldDescriptor("root_hash", Scalar.BYTES),
        FieldDescriptor("data", Scalar.BYTES),
        FieldDescriptor("proof", MessageKind(PROOF_DESC)),
    ),
)

# ---------------------------------------------------------------------------
# cosmos-sdk
# ---------------------------------------------------------------------------

COIN_DESC = MessageDescriptor(
    "cosmos.base.v1beta1.Coin",
    (
        FieldDescriptor("denom", Scalar.STRING),
        FieldDescriptor("amount", Scalar.STRING),
    ),
)

DESCRIPTION_DESC = MessageDescriptor(
    "cosmos.staking.v1beta1.Description",
    (
        FieldDescriptor("moniker", Scalar.STRING),
        FieldDescriptor("identity", Scalar.STRING),
        FieldDescriptor("website", Scalar.STRING),
        FieldDescriptor("security_contact", Scalar.STRING),
        FieldDescriptor("details", Scalar.STRING),
    ),
)

COMMISSION_RATES_DESC = MessageDescriptor(
    "cosmos.staking.v1beta1.CommissionRates",
    (
        FieldDescriptor("rate", Scalar.STRING),
        FieldDescriptor("max_rate", Scalar.STRING),
        FieldDescriptor("max_change_rate", Scalar.STRING),
    ),
)

MSG_CREATE_VALIDATOR_DESC = MessageDescriptor(
    "cosmos.staking.v1beta1.MsgCreateValidator",
    (
        FieldDescriptor("description", MessageKind(DESCRIPTION_DESC)),
        FieldDescriptor("commission", MessageKind(COMMISSION_RATES_DESC)),
        FieldDescriptor("min_self_delegation", Scalar.STRING),
        FieldDescriptor("delegator_address", Scalar.STRING),
        FieldDescriptor("validator_address", Scalar.STRING),
        FieldDescriptor("value", MessageKind(COIN_DESC)),
    ),
)

MSG_DELEGATE_DESC = MessageDescriptor(
    "cosmos.staking.v1beta1.MsgDelegate",
    (
        FieldDescriptor("delegator_address", Scalar.STRING),
        FieldDescriptor("validator_address", Scalar.STRING),
        FieldDescriptor("amount", MessageKind(COIN_DESC)),
    ),
)

MSG_UNDELEGATE_DESC = MessageDescriptor(
    "cosmos.staking.v1beta1.MsgUndelegate",
    (
        FieldDescriptor("delegator_address", Scalar.STRING),
        FieldDescriptor("validator_address", Scalar.STRING),
        FieldDescriptor("amount", MessageKind(COIN_DESC)),
    ),
)

MSG_BEGIN_REDELEGATE_DESC = MessageDescriptor(
    "cosmos.staking.v1beta1.MsgBeginRedelegate",
    (
        FieldDescriptor("delegator_address", Scalar.STRING),
        FieldDescriptor("validator_src_address", Scalar.STRING),
        FieldDescriptor("validator_dst_address", Scalar.STRING),
        FieldDescriptor("amount", MessageKind(COIN_DESC)),
    ),
)

EXTERNAL_MESSAGES: tuple[MessageDescriptor, ...] = (
    CONSENSUS_DESC,
    PART_SET_HEADER_DESC,
    BLOCK_ID_DESC,
    HEADER_DESC,
    PROOF_OP_DESC,
    PROOF_OPS_DESC,
    PROOF_DESC,
    TX_PROOF_DESC,
    COIN_DESC,
    DESCRIPTION_DESC,
    COMMISSION_RATES_DESC,
    MSG_CREATE_VALIDATOR_DESC,
    MSG_DELEGATE_DESC,
    MSG_UNDELEGATE_DESC,
    MSG_BEGIN_REDELEGATE_DESC,
)
