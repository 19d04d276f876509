from __future__ import annotations

import pytest

from protojson.catalog import CATALOG, PACKAGES, get_enum, get_message, list_messages
from protojson.core.naming import is_identifier, to_json_name
from protojson.core.schema import MessageKind, Presence, Scalar


def test_descriptors_contract() -> None:
    for desc in list_messages():
        for fd in desc.fields:
            # wire names lower_snake, JSON names derived from them
            assert is_identifier(fd.name) and fd.name == fd.name.lower(), (
                f"field {fd.name!r} not lower_snake in {desc.full_name}"
            )
            assert fd.json_name == to_json_name(fd.name), f"json_name mismatch in {desc.full_name}"
            # every referenced message is registered too
            if isinstance(fd.kind, MessageKind):
                assert fd.kind.descriptor.full_name in CATALOG, (
                    f"{desc.full_name}.{fd.name} references an unregistered type"
                )


def test_packages_cover_babylon_messages() -> None:
    for package, messages in PACKAGES.items():
        assert messages, f"no messages for {package}"
        for desc in messages:
            assert desc.full_name.startswith(package + ".")
            assert get_message(desc.full_name) is desc
        assert [d.full_name for d in list_messages(package)] == sorted(d.full_name for d in messages)


def test_external_types_are_reachable() -> None:
    for name in (
        "tendermint.types.Header",
        "tendermint.crypto.Proof",
        "tendermint.types.TxProof",
        "cosmos.base.v1beta1.Coin",
        "cosmos.staking.v1beta1.MsgDelegate",
    ):
        assert name in CATALOG


def test_enums_are_registered() -> None:
    assert get_enum("babylon.btccheckpoint.v1.BtcStatus").default_name == "EPOCH_STATUS_SUBMITTED"
    assert get_enum("babylon.checkpointing.v1.CheckpointStatus").name_for(4) == "CKPT_STATUS_FINALIZED"
    assert get_enum("babylon.epoching.v1.BondState").names() == (
        "CREATED",
        "BONDED",
        "UNBONDING",
        "UNBONDED",
        "REMOVED",
    )


def test_selected_field_shapes() -> None:
    info = get_message("babylon.btccheckpoint.v1.BTCCheckpointInfo")
    assert [fd.json_name for fd in info.fields] == [
        "epochNumber",
        "earliestBtcBlockNumber",
        "earliestBtcBlockHash",
        "earliestBtcBlockTxs",
        "vigilanteAddressList",
    ]
    assert info.get_field("earliest_btc_block_txs").presence is Presence.REPEATED
    assert get_message("babylon.epoching.v1.Validator").get_field("power").kind is Scalar.INT64
    queued = get_message("babylon.epoching.v1.QueuedMessage")
    assert queued.oneofs == {
        "msg": ("msg_create_validator", "msg_delegate", "msg_undelegate", "msg_begin_redelegate")
    }
    assert get_message("babylon.checkpointing.v1.CheckpointStateUpdate").get_field("block_time").kind is Scalar.TIMESTAMP


def test_unknown_names_raise_key_error() -> None:
    with pytest.raises(KeyError):
        get_message("babylon.epoching.v1.Nope")
    with pytest.raises(KeyError):
        get_enum("babylon.epoching.v1.Nope")
