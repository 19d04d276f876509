from __future__ import annotations

import json

import pytest

from protojson import DecodeOptions, Message, Timestamp, decode, decode_json, encode, encode_json
from protojson.catalog import get_message
from protojson.core.errors import DuplicateFieldError, EnumEncodeError, UnknownFieldError

QUEUED = get_message("babylon.epoching.v1.QueuedMessage")
CKPT_WITH_META = get_message("babylon.checkpointing.v1.RawCheckpointWithMeta")
BTC_CKPT_INFO = get_message("babylon.btccheckpoint.v1.BTCCheckpointInfo")
EPOCH = get_message("babylon.epoching.v1.Epoch")

QUEUED_JSON = {
    "txId": "q83vEjRWeJA=",
    "msgId": "AQID",
    "blockHeight": "1200",
    "blockTime": "2023-05-01T12:00:00Z",
    "msgDelegate": {
        "delegatorAddress": "bbn1delegator",
        "validatorAddress": "bbnvaloper1validator",
        "amount": {"denom": "ubbn", "amount": "1000000"},
    },
}


def test_queued_message_round_trip() -> None:
    msg = decode(QUEUED_JSON, QUEUED)

    assert msg.which_oneof("msg") == "msg_delegate"
    assert msg["block_height"] == 1200
    assert msg["tx_id"] == bytes.fromhex("abcdef1234567890")
    assert msg["msg_delegate"]["amount"]["denom"] == "ubbn"
    assert encode(msg) == QUEUED_JSON


def test_queued_message_accepts_wire_names() -> None:
    wire = {
        "tx_id": "q83vEjRWeJA",
        "block_height": 1200,
        "msg_undelegate": {"delegator_address": "bbn1d", "amount": {"denom": "ubbn", "amount": "5"}},
    }

    msg = decode(wire, QUEUED)

    assert encode(msg) == {
        "txId": "q83vEjRWeJA=",
        "blockHeight": "1200",
        "msgUndelegate": {"delegatorAddress": "bbn1d", "amount": {"denom": "ubbn", "amount": "5"}},
    }


def test_queued_message_rejects_two_staking_messages() -> None:
    data = dict(QUEUED_JSON, msgUndelegate={})
    with pytest.raises(DuplicateFieldError) as excinfo:
        decode(data, QUEUED)
    assert excinfo.value.oneof == "msg"


def test_checkpoint_lifecycle_round_trip() -> None:
    text = json.dumps(
        {
            "ckpt": {
                "epochNum": "12",
                "lastCommitHash": "3q2+7w==",
                "bitmap": "/w==",
                "blsMultiSig": "AAEC",
            },
            "status": "CKPT_STATUS_CONFIRMED",
            "blsAggrPk": "AQ==",
            "powerSum": "18446744073709551615",
            "lifecycle": [
                {"blockHeight": "100", "blockTime": "2023-05-01T12:00:00.250Z"},
                {"state": "CKPT_STATUS_SEALED", "blockHeight": "101", "blockTime": "2023-05-01T12:00:06Z"},
            ],
        },
        separators=(",", ":"),
    )

    msg = decode_json(text, CKPT_WITH_META)

    assert msg["lifecycle"][0]["state"] == 0
    assert msg["lifecycle"][0]["block_time"] == Timestamp(1682942400, 250_000_000)
    assert msg["power_sum"] == 2**64 - 1
    assert encode_json(msg) == text


def test_checkpoint_status_by_number() -> None:
    msg = decode({"status": 4, "lifecycle": [{"state": 1.0}]}, CKPT_WITH_META)

    assert encode(msg) == {"status": "CKPT_STATUS_FINALIZED", "lifecycle": [{"state": "CKPT_STATUS_SEALED"}]}


def test_btc_checkpoint_info_encodes_in_declaration_order() -> None:
    key_desc = get_message("babylon.btccheckpoint.v1.TransactionKey")
    tx_desc = get_message("babylon.btccheckpoint.v1.TransactionInfo")
    addr_desc = get_message("babylon.btccheckpoint.v1.CheckpointAddresses")
    msg = Message(BTC_CKPT_INFO)
    msg["vigilante_address_list"] = [Message(addr_desc, submitter=b"\x01", reporter=b"\x02")]
    msg["earliest_btc_block_txs"] = [
        Message(tx_desc, key=Message(key_desc, index=0, hash=b"\x00" * 4), transaction=b"\xff")
    ]
    msg["epoch_number"] = 7

    assert encode_json(msg) == (
        '{"epochNumber":"7",'
        '"earliestBtcBlockTxs":[{"key":{"hash":"AAAAAA=="},"transaction":"/w=="}],'
        '"vigilanteAddressList":[{"submitter":"AQ==","reporter":"Ag=="}]}'
    )


def test_epoch_with_tendermint_header() -> None:
    data = {
        "epochNumber": "3",
        "lastBlockHeader": {
            "version": {"block": "11"},
            "chainId": "bbn-test-3",
            "height": "-1",
            "time": "2023-05-01T12:00:00Z",
            "lastBlockId": {"hash": "AQ==", "partSetHeader": {"total": 1, "hash": "Ag=="}},
            "proposerAddress": "Aw==",
        },
        "sealerHeader": {},
    }

    msg = decode(data, EPOCH)

    assert msg["last_block_header"]["height"] == -1
    assert msg.has("sealer_header")
    assert encode(msg) == data


def test_strict_mode_catches_misspelled_field() -> None:
    data = {"epochNumber": "3", "lastBlockHeader": {"chainID": "bbn"}}

    assert encode(decode(data, EPOCH)) == {"epochNumber": "3", "lastBlockHeader": {}}
    with pytest.raises(UnknownFieldError) as excinfo:
        decode(data, EPOCH, DecodeOptions(strict_unknown_fields=True))
    assert str(excinfo.value) == "lastBlockHeader: unknown field 'chainID' for tendermint.types.Header"


def test_unknown_enum_number_cannot_be_encoded() -> None:
    msg = Message(CKPT_WITH_META, status=9)

    with pytest.raises(EnumEncodeError) as excinfo:
        encode(msg)
    assert excinfo.value.enum_name == "babylon.checkpointing.v1.CheckpointStatus"
