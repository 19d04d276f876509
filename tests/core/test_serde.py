from __future__ import annotations

import pytest

from protojson.core.errors import DuplicateFieldError, MalformedJsonError
from protojson.core.schema import FieldDescriptor, MapKind, MessageDescriptor, MessageKind, Presence, Scalar
from protojson.core.serde import JsonPairs, decode_json, encode_json, json_dumps, json_loads, json_loads_pairs
from protojson.core.values import Message

KEY = MessageDescriptor(
    "demo.v1.Key",
    (
        FieldDescriptor("index", Scalar.UINT32),
        FieldDescriptor("hash", Scalar.BYTES),
    ),
)
SUBMISSION = MessageDescriptor(
    "demo.v1.Submission",
    (
        FieldDescriptor("epoch", Scalar.UINT64),
        FieldDescriptor("key", MessageKind(KEY), Presence.REPEATED),
        FieldDescriptor("notes", MapKind(Scalar.STRING, Scalar.STRING)),
    ),
)


def test_json_loads_pairs_keeps_repeated_keys_at_every_level() -> None:
    data = json_loads_pairs('{"key": [{"index": 1, "index": 2}], "epoch": "3"}')
    assert isinstance(data, JsonPairs)
    assert data[0][1][0] == JsonPairs([("index", 1), ("index", 2)])


def test_json_loads_returns_plain_dicts() -> None:
    assert json_loads('{"a": [1, {"b": null}]}') == {"a": [1, {"b": None}]}


@pytest.mark.parametrize("text", ['{"a": NaN}', "[Infinity]", "-Infinity", '{"a": ', "", "{'a': 1}"])
def test_malformed_json_is_rejected(text: str) -> None:
    with pytest.raises(MalformedJsonError):
        json_loads_pairs(text)
    with pytest.raises(MalformedJsonError):
        json_loads(text)


def test_json_dumps_is_compact_and_keeps_order() -> None:
    assert json_dumps({"z": 1, "a": "é"}) == '{"z":1,"a":"é"}'
    assert json_dumps({"z": 1}, indent=2) == '{\n  "z": 1\n}'


def test_encode_json_follows_declaration_order() -> None:
    msg = Message(SUBMISSION)
    msg["notes"] = {"b": "2", "a": "1"}
    msg["key"] = [Message(KEY, hash=b"\x00", index=1)]
    msg["epoch"] = 9
    assert encode_json(msg) == '{"epoch":"9","key":[{"index":1,"hash":"AA=="}],"notes":{"b":"2","a":"1"}}'


def test_decode_json_detects_duplicates_dict_would_collapse() -> None:
    with pytest.raises(DuplicateFieldError) as excinfo:
        decode_json('{"key": [{"index": 1}, {"index": 2, "index": 3}]}', SUBMISSION)
    assert str(excinfo.value) == "key[1].index: duplicate field 'index'"
    with pytest.raises(DuplicateFieldError):
        decode_json('{"notes": {"a": "1", "a": "2"}}', SUBMISSION)


def test_text_round_trip() -> None:
    text = '{"epoch":"18446744073709551615","key":[{"hash":"3q2+7w=="}],"notes":{"x":""}}'
    msg = decode_json(text, SUBMISSION)
    assert msg["key"][0]["hash"] == b"\xde\xad\xbe\xef"
    assert decode_json(encode_json(msg), SUBMISSION) == msg
    assert encode_json(msg) == text
