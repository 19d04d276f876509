from __future__ import annotations

from datetime import datetime, timezone

import pytest

from protojson.core.schema import (
    EnumDescriptor,
    EnumKind,
    FieldDescriptor,
    MapKind,
    MessageDescriptor,
    MessageKind,
    Presence,
    Scalar,
)
from protojson.core.values import Message, OneofValue, is_default, zero_value
from protojson.core.wellknown import Timestamp

STATUS = EnumDescriptor.from_pairs("demo.v1.Status", [("UNSPECIFIED", 0), ("SEALED", 1)])
LEAF = MessageDescriptor("demo.v1.Leaf", (FieldDescriptor("hash", Scalar.BYTES),))
ITEM = MessageDescriptor(
    "demo.v1.Item",
    (
        FieldDescriptor("epoch_num", Scalar.UINT64),
        FieldDescriptor("power", Scalar.INT32, Presence.OPTIONAL),
        FieldDescriptor("status", EnumKind(STATUS)),
        FieldDescriptor("leaf", MessageKind(LEAF)),
        FieldDescriptor("at", Scalar.TIMESTAMP),
        FieldDescriptor("tags", Scalar.STRING, Presence.REPEATED),
        FieldDescriptor("labels", MapKind(Scalar.STRING, Scalar.UINT32)),
        FieldDescriptor("by_name", Scalar.STRING, oneof="who"),
        FieldDescriptor("by_index", Scalar.UINT32, oneof="who"),
    ),
)


def test_unset_fields_read_as_zero_values() -> None:
    item = Message(ITEM)
    assert item["epoch_num"] == 0
    assert item["status"] == 0
    assert item["leaf"] is None
    assert item["at"] is None
    assert item["tags"] == []
    assert item["labels"] == {}
    assert item["by_name"] == ""
    assert item.which_oneof("who") is None
    assert list(item.present_fields()) == []


def test_zero_value_and_is_default_helpers() -> None:
    assert zero_value(ITEM.get_field("tags")) == []
    assert zero_value(ITEM.get_field("leaf")) is None
    assert is_default(ITEM.get_field("epoch_num"), 0)
    assert not is_default(ITEM.get_field("epoch_num"), 1)
    assert is_default(ITEM.get_field("labels"), {})


def test_values_are_coerced_on_assignment() -> None:
    item = Message(ITEM, status="SEALED", at=datetime(2023, 5, 1, tzinfo=timezone.utc))
    item["leaf"] = Message(LEAF, hash=bytearray(b"\x00\x01"))
    assert item["status"] == 1
    assert item["at"] == Timestamp(1682899200, 0)
    assert item["leaf"]["hash"] == b"\x00\x01"
    assert type(item["leaf"]["hash"]) is bytes


@pytest.mark.parametrize(
    ("name", "value", "exc"),
    [
        ("epoch_num", -1, ValueError),
        ("epoch_num", 2**64, ValueError),
        ("epoch_num", True, TypeError),
        ("epoch_num", "7", TypeError),
        ("status", "NOPE", ValueError),
        ("leaf", Message(ITEM), TypeError),
        ("tags", "abc", TypeError),
        ("labels", {"zone": -1}, ValueError),
    ],
)
def test_invalid_assignments_raise(name: str, value: object, exc: type[Exception]) -> None:
    item = Message(ITEM)
    with pytest.raises(exc):
        item[name] = value


def test_unknown_field_raises_key_error() -> None:
    with pytest.raises(KeyError):
        Message(ITEM)["missing"]


def test_explicit_presence_survives_zero_values() -> None:
    item = Message(ITEM, power=0, epoch_num=0)
    assert item.has("power")
    assert not item.has("epoch_num")
    del item["power"]
    assert not item.has("power")


def test_oneof_members_replace_each_other() -> None:
    item = Message(ITEM, by_name="val-1")
    item["byIndex"] = 0
    assert item.which_oneof("who") == "by_index"
    assert item.oneof_value("who") == OneofValue("by_index", 0)
    assert item["by_name"] == ""
    assert not item.has("by_name")
    item.clear("by_name")  # clearing the inactive member is a no-op
    assert item.which_oneof("who") == "by_index"
    with pytest.raises(KeyError):
        item.which_oneof("nope")


def test_copy_is_deep_and_equality_tracks_presence() -> None:
    item = Message(ITEM, tags=["a"], leaf=Message(LEAF, hash=b"\x01"))
    clone = item.copy()
    assert clone == item
    clone["tags"].append("b")
    clone["leaf"]["hash"] = b"\x02"
    assert item["tags"] == ["a"]
    assert item["leaf"]["hash"] == b"\x01"
    assert Message(ITEM, power=0) != Message(ITEM)


def test_repr_lists_present_fields() -> None:
    assert repr(Message(LEAF, hash=b"\x01")) == "Leaf(hash=b'\\x01')"


def test_repeated_slot_validates_in_place_edits() -> None:
    item = Message(ITEM)
    item["tags"].append("a")
    item["tags"] += ["b"]
    item["tags"].insert(0, "z")
    assert item["tags"] == ["z", "a", "b"]
    with pytest.raises(TypeError):
        item["tags"].append(1)
    with pytest.raises(TypeError):
        item["tags"][0] = b"raw"
    with pytest.raises(TypeError):
        item["tags"][0:1] = [None]
    assert item["tags"] == ["z", "a", "b"]


def test_repeated_integer_slot_rejects_out_of_range_values() -> None:
    desc = MessageDescriptor("demo.v1.Heights", (FieldDescriptor("heights", Scalar.UINT64, Presence.REPEATED),))
    msg = Message(desc)
    with pytest.raises(ValueError):
        msg["heights"].append(-1)
    with pytest.raises(TypeError):
        msg["heights"].extend(["not a number"])
    assert msg["heights"] == []


def test_map_slot_validates_keys_and_values() -> None:
    item = Message(ITEM)
    item["labels"]["zone"] = 3
    item["labels"].update({"region": 4})
    assert item["labels"] == {"zone": 3, "region": 4}
    with pytest.raises(ValueError):
        item["labels"]["zone"] = -1
    with pytest.raises(TypeError):
        item["labels"][7] = 1
    with pytest.raises(TypeError):
        item["labels"].setdefault("other", "1")
    assert dict(item["labels"]) == {"zone": 3, "region": 4}


def test_assigned_containers_are_copied_not_shared() -> None:
    source = Message(ITEM, tags=["a"])
    target = Message(ITEM)
    target["tags"] = source["tags"]
    target["tags"].append("b")
    assert source["tags"] == ["a"]
