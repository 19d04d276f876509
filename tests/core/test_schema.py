from __future__ import annotations

import pytest

from protojson.core.errors import SchemaError
from protojson.core.schema import (
    EnumDescriptor,
    EnumKind,
    EnumValue,
    FieldDescriptor,
    MapKind,
    MessageDescriptor,
    MessageKind,
    Presence,
    Scalar,
    SchemaRegistry,
    lookup_field,
)

STATUS = EnumDescriptor.from_pairs(
    "demo.v1.Status", [("UNSPECIFIED", 0), ("CONFIRMED", 1), ("FINALIZED", 2)]
)


def test_enum_lookup_both_directions() -> None:
    assert STATUS.name_for(2) == "FINALIZED"
    assert STATUS.number_for("CONFIRMED") == 1
    assert STATUS.number_for("confirmed") is None
    assert STATUS.name_for(7) is None
    assert STATUS.default_name == "UNSPECIFIED"
    assert STATUS.names() == ("UNSPECIFIED", "CONFIRMED", "FINALIZED")


@pytest.mark.parametrize(
    "values",
    [
        (),
        (EnumValue("ONE", 1),),  # no zero value
        (EnumValue("A", 0), EnumValue("A", 1)),  # duplicate name
        (EnumValue("A", 0), EnumValue("B", 0)),  # alias without allow_alias
        (EnumValue("A", 0), EnumValue("B", 2**31)),  # outside int32
        (EnumValue("bad-name", 0),),
    ],
)
def test_enum_construction_failures(values: tuple[EnumValue, ...]) -> None:
    with pytest.raises(SchemaError):
        EnumDescriptor("demo.v1.Bad", values)


def test_enum_alias_encodes_first_name() -> None:
    enum = EnumDescriptor(
        "demo.v1.Aliased",
        (EnumValue("ZERO", 0), EnumValue("NONE", 0), EnumValue("ONE", 1)),
        allow_alias=True,
    )
    assert enum.name_for(0) == "ZERO"
    assert enum.number_for("NONE") == 0


def test_field_descriptor_derives_json_name() -> None:
    fd = FieldDescriptor("earliest_btc_block_hash", Scalar.BYTES)
    assert fd.json_name == "earliestBtcBlockHash"
    assert FieldDescriptor("hash", Scalar.BYTES, json_name="digest").json_name == "digest"


@pytest.mark.parametrize(
    "build",
    [
        lambda: FieldDescriptor("9lives", Scalar.STRING),
        lambda: FieldDescriptor("labels", MapKind(Scalar.BYTES, Scalar.STRING)),
        lambda: FieldDescriptor("labels", MapKind(Scalar.STRING, Scalar.STRING), Presence.REPEATED),
        lambda: FieldDescriptor("nested", MapKind(Scalar.STRING, MapKind(Scalar.STRING, Scalar.BOOL))),
        lambda: FieldDescriptor("pick", Scalar.STRING, Presence.REPEATED, oneof="choice"),
        lambda: FieldDescriptor("pick", Scalar.STRING, Presence.OPTIONAL, oneof="choice"),
        lambda: FieldDescriptor("bad", "uint64"),
    ],
)
def test_field_descriptor_rejects_invalid_combinations(build) -> None:
    with pytest.raises(SchemaError):
        build()


def test_tracks_presence_rules() -> None:
    leaf = MessageDescriptor("demo.v1.Leaf", (FieldDescriptor("x", Scalar.INT32),))
    assert not FieldDescriptor("n", Scalar.UINT64).tracks_presence
    assert FieldDescriptor("n", Scalar.UINT64, Presence.OPTIONAL).tracks_presence
    assert FieldDescriptor("leaf", MessageKind(leaf)).tracks_presence
    assert FieldDescriptor("at", Scalar.TIMESTAMP).tracks_presence
    assert FieldDescriptor("n", Scalar.UINT64, oneof="choice").tracks_presence
    assert not FieldDescriptor("leaves", MessageKind(leaf), Presence.REPEATED).tracks_presence


def test_message_descriptor_lookup_and_oneofs() -> None:
    desc = MessageDescriptor(
        "demo.v1.Queued",
        (
            FieldDescriptor("block_height", Scalar.UINT64),
            FieldDescriptor("msg_delegate", Scalar.STRING, oneof="msg"),
            FieldDescriptor("msg_undelegate", Scalar.STRING, oneof="msg"),
        ),
    )
    assert desc.name == "Queued"
    assert desc.oneofs == {"msg": ("msg_delegate", "msg_undelegate")}
    assert lookup_field(desc, "blockHeight") is lookup_field(desc, "block_height")
    assert lookup_field(desc, "nope") is None
    assert desc.get_field("msgDelegate").name == "msg_delegate"
    with pytest.raises(KeyError):
        desc.get_field("nope")
    assert [fd.name for fd in desc] == ["block_height", "msg_delegate", "msg_undelegate"]


@pytest.mark.parametrize(
    "fields",
    [
        (FieldDescriptor("a", Scalar.INT32), FieldDescriptor("a", Scalar.INT64)),
        (FieldDescriptor("foo_bar", Scalar.INT32), FieldDescriptor("fooBar", Scalar.INT32)),
        (FieldDescriptor("msg", Scalar.INT32), FieldDescriptor("x", Scalar.INT32, oneof="msg")),
    ],
)
def test_message_descriptor_construction_failures(fields) -> None:
    with pytest.raises(SchemaError):
        MessageDescriptor("demo.v1.Bad", fields)


def test_message_kind_thunk_supports_recursion() -> None:
    node: MessageDescriptor = MessageDescriptor(
        "demo.v1.Node",
        (
            FieldDescriptor("value", Scalar.STRING),
            FieldDescriptor("children", MessageKind(lambda: node), Presence.REPEATED),
        ),
    )
    assert node.get_field("children").kind.descriptor is node


def test_registry_walks_nested_kinds() -> None:
    leaf = MessageDescriptor("demo.v1.Leaf", (FieldDescriptor("status", EnumKind(STATUS)),))
    root = MessageDescriptor(
        "demo.v1.Root",
        (
            FieldDescriptor("leaf", MessageKind(leaf)),
            FieldDescriptor("by_key", MapKind(Scalar.STRING, MessageKind(leaf))),
        ),
    )
    reg = SchemaRegistry([root])
    assert reg.describe("demo.v1.Leaf") is leaf
    assert reg.describe_enum("demo.v1.Status") is STATUS
    assert "demo.v1.Root" in reg
    assert [d.full_name for d in reg.list_messages()] == ["demo.v1.Leaf", "demo.v1.Root"]
    assert len(reg) == 2
    with pytest.raises(KeyError):
        reg.describe("demo.v1.Missing")


def test_registry_rejects_two_descriptors_with_one_name() -> None:
    a = MessageDescriptor("demo.v1.Same", (FieldDescriptor("x", Scalar.INT32),))
    b = MessageDescriptor("demo.v1.Same", (FieldDescriptor("x", Scalar.INT32),))
    reg = SchemaRegistry([a])
    reg.register(a)  # same object is fine
    with pytest.raises(SchemaError):
        reg.register(b)


def test_message_kind_hash_agrees_with_equality() -> None:
    leaf = MessageDescriptor("demo.v1.Leaf", (FieldDescriptor("x", Scalar.INT32),))
    direct, deferred = MessageKind(leaf), MessageKind(lambda: leaf)
    assert direct == deferred
    assert hash(direct) == hash(deferred)
    assert hash(FieldDescriptor("leaf", direct)) == hash(FieldDescriptor("leaf", deferred))
    assert len({FieldDescriptor("leaf", direct), FieldDescriptor("leaf", deferred)}) == 1


def test_registry_rejected_batch_leaves_registry_unchanged() -> None:
    reg = SchemaRegistry([MessageDescriptor("demo.v1.Taken", (FieldDescriptor("x", Scalar.INT32),))])
    fresh_enum = EnumDescriptor.from_pairs("demo.v1.Fresh", [("ZERO", 0)])
    fresh = MessageDescriptor("demo.v1.Fresh2", (FieldDescriptor("e", EnumKind(fresh_enum)),))
    clash = MessageDescriptor("demo.v1.Taken", (FieldDescriptor("y", Scalar.INT32),))

    with pytest.raises(SchemaError):
        reg.register(fresh, clash, enums=[STATUS])

    assert [d.full_name for d in reg.list_messages()] == ["demo.v1.Taken"]
    assert reg.list_enums() == []
    assert "demo.v1.Fresh" not in reg


def test_registry_rejects_conflicting_enum_without_side_effects() -> None:
    reg = SchemaRegistry(enums=[STATUS])
    other = EnumDescriptor.from_pairs("demo.v1.Status", [("UNSPECIFIED", 0)])
    leaf = MessageDescriptor("demo.v1.Leaf", (FieldDescriptor("x", Scalar.INT32),))

    with pytest.raises(SchemaError):
        reg.register(leaf, enums=[other])

    assert "demo.v1.Leaf" not in reg
    assert reg.describe_enum("demo.v1.Status") is STATUS
