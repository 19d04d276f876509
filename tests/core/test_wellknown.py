from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from protojson.core.wellknown import Timestamp


@pytest.mark.parametrize(
    ("ts", "text"),
    [
        (Timestamp(0), "1970-01-01T00:00:00Z"),
        (Timestamp(1682942400, 500_000_000), "2023-05-01T12:00:00.500Z"),
        (Timestamp(1682942400, 1_000), "2023-05-01T12:00:00.000001Z"),
        (Timestamp(1682942400, 1), "2023-05-01T12:00:00.000000001Z"),
        (Timestamp(-1, 0), "1969-12-31T23:59:59Z"),
        (Timestamp(-62135596800), "0001-01-01T00:00:00Z"),
        (Timestamp(253402300799, 999_999_999), "9999-12-31T23:59:59.999999999Z"),
    ],
)
def test_rfc3339_rendering_uses_0_3_6_or_9_digits(ts: Timestamp, text: str) -> None:
    assert ts.to_rfc3339() == text
    assert str(ts) == text
    assert Timestamp.parse(text) == ts


def test_parse_normalizes_offsets_to_utc() -> None:
    assert Timestamp.parse("2023-05-01T14:30:00+02:30") == Timestamp(1682942400)
    assert Timestamp.parse("2023-05-01t07:00:00-05:00") == Timestamp(1682942400)
    assert Timestamp.parse("2023-05-01T12:00:00.12z") == Timestamp(1682942400, 120_000_000)


@pytest.mark.parametrize(
    "text",
    [
        "2023-05-01",
        "2023-05-01T12:00:00",
        "2023-05-01 12:00:00Z",
        "2023-05-01T12:00:60Z",
        "2023-13-01T00:00:00Z",
        "2023-05-01T12:00:00.1234567890Z",
        "2023-05-01T12:00:00+24:00",
        "0000-12-31T23:59:59Z",
        "9999-12-31T23:59:59-01:00",
    ],
)
def test_parse_rejects_malformed_or_out_of_range(text: str) -> None:
    with pytest.raises(ValueError):
        Timestamp.parse(text)


def test_constructor_validates_ranges() -> None:
    with pytest.raises(ValueError):
        Timestamp(0, -1)
    with pytest.raises(ValueError):
        Timestamp(0, 1_000_000_000)
    with pytest.raises(ValueError):
        Timestamp(253402300800)


def test_datetime_conversions() -> None:
    aware = datetime(2023, 5, 1, 14, 0, 0, 250_000, tzinfo=timezone(timedelta(hours=2)))
    ts = Timestamp.from_datetime(aware)
    assert ts == Timestamp(1682942400, 250_000_000)
    assert ts.to_datetime() == aware
    assert Timestamp.from_datetime(datetime(1970, 1, 1, 0, 0, 1)) == Timestamp(1)
    # sub-microsecond precision is truncated
    assert Timestamp(0, 999).to_datetime() == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_timestamps_are_ordered() -> None:
    assert Timestamp(0, 1) < Timestamp(1, 0) < Timestamp(1, 5)
