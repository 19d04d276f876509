"""
google.protobuf.Timestamp value type and its RFC 3339 rendering.

The canonical JSON form is an RFC 3339 string in UTC with a ``Z`` suffix and
0, 3, 6 or 9 fractional digits (e.g. ``"2023-05-01T12:00:00.250Z"``). Parsing
accepts any RFC 3339 offset and normalizes it to UTC.

Notes:
    - Valid range: 0001-01-01T00:00:00Z .. 9999-12-31T23:59:59.999999999Z.
    - Leap seconds (``:60``) are rejected.
    - Conversion to ``datetime`` truncates to microseconds.

Examples:
    >>> from protojson.core.wellknown import Timestamp
    >>> Timestamp(0, 250_000_000).to_rfc3339()
    '1970-01-01T00:00:00.250Z'
    >>> Timestamp.parse("1970-01-01T01:00:00+01:00")
    Timestamp(seconds=0, nanos=0)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Final

from .constants import NANOS_PER_SECOND, TIMESTAMP_MAX_SECONDS, TIMESTAMP_MIN_SECONDS

__all__ = ["Timestamp"]

_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
_RFC3339_RE: Final[re.Pattern[str]] = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?([Zz]|[+-]\d{2}:\d{2})$",
    re.ASCII,
)


@dataclass(frozen=True, order=True)
class Timestamp:
    """
    Point in time as seconds and nanoseconds since the Unix epoch.

    Attributes:
        seconds (int): Whole seconds since 1970-01-01T00:00:00Z (may be negative).
        nanos (int): Non-negative fraction of a second in [0, 999_999_999].

    Raises:
        ValueError: If nanos or seconds fall outside the representable range.
    """

    seconds: int
    nanos: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(f"Timestamp nanos must be in [0, 1e9), got {self.nanos}")
        if not TIMESTAMP_MIN_SECONDS <= self.seconds <= TIMESTAMP_MAX_SECONDS:
            raise ValueError(f"Timestamp seconds out of range: {self.seconds}")

    @classmethod
    def from_datetime(cls, dt: datetime) -> Timestamp:
        """Convert an aware datetime (naive values are taken as UTC)."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        delta = dt - _EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds, delta.microseconds * 1000)

    def to_datetime(self) -> datetime:
        """Return an aware UTC datetime (microsecond precision)."""
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1000)

    def to_rfc3339(self) -> str:
        """Render the canonical JSON string."""
        dt = _EPOCH + timedelta(seconds=self.seconds)
        # strftime does not zero-pad years below 1000 on every platform.
        base = (
            f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
            f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        )
        if self.nanos == 0:
            frac = ""
        elif self.nanos % 1_000_000 == 0:
            frac = f".{self.nanos // 1_000_000:03d}"
        elif self.nanos % 1000 == 0:
            frac = f".{self.nanos // 1000:06d}"
        else:
            frac = f".{self.nanos:09d}"
        return f"{base}{frac}Z"

    @classmethod
    def parse(cls, text: str) -> Timestamp:
        """
        Parse an RFC 3339 timestamp.

        Raises:
            ValueError: If text is malformed or out of range.
        """
        match = _RFC3339_RE.match(text)
        if match is None:
            raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
        year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
        frac, offset = match.group(7), match.group(8)
        dt = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
        delta = dt - _EPOCH
        seconds = delta.days * 86400 + delta.seconds
        if offset not in ("Z", "z"):
            sign = 1 if offset[0] == "+" else -1
            hours, minutes = int(offset[1:3]), int(offset[4:6])
            if hours > 23 or minutes > 59:
                raise ValueError(f"invalid UTC offset in {text!r}")
            seconds -= sign * (hours * 3600 + minutes * 60)
        nanos = int(frac.ljust(9, "0")) if frac else 0
        return cls(seconds, nanos)

    def __str__(self) -> str:
        return self.to_rfc3339()
