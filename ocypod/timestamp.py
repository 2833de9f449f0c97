"""UTC timestamps stored in Redis as RFC 3339 strings."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_EXCESS_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def now() -> datetime:
    """Current time, timezone-aware in UTC."""
    return datetime.now(timezone.utc)


def seconds_since(later: datetime, earlier: datetime) -> int:
    """Whole seconds from ``earlier`` to ``later``, truncated toward zero."""
    micros = (later - earlier) // timedelta(microseconds=1)
    seconds = abs(micros) // 1_000_000
    return seconds if micros >= 0 else -seconds


def to_redis(moment: datetime) -> str:
    """Format a timezone-aware datetime as an RFC 3339 string in UTC."""
    if moment.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")
    return moment.astimezone(timezone.utc).isoformat()


def from_redis(value: str | bytes) -> datetime:
    """Parse an RFC 3339 string into a UTC datetime."""
    if isinstance(value, (bytes, bytearray)):
        value = value.decode()
    if not isinstance(value, str):
        raise TypeError(f"cannot read timestamp from {type(value).__name__}")
    parsed = datetime.fromisoformat(_EXCESS_FRACTION_RE.sub(r"\1", value))
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {value!r}")
    return parsed.astimezone(timezone.utc)