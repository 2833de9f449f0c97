"""Durations at one-second resolution, written and read as human readable text."""

from __future__ import annotations

import re
from dataclasses import dataclass

_NANOS_PER_SECOND = 1_000_000_000
_MAX_SECONDS = 2**64 - 1

_UNIT_NANOS = {
    **dict.fromkeys(("nanos", "nsec", "ns"), 1),
    **dict.fromkeys(("usec", "us"), 1_000),
    **dict.fromkeys(("millis", "msec", "ms"), 1_000_000),
    **dict.fromkeys(("seconds", "second", "secs", "sec", "s"), _NANOS_PER_SECOND),
    **dict.fromkeys(("minutes", "minute", "mins", "min", "m"), 60 * _NANOS_PER_SECOND),
    **dict.fromkeys(("hours", "hour", "hrs", "hr", "h"), 3_600 * _NANOS_PER_SECOND),
    **dict.fromkeys(("days", "day", "d"), 86_400 * _NANOS_PER_SECOND),
    **dict.fromkeys(("weeks", "week", "w"), 604_800 * _NANOS_PER_SECOND),
    **dict.fromkeys(("months", "month", "M"), 2_630_016 * _NANOS_PER_SECOND),
    **dict.fromkeys(("years", "year", "y"), 31_557_600 * _NANOS_PER_SECOND),
}

_SECONDS_PER_YEAR = 31_557_600
_SECONDS_PER_MONTH = 2_630_016
_SECONDS_PER_DAY = 86_400

_ITEM_RE = re.compile(r"\s*(\d+)\s*([A-Za-z]*)")
_BAD_CHAR_RE = re.compile(r"[^\sA-Za-z0-9]")


def parse_duration(text: str) -> int:
    """Parse text such as ``"1h 22m 58s"`` or ``"3h27m"`` into whole seconds."""
    if not text.strip():
        raise ValueError("value was empty")
    bad = _BAD_CHAR_RE.search(text)
    if bad:
        raise ValueError(f"invalid character at {bad.start()}")

    total_nanos = 0
    position = 0
    stripped_end = len(text.rstrip())
    while position < stripped_end:
        match = _ITEM_RE.match(text, position)
        if match is None:
            raise ValueError(f"expected number at {position}")
        number, unit = match.groups()
        if not unit:
            raise ValueError("time unit needed, for example 10sec or 10ms")
        if unit not in _UNIT_NANOS:
            raise ValueError(f"unknown time unit {unit!r}")
        total_nanos += int(number) * _UNIT_NANOS[unit]
        position = match.end()

    seconds = total_nanos // _NANOS_PER_SECOND
    if seconds > _MAX_SECONDS:
        raise ValueError("number is too large")
    return seconds


def format_duration(seconds: int) -> str:
    """Format whole seconds as text such as ``"14days 10h 17m 36s"``."""
    if seconds < 0:
        raise ValueError("duration cannot be negative")
    if seconds == 0:
        return "0s"

    years, rest = divmod(seconds, _SECONDS_PER_YEAR)
    months, rest = divmod(rest, _SECONDS_PER_MONTH)
    days, day_seconds = divmod(rest, _SECONDS_PER_DAY)
    hours, rest = divmod(day_seconds, 3_600)
    minutes, secs = divmod(rest, 60)

    def plural(count: int, name: str) -> str:
        return f"{count}{name}" if count == 1 else f"{count}{name}s"

    parts = []
    if years:
        parts.append(plural(years, "year"))
    if months:
        parts.append(plural(months, "month"))
    if days:
        parts.append(plural(days, "day"))
    parts.extend(
        f"{count}{suffix}"
        for count, suffix in ((hours, "h"), (minutes, "m"), (secs, "s"))
        if count
    )
    return " ".join(parts)


@dataclass(frozen=True, order=True)
class Duration:
    """A non-negative span of whole seconds."""

    seconds: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise TypeError("duration seconds must be an integer")
        if not 0 <= self.seconds <= _MAX_SECONDS:
            raise ValueError("duration seconds out of range")

    @classmethod
    def parse(cls, text: str) -> Duration:
        """Build a duration from human readable text."""
        return cls(parse_duration(text))

    @classmethod
    def from_redis(cls, value: int | str | bytes) -> Duration:
        """Build a duration from a stored count of seconds."""
        if isinstance(value, (bytes, bytearray)):
            value = value.decode()
        if isinstance(value, str):
            if not value.isdigit():
                raise ValueError(f"invalid stored duration: {value!r}")
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"cannot read duration from {type(value).__name__}")
        return cls(value)

    def to_redis(self) -> int:
        """Value stored in Redis: the number of seconds."""
        return self.seconds

    def is_zero(self) -> bool:
        return self.seconds == 0

    def __str__(self) -> str:
        return format_duration(self.seconds)