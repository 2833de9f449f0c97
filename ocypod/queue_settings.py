"""Settings that control how jobs in a queue behave."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ocypod.duration import Duration
from ocypod.errors import BadRequest

_MAX_U64 = 2**64 - 1
_REDIS_VALUE_COUNT = 5


def _parse_duration(value: Any, name: str) -> Duration:
    if not isinstance(value, str):
        raise BadRequest(f"invalid value for '{name}': expected a duration string")
    try:
        return Duration.parse(value)
    except ValueError as exc:
        raise BadRequest(f"invalid value for '{name}': {exc}") from exc


def _parse_count(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_U64:
        raise BadRequest(f"invalid value for '{name}': expected a non-negative integer")
    return value


def _parse_delays(value: Any, name: str) -> list[Duration]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise BadRequest(f"invalid value for '{name}': expected a list of durations")
    return [_parse_duration(item, name) for item in value]


def _read_u64(value: Any) -> int:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode()
    if isinstance(value, str):
        if not (value.isascii() and value.isdigit()):
            raise ValueError(f"invalid stored integer: {value!r}")
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"cannot read integer from {type(value).__name__}")
    if not 0 <= value <= _MAX_U64:
        raise ValueError(f"stored integer out of range: {value}")
    return value


@dataclass
class QueueSettings:
    """Per-queue defaults applied to the jobs created in it."""

    timeout: Duration = field(default_factory=lambda: Duration(300))
    heartbeat_timeout: Duration = field(default_factory=lambda: Duration(0))
    expires_after: Duration = field(default_factory=lambda: Duration(300))
    retries: int = 0
    retry_delays: list[Duration] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueueSettings:
        """Build settings from decoded JSON or TOML; missing keys take defaults."""
        if not isinstance(data, Mapping):
            raise BadRequest("queue settings must be an object")
        settings = cls()
        if "timeout" in data:
            settings.timeout = _parse_duration(data["timeout"], "timeout")
        if "heartbeat_timeout" in data:
            settings.heartbeat_timeout = _parse_duration(
                data["heartbeat_timeout"], "heartbeat_timeout"
            )
        if "expires_after" in data:
            settings.expires_after = _parse_duration(data["expires_after"], "expires_after")
        if "retries" in data:
            settings.retries = _parse_count(data["retries"], "retries")
        if "retry_delays" in data:
            settings.retry_delays = _parse_delays(data["retry_delays"], "retry_delays")
        return settings

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form, with durations as human readable text."""
        return {
            "timeout": str(self.timeout),
            "heartbeat_timeout": str(self.heartbeat_timeout),
            "expires_after": str(self.expires_after),
            "retries": self.retries,
            "retry_delays": [str(delay) for delay in self.retry_delays],
        }

    @classmethod
    def from_redis(cls, values: Sequence[Any]) -> QueueSettings:
        """Build settings from the five stored hash values, in field order."""
        if len(values) != _REDIS_VALUE_COUNT:
            raise ValueError(
                f"expected {_REDIS_VALUE_COUNT} queue setting values, got {len(values)}"
            )
        timeout, heartbeat_timeout, expires_after, retries, retry_delays = values
        if any(v is None for v in (timeout, heartbeat_timeout, expires_after, retries)):
            raise ValueError("queue settings are missing a mandatory value")
        if retry_delays is None:
            delays: list[Duration] = []
        else:
            if isinstance(retry_delays, (bytes, bytearray)):
                retry_delays = retry_delays.decode()
            delays = [Duration.parse(text) for text in json.loads(retry_delays)]
        return cls(
            timeout=Duration.from_redis(timeout),
            heartbeat_timeout=Duration.from_redis(heartbeat_timeout),
            expires_after=Duration.from_redis(expires_after),
            retries=_read_u64(retries),
            retry_delays=delays,
        )