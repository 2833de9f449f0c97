"""Health check of the server's connection to Redis."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ocypod.errors import RedisConnectionError


class HealthStatus(StrEnum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class Health:
    """Result of a health check, with an error message when unhealthy."""

    status: HealthStatus
    error: str | None = None

    @classmethod
    def healthy(cls) -> Health:
        return cls(HealthStatus.HEALTHY)

    @classmethod
    def from_error(cls, message: str) -> Health:
        return cls(HealthStatus.UNHEALTHY, str(message))

    def to_dict(self) -> dict[str, str]:
        data = {"status": self.status.value}
        if self.error is not None:
            data["error"] = self.error
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


def check_health(ping: Callable[[], Any]) -> Health:
    """Send a PING through ``ping`` and report health from the reply.

    A :class:`RedisConnectionError` is propagated, since no connection was available.
    """
    try:
        reply = ping()
    except RedisConnectionError:
        raise
    except Exception as exc:
        return Health.from_error(str(exc))

    if isinstance(reply, (bytes, bytearray)):
        reply = reply.decode(errors="replace")
    if reply == "PONG":
        return Health.healthy()
    return Health.from_error(f"unexpected PING response from Redis: {reply}")