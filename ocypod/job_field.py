"""Names of the fields of a job stored in a Redis hash."""

from __future__ import annotations

from enum import StrEnum


class JobField(StrEnum):
    """A job field stored in a Redis hash."""

    ID = "id"
    QUEUE = "queue"
    STATUS = "status"
    TAGS = "tags"
    CREATED_AT = "created_at"
    STARTED_AT = "started_at"
    ENDED_AT = "ended_at"
    LAST_HEARTBEAT = "last_heartbeat"
    INPUT = "input"
    OUTPUT = "output"
    TIMEOUT = "timeout"
    HEARTBEAT_TIMEOUT = "heartbeat_timeout"
    EXPIRES_AFTER = "expires_after"
    RETRIES = "retries"
    RETRIES_ATTEMPTED = "retries_attempted"
    RETRY_DELAYS = "retry_delays"
    ENDED = "ended"

    @classmethod
    def all_fields(cls) -> tuple[JobField, ...]:
        """Every field, in declaration order."""
        return tuple(cls)

    @classmethod
    def from_redis(cls, value: str | bytes) -> JobField:
        """Read a field name stored in Redis."""
        if isinstance(value, (bytes, bytearray)):
            value = value.decode()
        if not isinstance(value, str):
            raise TypeError(f"cannot read job field from {type(value).__name__}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError("Invalid job field") from None

    def to_redis(self) -> str:
        return self.value