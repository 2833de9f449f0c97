"""Errors raised throughout the application, each tied to an HTTP status."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

CONTENT_TYPE = "text/html; charset=utf-8"


class OcyError(Exception):
    """Base error; carries the HTTP status it maps to."""

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, detail: Any) -> None:
        self.detail = detail
        super().__init__(self._describe())

    def _describe(self) -> str:
        return str(self.detail)

    def _key(self) -> Any:
        return self.detail

    def __str__(self) -> str:
        return self._describe()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OcyError):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def error_response(self) -> tuple[HTTPStatus, dict[str, str], str]:
        """HTTP status, headers and body describing this error."""
        return self.status_code, {"Content-Type": CONTENT_TYPE}, str(self)


class RedisFailure(OcyError):
    """An interaction with Redis failed."""

    def __init__(self, error: Exception | str) -> None:
        super().__init__(error)
        if isinstance(error, BaseException):
            self.__cause__ = error

    def _key(self) -> Any:
        return (type(self.detail).__name__, str(self.detail))


class RedisConnectionError(OcyError):
    """No pooled connection to Redis could be obtained."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE

    def _describe(self) -> str:
        return f"Failed to connect to Redis: {self.detail}"

    def _key(self) -> Any:
        return str(self.detail)


class NoSuchQueue(OcyError):
    """The named queue does not exist."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, queue: str) -> None:
        self.queue = queue
        super().__init__(queue)

    def _describe(self) -> str:
        return f"Queue '{self.detail}' does not exist"


class NoSuchJob(OcyError):
    """No job has the given ID."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, job_id: int) -> None:
        self.job_id = job_id
        super().__init__(job_id)

    def _describe(self) -> str:
        return f"Job with ID {self.detail} does not exist"


class BadRequest(OcyError):
    """The request could not be completed with the given parameters."""

    status_code = HTTPStatus.BAD_REQUEST


class Conflict(OcyError):
    """The request conflicts with the current state of a resource."""

    status_code = HTTPStatus.CONFLICT


class InternalError(OcyError):
    """Unexpected internal failure."""


class ParseError(OcyError):
    """Parsing some data structure, typically JSON, failed."""

    def _describe(self) -> str:
        return f"Parse error: {self.detail}"