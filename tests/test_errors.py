from http import HTTPStatus

import pytest

from ocypod.errors import (
    CONTENT_TYPE,
    BadRequest,
    Conflict,
    InternalError,
    NoSuchJob,
    NoSuchQueue,
    OcyError,
    ParseError,
    RedisConnectionError,
    RedisFailure,
)


@pytest.mark.parametrize(
    "error, status",
    [
        (RedisFailure("boom"), HTTPStatus.INTERNAL_SERVER_ERROR),
        (InternalError("boom"), HTTPStatus.INTERNAL_SERVER_ERROR),
        (ParseError("boom"), HTTPStatus.INTERNAL_SERVER_ERROR),
        (RedisConnectionError("boom"), HTTPStatus.SERVICE_UNAVAILABLE),
        (NoSuchQueue("default"), HTTPStatus.NOT_FOUND),
        (NoSuchJob(3), HTTPStatus.NOT_FOUND),
        (BadRequest("boom"), HTTPStatus.BAD_REQUEST),
        (Conflict("boom"), HTTPStatus.CONFLICT),
    ],
)
def test_status_codes(error, status):
    response_status, headers, body = error.error_response()
    assert response_status == status
    assert headers == {"Content-Type": CONTENT_TYPE}
    assert body == str(error)


def test_no_such_job_message():
    err = NoSuchJob(7)
    assert err.job_id == 7
    assert str(err) == "Job with ID 7 does not exist"


def test_no_such_queue_message():
    err = NoSuchQueue("default")
    assert err.queue == "default"
    assert str(err) == "Queue 'default' does not exist"


def test_parse_error_message():
    assert str(ParseError("bad")) == "Parse error: bad"


def test_plain_messages_pass_through():
    for cls in (BadRequest, Conflict, InternalError):
        assert str(cls("some message")) == "some message"


def test_connection_message_prefix():
    assert str(RedisConnectionError("pool exhausted")).startswith(
        "Failed to connect to Redis: "
    )
    assert str(RedisConnectionError("pool exhausted")).endswith("pool exhausted")


def test_equality_same_variant_and_payload():
    assert NoSuchJob(1) == NoSuchJob(1)
    assert not NoSuchJob(1) == NoSuchJob(2)
    assert not BadRequest("x") == Conflict("x")
    assert Conflict("x") == Conflict("x")


def test_connection_errors_compare_by_text():
    assert RedisConnectionError(RuntimeError("down")) == RedisConnectionError("down")


def test_redis_failure_keeps_cause():
    cause = OSError("broken pipe")
    err = RedisFailure(cause)
    assert err.__cause__ is cause
    assert str(err) == str(cause)


def test_errors_are_raisable_and_catchable():
    with pytest.raises(OcyError) as info:
        raise NoSuchQueue("missing")
    assert info.value == NoSuchQueue("missing")


def test_hashable_consistent_with_equality():
    assert len({NoSuchJob(1), NoSuchJob(1), NoSuchJob(2)}) == 2