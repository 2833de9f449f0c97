import pytest

from ocypod.job_field import JobField

ALL_FIELDS = [
    JobField.ID,
    JobField.QUEUE,
    JobField.STATUS,
    JobField.TAGS,
    JobField.CREATED_AT,
    JobField.STARTED_AT,
    JobField.ENDED_AT,
    JobField.LAST_HEARTBEAT,
    JobField.INPUT,
    JobField.OUTPUT,
    JobField.TIMEOUT,
    JobField.HEARTBEAT_TIMEOUT,
    JobField.EXPIRES_AFTER,
    JobField.RETRIES,
    JobField.RETRIES_ATTEMPTED,
    JobField.RETRY_DELAYS,
    JobField.ENDED,
]


@pytest.mark.parametrize("field", ALL_FIELDS)
def test_field_to_from_str(field):
    assert JobField(str(field)) == field
    assert JobField.from_redis(field.to_redis()) == field
    assert JobField.from_redis(field.to_redis().encode()) == field


def test_all_fields_order():
    assert JobField.all_fields() == tuple(ALL_FIELDS)
    assert len(JobField.all_fields()) == 17


def test_field_names():
    assert JobField.CREATED_AT.to_redis() == "created_at"
    assert JobField.RETRIES_ATTEMPTED.to_redis() == "retries_attempted"


def test_invalid_field():
    with pytest.raises(ValueError, match="Invalid job field"):
        JobField.from_redis("nonexistent")


def test_non_string_rejected():
    with pytest.raises(TypeError):
        JobField.from_redis(1)


def test_usable_as_dict_keys():
    mapping = {field: str(field) for field in JobField.all_fields()}
    assert mapping[JobField.TAGS] == "tags"