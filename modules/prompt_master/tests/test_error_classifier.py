import pytest

from modules.prompt_master.error_classifier import (
    ErrorKind,
    classify,
    requires_credential_reset,
    to_pipeline_error,
    user_message,
)
from shared.errors import (
    CredentialError,
    EmptyInputError,
    SchemaError,
    TransientError,
    ValidationError,
)


def test_classify_entity_not_found_as_missing_credential():
    failure = RuntimeError("404 NOT_FOUND. {'message': 'Requested entity was not found.'}")
    assert classify(failure) is ErrorKind.MISSING_CREDENTIAL
    assert requires_credential_reset(ErrorKind.MISSING_CREDENTIAL)


@pytest.mark.parametrize(
    "failure, kind",
    [
        (ValidationError("bad input"), ErrorKind.VALIDATION),
        (SchemaError("wrong count"), ErrorKind.SCHEMA),
        (CredentialError("no key"), ErrorKind.MISSING_CREDENTIAL),
        (ConnectionError("connection reset"), ErrorKind.TRANSIENT),
        (RuntimeError("429 RESOURCE_EXHAUSTED"), ErrorKind.TRANSIENT),
    ],
)
def test_classify_by_origin(failure, kind):
    assert classify(failure) is kind


@pytest.mark.parametrize(
    "kind", [ErrorKind.VALIDATION, ErrorKind.SCHEMA, ErrorKind.TRANSIENT]
)
def test_only_credential_failures_reset_credential(kind):
    assert not requires_credential_reset(kind)


def test_to_pipeline_error_wraps_untyped_failures(request_uuid):
    error = to_pipeline_error(TimeoutError("upstream timed out"), request_id=request_uuid)
    assert isinstance(error, TransientError)
    assert error.message == "upstream timed out"
    assert error.request_id == request_uuid

    credential = to_pipeline_error(Exception("Requested entity was not found."))
    assert isinstance(credential, CredentialError)


def test_to_pipeline_error_keeps_typed_errors():
    original = SchemaError("bad payload")
    assert to_pipeline_error(original) is original


def test_user_message_exists_for_every_kind():
    for kind in ErrorKind:
        assert user_message(kind)


def test_user_message_reserves_empty_input_text():
    empty = EmptyInputError("A title or at least one reference image is required")
    bad_count = ValidationError("count must be one of [1, 2, 3, 4, 5, 6], received 8")

    assert user_message(ErrorKind.VALIDATION, empty) == "Vui lòng nhập tiêu đề hoặc tải ảnh lên!"
    assert user_message(ErrorKind.VALIDATION, bad_count) == bad_count.message


def test_user_message_ignores_failure_for_other_kinds():
    failure = TransientError("connection reset")
    assert user_message(ErrorKind.TRANSIENT, failure) == "Đã có lỗi xảy ra"
