"""
Failure classification.

Maps any failure raised while generating (normalization, invocation or
validation) to an ErrorKind and a typed PipelineError.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional
from uuid import UUID

from shared.errors import (
    CredentialError,
    EmptyInputError,
    PipelineError,
    SchemaError,
    TransientError,
    ValidationError,
)

# Substring the model API returns when the key's project is unknown or unbilled
CREDENTIAL_FAILURE_PATTERN = "Requested entity was not found"


class ErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    VALIDATION = "validation"
    SCHEMA = "schema"
    TRANSIENT = "transient"


# Messages shown to end users, matching the product UI language
USER_MESSAGES = {
    ErrorKind.MISSING_CREDENTIAL: "API Key không khả dụng. Vui lòng chọn lại Key từ project đã bật Billing.",
    ErrorKind.VALIDATION: "Vui lòng nhập tiêu đề hoặc tải ảnh lên!",
    ErrorKind.SCHEMA: "Kết quả trả về không đúng định dạng. Vui lòng thử lại.",
    ErrorKind.TRANSIENT: "Đã có lỗi xảy ra",
}


def is_credential_failure(message: str) -> bool:
    return CREDENTIAL_FAILURE_PATTERN.lower() in (message or "").lower()


def classify(failure: BaseException) -> ErrorKind:
    """Classify a failure by origin and message."""
    if isinstance(failure, ValidationError):
        return ErrorKind.VALIDATION
    if isinstance(failure, SchemaError):
        return ErrorKind.SCHEMA
    if isinstance(failure, CredentialError) or is_credential_failure(str(failure)):
        return ErrorKind.MISSING_CREDENTIAL
    return ErrorKind.TRANSIENT


def requires_credential_reset(kind: ErrorKind) -> bool:
    """Whether the caller must mark its credential as unknown and re-prompt."""
    return kind is ErrorKind.MISSING_CREDENTIAL


def to_pipeline_error(
    failure: BaseException,
    request_id: Optional[UUID] = None,
) -> PipelineError:
    """
    Convert a failure to the typed error for its kind.

    Typed errors already matching their kind are returned unchanged.
    """
    kind = classify(failure)
    message = str(failure) or type(failure).__name__

    if kind is ErrorKind.VALIDATION or kind is ErrorKind.SCHEMA:
        return failure  # type: ignore[return-value]
    if kind is ErrorKind.MISSING_CREDENTIAL:
        if isinstance(failure, CredentialError):
            return failure
        return CredentialError(message, request_id=request_id, detail=type(failure).__name__)
    if isinstance(failure, TransientError):
        return failure
    return TransientError(message, request_id=request_id, detail=type(failure).__name__)


def user_message(kind: ErrorKind, failure: Optional[BaseException] = None) -> str:
    """
    Message shown to the end user for a failure.

    The empty-input text is reserved for EmptyInputError. Other validation
    failures surface their own message so the user knows which field to fix.
    """
    if (
        kind is ErrorKind.VALIDATION
        and isinstance(failure, PipelineError)
        and not isinstance(failure, EmptyInputError)
    ):
        return failure.message
    return USER_MESSAGES[kind]
