"""
Error hierarchy.

Typed failures surfaced by the prompt pipeline. Every error carries a
human-readable message, an optional request_id, and a stable ``code`` used
by the API layer.
"""

from typing import Optional
from uuid import UUID


class PipelineError(Exception):
    """Base class for all prompt pipeline errors."""

    code = "PIPELINE_ERROR"

    def __init__(
        self,
        message: str,
        request_id: Optional[UUID] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id
        self.detail = detail

    def __str__(self) -> str:
        return self.message


class ConfigError(PipelineError):
    """Configuration could not be loaded or is invalid."""

    code = "CONFIG_ERROR"


class ValidationError(PipelineError):
    """User input is malformed. No model call was made."""

    code = "VALIDATION_ERROR"


class GenerationError(PipelineError):
    """The model call completed but its outcome is unusable."""

    code = "GENERATION_ERROR"


class CredentialError(GenerationError):
    """The model rejected the call for a missing, invalid or unbilled key."""

    code = "MISSING_CREDENTIAL"


class SchemaError(GenerationError):
    """The model returned a malformed or miscounted payload."""

    code = "SCHEMA_ERROR"


class RetryableError(PipelineError):
    """A later attempt may succeed. The pipeline itself never retries."""

    code = "RETRYABLE_ERROR"


class TransientError(RetryableError):
    """Network, quota or server-side failure during invocation."""

    code = "TRANSIENT_ERROR"


class GenerationInProgressError(PipelineError):
    """A generation is already running for this session."""

    code = "GENERATION_IN_PROGRESS"


class EmptyInputError(ValidationError):
    """Neither a title nor a reference image was supplied."""
