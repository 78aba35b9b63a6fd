"""
High-level orchestration for prompt set generation.
"""

from __future__ import annotations

import time
from typing import Optional
from uuid import UUID

from shared.errors import PipelineError, ValidationError
from shared.logging import get_logger
from shared.models.prompt import GenerationRequest, PromptSet

from .composer import compose
from .error_classifier import classify, to_pipeline_error
from .invoker import ModelInvoker
from .validator import validate_prompt_set

logger = get_logger("prompt_master")


async def generate(
    request: GenerationRequest,
    invoker: ModelInvoker,
    request_id: Optional[UUID] = None,
) -> PromptSet:
    """
    Compose, invoke once, and validate.

    Args:
        request: Normalized GenerationRequest
        invoker: Model invocation boundary
        request_id: Identifier attached to errors and logs

    Returns:
        PromptSet with exactly request.count image prompts

    Raises:
        ValidationError: Unsupported style selection
        CredentialError: Model rejected the credential
        SchemaError: Malformed or miscounted payload
        TransientError: Any other invocation failure
    """
    if not isinstance(request, GenerationRequest):
        raise ValidationError("request must be a GenerationRequest", request_id=request_id)

    start_time = time.monotonic()
    instruction = compose(request)

    try:
        payload = await invoker.invoke(instruction)
    except Exception as exc:
        error = to_pipeline_error(exc, request_id=request_id)
        logger.warning(
            "Model invocation failed",
            extra={
                "provider": getattr(invoker, "provider", None),
                "error_kind": classify(exc).value,
                "error": str(exc),
            },
        )
        if error is exc:
            raise
        raise error from exc

    prompt_set = validate_prompt_set(payload, request.count, request_id=request_id)

    logger.info(
        "Prompt set generated",
        extra={
            "image_prompts": prompt_set.count,
            "video_prompts": len(prompt_set.video_prompts),
            "style": instruction.style_label,
            "generation_time": round(time.monotonic() - start_time, 3),
        },
    )
    return prompt_set


def ensure_typed(failure: BaseException, request_id: Optional[UUID] = None) -> PipelineError:
    """Typed error for any failure that escaped the pipeline stages."""
    if isinstance(failure, PipelineError):
        return failure
    return to_pipeline_error(failure, request_id=request_id)
