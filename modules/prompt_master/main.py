"""
Prompt Master entry point.

Provides the caller-facing async API: normalize raw input, then generate.
"""

from typing import Any, Optional, Sequence
from uuid import UUID, uuid4

from shared.errors import PipelineError
from shared.logging import get_logger, set_request_id
from shared.models.prompt import PromptSet

from .invoker import ModelInvoker
from .normalizer import ImageInput, StyleInput, normalize
from .process import ensure_typed, generate

logger = get_logger("prompt_master")


async def generate_prompts(
    title: Optional[str],
    count: Any,
    style: StyleInput,
    images: Optional[Sequence[ImageInput]],
    invoker: ModelInvoker,
    request_id: Optional[UUID] = None,
) -> PromptSet:
    """
    Generate a PromptSet from raw user input.

    Invalid input raises ValidationError before any model call is made.

    Args:
        title: Free text title, may be empty
        count: Number of image prompts
        style: Style value or "Auto"
        images: Reference image data URLs (first 3 kept)
        invoker: Model invocation boundary
        request_id: Optional identifier, generated when omitted

    Returns:
        PromptSet ready for the video pipeline
    """
    request_id = request_id or uuid4()
    set_request_id(request_id)
    try:
        request = normalize(title, count, style, images)

        logger.info(
            "Starting prompt generation",
            extra={
                "count": request.count,
                "style": request.style.label,
                "reference_images": len(request.reference_images),
                "has_title": bool(request.title),
            },
        )
        return await generate(request, invoker, request_id=request_id)
    except PipelineError as exc:
        if exc.request_id is None:
            exc.request_id = request_id
        raise
    except Exception as exc:  # pragma: no cover - defensive
        logger.error("Unexpected prompt generation error", exc_info=True)
        raise ensure_typed(exc, request_id=request_id) from exc
    finally:
        set_request_id(None)
