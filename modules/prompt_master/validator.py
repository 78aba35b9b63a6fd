"""
Validation of model output against the PromptSet schema.

Mismatched payloads are rejected, never padded or truncated.
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional, Union
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from shared.errors import SchemaError
from shared.logging import get_logger
from shared.models.prompt import PromptSet

logger = get_logger("prompt_master")

ANALYSIS_FIELDS = ("subject", "actionType", "progression")


def validate_prompt_set(
    payload: Union[str, bytes, Mapping[str, Any]],
    count: int,
    request_id: Optional[UUID] = None,
) -> PromptSet:
    """
    Check a raw model payload and build the PromptSet.

    Args:
        payload: Decoded mapping or raw JSON text from the model
        count: Requested number of image prompts
        request_id: Request identifier for error context

    Returns:
        Validated PromptSet

    Raises:
        SchemaError: On malformed JSON, wrong shape, or wrong cardinality
    """
    data = _decode(payload, request_id)

    image_prompts = _prompt_list(data, "imagePrompts", request_id)
    video_prompts = _prompt_list(data, "videoPrompts", request_id)

    if len(image_prompts) != count:
        raise SchemaError(
            f"Expected {count} image prompts, received {len(image_prompts)}",
            request_id=request_id,
        )
    if len(video_prompts) != count - 1:
        raise SchemaError(
            f"Expected {count - 1} video prompts, received {len(video_prompts)}",
            request_id=request_id,
        )

    analysis = data.get("analysis")
    if not isinstance(analysis, Mapping):
        raise SchemaError("Response is missing the analysis object", request_id=request_id)
    for field_name in ANALYSIS_FIELDS:
        value = analysis.get(field_name)
        if not isinstance(value, str) or not value.strip():
            raise SchemaError(
                f"analysis.{field_name} is missing or empty",
                request_id=request_id,
            )

    try:
        prompt_set = PromptSet.model_validate(
            {
                "imagePrompts": image_prompts,
                "videoPrompts": video_prompts,
                "analysis": {name: analysis[name] for name in ANALYSIS_FIELDS},
            }
        )
    except PydanticValidationError as exc:
        raise SchemaError(
            "Response does not match the prompt set schema",
            request_id=request_id,
            detail=str(exc),
        ) from exc

    logger.debug(
        "Prompt set validated",
        extra={"image_prompts": prompt_set.count, "video_prompts": len(prompt_set.video_prompts)},
    )
    return prompt_set


def strip_json_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""
    stripped = text.strip()
    if stripped.startswith("```"):
        first_newline = stripped.find("\n")
        if first_newline == -1:
            inner = stripped.strip("`").strip()
            if inner[:4].lower() == "json":
                inner = inner[4:]
            return inner.strip()
        stripped = stripped[first_newline + 1:]
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()


def _decode(payload: Union[str, bytes, Mapping[str, Any]], request_id: Optional[UUID]) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    if not isinstance(payload, str):
        raise SchemaError(
            f"Unexpected response type: {type(payload).__name__}",
            request_id=request_id,
        )

    text = strip_json_fence(payload)
    if not text:
        raise SchemaError("Model returned an empty response", request_id=request_id)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning(
            "Failed to parse model JSON response",
            extra={"error": str(exc), "content_length": len(text)},
        )
        raise SchemaError(
            "Model response is not valid JSON",
            request_id=request_id,
            detail=str(exc),
        ) from exc

    if not isinstance(data, dict):
        raise SchemaError("Model response must be a JSON object", request_id=request_id)
    return data


def _prompt_list(data: Mapping[str, Any], key: str, request_id: Optional[UUID]) -> List[str]:
    value = data.get(key)
    if not isinstance(value, list):
        raise SchemaError(f"{key} must be a list", request_id=request_id)
    for index, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise SchemaError(
                f"{key}[{index}] must be a non-empty string",
                request_id=request_id,
            )
    return value
