"""
Input normalization for generation requests.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from shared.errors import EmptyInputError, ValidationError
from shared.logging import get_logger
from shared.models.prompt import (
    AUTO_STYLE_LABEL,
    MAX_REFERENCE_IMAGES,
    SUPPORTED_COUNTS,
    AutoStyle,
    ExplicitStyle,
    GenerationRequest,
    ReferenceImage,
    StyleKind,
)

logger = get_logger("prompt_master")

StyleInput = Union[str, StyleKind, ExplicitStyle, AutoStyle]
ImageInput = Union[str, ReferenceImage]


def normalize(
    title: Optional[str],
    count: Any,
    style: StyleInput,
    images: Optional[Sequence[ImageInput]] = None,
) -> GenerationRequest:
    """
    Validate raw user input and shape it into a GenerationRequest.

    Args:
        title: Free text, may be empty
        count: Requested number of image prompts
        style: Style value, enum member, or parsed StyleSelection
        images: Reference images as data URLs or ReferenceImage objects

    Returns:
        GenerationRequest ready for composition

    Raises:
        ValidationError: If the input cannot form a valid request
    """
    clean_title = (title or "").strip()
    reference_images = parse_images(images or [])

    if not clean_title and not reference_images:
        raise EmptyInputError("A title or at least one reference image is required")

    request_count = parse_count(count)
    selection = parse_style(style)

    try:
        return GenerationRequest(
            title=clean_title,
            count=request_count,
            style=selection,
            reference_images=reference_images,
        )
    except PydanticValidationError as exc:
        raise ValidationError("Invalid generation request", detail=str(exc)) from exc


def parse_count(count: Any) -> int:
    # bool is an int subclass; True must not pass as 1
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValidationError(f"count must be an integer, received {count!r}")
    if count not in SUPPORTED_COUNTS:
        raise ValidationError(
            f"count must be one of {list(SUPPORTED_COUNTS)}, received {count}"
        )
    return count


def parse_style(style: StyleInput) -> Union[ExplicitStyle, AutoStyle]:
    if isinstance(style, (ExplicitStyle, AutoStyle)):
        return style
    if isinstance(style, StyleKind):
        return ExplicitStyle(kind=style)
    if not isinstance(style, str):
        raise ValidationError(f"Unsupported style: {style!r}")

    value = style.strip()
    if value.lower() == AUTO_STYLE_LABEL.lower():
        return AutoStyle()
    for kind in StyleKind:
        if value == kind.value or value.upper() == kind.name:
            return ExplicitStyle(kind=kind)
    raise ValidationError(f"Unsupported style: {style!r}")


def parse_images(images: Sequence[ImageInput]) -> List[ReferenceImage]:
    """Keep the first MAX_REFERENCE_IMAGES entries in selection order."""
    selected = list(images)[:MAX_REFERENCE_IMAGES]
    if len(images) > MAX_REFERENCE_IMAGES:
        logger.info(
            "Discarding reference images over limit",
            extra={"supplied": len(images), "kept": MAX_REFERENCE_IMAGES},
        )

    parsed: List[ReferenceImage] = []
    for index, image in enumerate(selected):
        if isinstance(image, ReferenceImage):
            parsed.append(image)
            continue
        if not isinstance(image, str):
            raise ValidationError(f"Reference image {index + 1} must be a data URL")
        try:
            parsed.append(ReferenceImage.from_data_url(image))
        except (ValueError, PydanticValidationError) as exc:
            raise ValidationError(
                f"Reference image {index + 1} is not a valid base64 image",
                detail=str(exc),
            ) from exc
    return parsed
