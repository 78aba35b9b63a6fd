"""
Image processing utilities.

Reads user-selected reference image files and encodes them as
ReferenceImage payloads for the model call.
"""

import asyncio
import mimetypes
from pathlib import Path
from typing import List, Sequence, Union

from shared.errors import ValidationError
from shared.logging import get_logger
from shared.models.prompt import MAX_REFERENCE_IMAGES, ReferenceImage

logger = get_logger("image_processing")

# Magic numbers for formats the model accepts inline
_IMAGE_SIGNATURES = {
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"\xff\xd8\xff": "image/jpeg",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
}


def detect_image_mime_type(header: bytes, filename: str = "") -> str:
    """
    Detect an image MIME type from leading bytes, falling back to the filename.

    Raises:
        ValidationError: If the content is not a recognizable image
    """
    for signature, mime_type in _IMAGE_SIGNATURES.items():
        if header.startswith(signature):
            return mime_type
    if header[:4] == b"RIFF" and header[8:12] == b"WEBP":
        return "image/webp"

    guessed, _ = mimetypes.guess_type(filename)
    if guessed and guessed.startswith("image/"):
        return guessed
    raise ValidationError(f"Unsupported image file: {filename or 'upload'}")


async def encode_image_file(path: Union[str, Path]) -> ReferenceImage:
    """
    Read one image file and encode it as a ReferenceImage.

    Args:
        path: Path to the image file

    Returns:
        ReferenceImage with base64 payload and detected MIME type

    Raises:
        ValidationError: If the file is missing, empty, or not an image
    """
    file_path = Path(path)
    try:
        raw = await asyncio.to_thread(file_path.read_bytes)
    except FileNotFoundError as exc:
        raise ValidationError(f"Image file not found: {file_path}") from exc
    except OSError as exc:
        raise ValidationError(f"Could not read image file {file_path}: {exc}") from exc

    if not raw:
        raise ValidationError(f"Image file is empty: {file_path}")

    mime_type = detect_image_mime_type(raw[:12], file_path.name)
    return ReferenceImage.from_bytes(raw, mime_type)


async def load_reference_images(
    paths: Sequence[Union[str, Path]],
    limit: int = MAX_REFERENCE_IMAGES,
) -> List[ReferenceImage]:
    """
    Encode the first ``limit`` selected files concurrently.

    One read is started per file and all of them are awaited before
    returning. The result follows selection order, not completion order.
    """
    selected = list(paths)[:limit]
    if len(paths) > limit:
        logger.info(
            "Dropping reference images over limit",
            extra={"selected": len(paths), "limit": limit},
        )
    if not selected:
        return []

    images = await asyncio.gather(*(encode_image_file(path) for path in selected))
    logger.debug("Reference images encoded", extra={"count": len(images)})
    return list(images)
