"""
Tests for reference image loading.
"""

import asyncio

import pytest

from shared import image_processing
from shared.errors import ValidationError
from shared.image_processing import (
    detect_image_mime_type,
    encode_image_file,
    load_reference_images,
)

PNG_HEADER = b"\x89PNG\r\n\x1a\n"
JPEG_HEADER = b"\xff\xd8\xff\xe0"


def _write(tmp_path, name: str, content: bytes):
    path = tmp_path / name
    path.write_bytes(content)
    return path


def test_detect_image_mime_type_from_signature():
    assert detect_image_mime_type(PNG_HEADER + b"rest") == "image/png"
    assert detect_image_mime_type(JPEG_HEADER + b"rest") == "image/jpeg"
    assert detect_image_mime_type(b"RIFF\x00\x00\x00\x00WEBP") == "image/webp"


def test_detect_image_mime_type_rejects_non_images():
    with pytest.raises(ValidationError):
        detect_image_mime_type(b"%PDF-1.7", "document.pdf")


@pytest.mark.asyncio
async def test_encode_image_file_builds_reference(tmp_path):
    path = _write(tmp_path, "before.png", PNG_HEADER + b"pixels")
    image = await encode_image_file(path)
    assert image.mime_type == "image/png"
    assert image.to_bytes() == PNG_HEADER + b"pixels"
    assert image.data_url.startswith("data:image/png;base64,")


@pytest.mark.asyncio
async def test_encode_image_file_missing_or_empty(tmp_path):
    with pytest.raises(ValidationError):
        await encode_image_file(tmp_path / "missing.png")
    with pytest.raises(ValidationError):
        await encode_image_file(_write(tmp_path, "empty.png", b""))


@pytest.mark.asyncio
async def test_load_reference_images_keeps_selection_order(tmp_path, monkeypatch):
    paths = [_write(tmp_path, f"img{idx}.png", PNG_HEADER + bytes([idx])) for idx in range(5)]
    original = image_processing.encode_image_file

    async def slow_first(path):
        # Earlier selections finish last
        await asyncio.sleep(0.01 * (5 - int(path.stem[-1])))
        return await original(path)

    monkeypatch.setattr(image_processing, "encode_image_file", slow_first)

    images = await load_reference_images(paths)

    assert len(images) == 3
    assert [image.to_bytes()[-1] for image in images] == [0, 1, 2]


@pytest.mark.asyncio
async def test_load_reference_images_empty_selection():
    assert await load_reference_images([]) == []
