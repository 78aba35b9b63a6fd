import pytest

from modules.prompt_master.normalizer import normalize, parse_count, parse_style
from shared.errors import EmptyInputError, ValidationError
from shared.models.prompt import AutoStyle, ExplicitStyle, ReferenceImage, StyleKind


def test_normalize_trims_title_and_defaults_to_auto():
    request = normalize("  Cải tạo phòng ngủ cũ  ", 3, "Auto", [])
    assert request.title == "Cải tạo phòng ngủ cũ"
    assert request.count == 3
    assert isinstance(request.style, AutoStyle)
    assert request.reference_images == []


def test_normalize_rejects_empty_title_without_images():
    with pytest.raises(EmptyInputError):
        normalize("   ", 3, "Auto", [])


def test_normalize_accepts_images_without_title(png_data_url):
    request = normalize("", 2, "Cinematic", [png_data_url])
    assert request.title == ""
    assert len(request.reference_images) == 1
    assert request.reference_images[0].mime_type == "image/png"


def test_normalize_keeps_first_three_images_in_order(data_urls):
    request = normalize("Kitchen", 4, "Auto", data_urls)
    assert [image.data_url for image in request.reference_images] == data_urls[:3]


@pytest.mark.parametrize("count", [0, 7, -1, 2.0, "3", True])
def test_parse_count_rejects_unsupported_values(count):
    with pytest.raises(ValidationError):
        parse_count(count)


def test_parse_style_accepts_values_names_and_variants():
    assert parse_style("Industrial / Factory Process") == ExplicitStyle(kind=StyleKind.INDUSTRIAL)
    assert parse_style("cinematic") == ExplicitStyle(kind=StyleKind.CINEMATIC)
    assert parse_style(StyleKind.DOCUMENTARY).kind is StyleKind.DOCUMENTARY
    assert isinstance(parse_style("auto"), AutoStyle)
    selection = ExplicitStyle(kind=StyleKind.CLEANUP_RENOVATION)
    assert parse_style(selection) is selection


@pytest.mark.parametrize("style", ["Watercolor", "", None, 3])
def test_parse_style_rejects_unknown(style):
    with pytest.raises(ValidationError):
        parse_style(style)


def test_normalize_rejects_malformed_image():
    with pytest.raises(ValidationError):
        normalize("Title", 3, "Auto", ["not-a-data-url"])


def test_normalize_ignores_malformed_image_beyond_limit(data_urls):
    request = normalize("Title", 3, "Auto", data_urls[:3] + ["garbage"])
    assert len(request.reference_images) == 3


def test_normalize_accepts_reference_image_objects():
    image = ReferenceImage.from_bytes(b"\xff\xd8\xff\xe0abc", "image/jpeg")
    request = normalize("Workshop", 1, "Documentary", [image])
    assert request.reference_images == [image]
    assert request.video_count == 0
