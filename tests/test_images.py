"""Tests for image preparation."""

import base64
from io import BytesIO

import pytest
from PIL import Image

from fresh_keeper.domain.errors import ImageTooLargeError, InvalidRequestError
from fresh_keeper.services.images import prepare_image, to_data_url
from tests.conftest import image_bytes


def open_jpeg(data: bytes) -> Image.Image:
    image = Image.open(BytesIO(data))
    assert image.format == "JPEG"
    return image


def test_prepare_image_caps_longest_side() -> None:
    jpeg = prepare_image(
        image_bytes(3000, 1500), max_dimension=1024, quality=70, max_bytes=20_000_000
    )

    assert open_jpeg(jpeg).size == (1024, 512)


def test_prepare_image_keeps_small_images() -> None:
    jpeg = prepare_image(
        image_bytes(640, 480), max_dimension=1024, quality=70, max_bytes=20_000_000
    )

    assert open_jpeg(jpeg).size == (640, 480)


def test_prepare_image_accepts_alpha_channels() -> None:
    buffer = BytesIO()
    Image.new("RGBA", (50, 50), (0, 0, 0, 0)).save(buffer, format="PNG")

    jpeg = prepare_image(
        buffer.getvalue(), max_dimension=1024, quality=70, max_bytes=20_000_000
    )

    assert open_jpeg(jpeg).mode == "RGB"


def test_prepare_image_rejects_oversized_result() -> None:
    with pytest.raises(ImageTooLargeError):
        prepare_image(
            image_bytes(200, 200), max_dimension=1024, quality=70, max_bytes=10
        )


def test_prepare_image_rejects_undecodable_bytes() -> None:
    with pytest.raises(InvalidRequestError):
        prepare_image(b"not an image", max_dimension=1024, quality=70, max_bytes=100)


def test_to_data_url_encodes_jpeg() -> None:
    url = to_data_url(b"\xff\xd8\xff")

    prefix, encoded = url.split(",", 1)
    assert prefix == "data:image/jpeg;base64"
    assert base64.b64decode(encoded) == b"\xff\xd8\xff"
