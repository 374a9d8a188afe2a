"""Image preparation before upload to the vision model."""

import base64
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from fresh_keeper.domain.errors import ImageTooLargeError, InvalidRequestError


def prepare_image(
    image_bytes: bytes,
    *,
    max_dimension: int,
    quality: int,
    max_bytes: int,
) -> bytes:
    """Re-encode an image as JPEG with its longest side capped.

    Smaller images keep their size. Raises ``ImageTooLargeError`` when the
    compressed result still exceeds ``max_bytes``.
    """
    try:
        with Image.open(BytesIO(image_bytes)) as image:
            image.load()
            converted = image.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidRequestError("Image could not be decoded.") from exc

    converted.thumbnail((max_dimension, max_dimension))
    buffer = BytesIO()
    converted.save(buffer, format="JPEG", quality=quality)
    encoded = buffer.getvalue()
    if len(encoded) >= max_bytes:
        raise ImageTooLargeError()
    return encoded


def to_data_url(jpeg_bytes: bytes) -> str:
    """Convert JPEG bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(jpeg_bytes).decode("utf-8")
    return f"data:image/jpeg;base64,{encoded}"
