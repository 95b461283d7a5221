"""Shared Pillow decode path for the format decoders."""

from __future__ import annotations

import io
import struct

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from pixbuf.errors import DecodeError
from pixbuf.image import Image


def decode_with_pillow(data: bytes, image_format: str) -> Image:
    """Decode ``data`` with Pillow, accepting only ``image_format``.

    Args:
        data: Raw file bytes
        image_format: Pillow format name, e.g. "PNG"

    Returns:
        The decoded image, converted to RGBA

    Raises:
        DecodeError: If Pillow cannot read the bytes as ``image_format``
    """
    try:
        with PILImage.open(io.BytesIO(data), formats=[image_format]) as pil_img:
            pil_img.load()
            return Image.from_pil(pil_img)
    except UnidentifiedImageError as e:
        raise DecodeError(f"not a valid {image_format} image") from e
    except (OSError, SyntaxError, ValueError, struct.error) as e:
        raise DecodeError(f"failed to decode {image_format} image: {e}") from e
