"""PNG decoder."""

from __future__ import annotations

from pixbuf.decoders.pillow import decode_with_pillow
from pixbuf.image import Image


def parse(data: bytes) -> Image:
    """Decode PNG file bytes into an image.

    Palette, grayscale and 16-bit images are converted to 8-bit RGBA.

    Raises:
        DecodeError: If the bytes are not a readable PNG
    """
    return decode_with_pillow(data, "PNG")
