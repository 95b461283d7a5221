"""BMP decoder."""

from __future__ import annotations

from pixbuf.decoders.pillow import decode_with_pillow
from pixbuf.image import Image


def parse(data: bytes) -> Image:
    """Decode BMP file bytes into an image.

    Raises:
        DecodeError: If the bytes are not a readable BMP
    """
    return decode_with_pillow(data, "BMP")
