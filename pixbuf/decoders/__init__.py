"""Format decoders for pixbuf.

BMP decoder: Pillow
PNG decoder: Pillow
JPEG decoder: PyTurboJPEG when libturbojpeg is installed, Pillow otherwise

Decoders are chosen by file extension through a registry, so supporting a new
format is one ``register_decoder`` call.

Usage:
    from pixbuf.decoders import get_decoder_for_path, parse_png, register_decoder

    image = parse_png(png_bytes)

    decode = get_decoder_for_path("photo.JPEG")   # -> parse_jpg
    image = decode(jpeg_bytes)

    register_decoder("tga", my_tga_parser)
"""

from __future__ import annotations

import os

from pixbuf.decoders.base import DecodeFn, DecoderRegistry, path_extension
from pixbuf.decoders.bmp import parse as parse_bmp
from pixbuf.decoders.jpeg import check_turbojpeg_available
from pixbuf.decoders.jpeg import parse as parse_jpg
from pixbuf.decoders.png import parse as parse_png


def _default_registry() -> DecoderRegistry:
    registry = DecoderRegistry()
    registry.register("bmp", parse_bmp)
    registry.register("jpg", parse_jpg)
    registry.register("jpeg", parse_jpg)
    registry.register("png", parse_png)
    return registry


# Registry used by Image.from_path
default_registry = _default_registry()


def register_decoder(extension: str, decode: DecodeFn) -> None:
    """Register ``decode`` for ``extension`` in the default registry."""
    default_registry.register(extension, decode)


def get_decoder_for_path(path: str | bytes | os.PathLike) -> DecodeFn:
    """Return the default registry's decoder for ``path``'s extension.

    Raises:
        UnsupportedFormat: If the path has no extension or it is unknown
        InvalidPath: If the extension is not valid text
    """
    return default_registry.lookup(path)


__all__ = [
    "DecodeFn",
    "DecoderRegistry",
    "check_turbojpeg_available",
    "default_registry",
    "get_decoder_for_path",
    "parse_bmp",
    "parse_jpg",
    "parse_png",
    "path_extension",
    "register_decoder",
]
