"""pixbuf: decoded images as flat arrays of packed colors.

This package loads BMP, PNG and JPEG files into a single in-memory pixel
format, and lets you resize them, cut out regions and blit them onto any
surface that accepts rectangular blocks of colors.

Example:
    from pixbuf import Color, Image, ResizeType

    # Load (format picked from the extension) and resize
    img = Image.from_path("sprite.png")
    small = img.resize(64, 64, ResizeType.TRIANGLE)

    # Images are surfaces too: draw one onto another
    canvas = Image.from_color(320, 240, Color.rgb(0, 0, 0))
    small.draw(canvas, 8, 8)

    # Partial blit through a clamped region of interest
    img.roi(16, 16, 32, 32).draw(canvas, 100, 8)

Custom formats:
    from pixbuf import register_decoder

    register_decoder("qoi", parse_qoi)   # any bytes -> Image function
"""

__version__ = "0.1.0"

# Colors
from pixbuf.color import (
    BLACK,
    COLOR_DTYPE,
    TRANSPARENT,
    WHITE,
    Color,
    pack_rgba,
    unpack_rgba,
)

# Decoders
from pixbuf.decoders import (
    DecoderRegistry,
    check_turbojpeg_available,
    get_decoder_for_path,
    parse_bmp,
    parse_jpg,
    parse_png,
    register_decoder,
)

# Errors
from pixbuf.errors import (
    DecodeError,
    DimensionMismatch,
    ImageIOError,
    InvalidPath,
    PixelBufferError,
    ResizeFailure,
    UnsupportedFormat,
)

# Core buffer
from pixbuf.image import Image, ImageRoi

# Surfaces
from pixbuf.renderer import Renderer

# Resampling
from pixbuf.resize import DEFAULT_RESIZE_TYPE, Pixel, Resizer, ResizeType

__all__ = [
    "__version__",
    # Core buffer
    "Image",
    "ImageRoi",
    "Renderer",
    # Colors
    "Color",
    "COLOR_DTYPE",
    "BLACK",
    "WHITE",
    "TRANSPARENT",
    "pack_rgba",
    "unpack_rgba",
    # Resampling
    "ResizeType",
    "Resizer",
    "Pixel",
    "DEFAULT_RESIZE_TYPE",
    # Decoders
    "DecoderRegistry",
    "register_decoder",
    "get_decoder_for_path",
    "parse_bmp",
    "parse_jpg",
    "parse_png",
    "check_turbojpeg_available",
    # Errors
    "PixelBufferError",
    "DimensionMismatch",
    "ImageIOError",
    "UnsupportedFormat",
    "InvalidPath",
    "DecodeError",
    "ResizeFailure",
]
