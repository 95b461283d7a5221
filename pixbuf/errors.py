"""Exceptions raised by pixbuf.

Every error derives from ``PixelBufferError`` and from the builtin that best
describes it, so ``except ValueError`` style handlers keep working.
"""

from __future__ import annotations


class PixelBufferError(Exception):
    """Base class for all pixbuf errors."""


class DimensionMismatch(PixelBufferError, ValueError):
    """Pixel data length disagrees with width * height."""

    def __init__(self, width: int, height: int, length: int) -> None:
        self.width = width
        self.height = height
        self.length = length
        super().__init__(
            f"not enough or too much data given compared to width and height: "
            f"{width}x{height} needs {width * height} pixels, got {length}"
        )


class ImageIOError(PixelBufferError, OSError):
    """The image file could not be opened or fully read."""


class UnsupportedFormat(PixelBufferError, ValueError):
    """The path has no extension, or one no decoder is registered for."""


class InvalidPath(PixelBufferError, ValueError):
    """The path's extension cannot be represented as text."""


class DecodeError(PixelBufferError, ValueError):
    """A format decoder rejected the image bytes."""


class ResizeFailure(PixelBufferError, RuntimeError):
    """The resampling engine could not produce the requested output."""


__all__ = [
    "DecodeError",
    "DimensionMismatch",
    "ImageIOError",
    "InvalidPath",
    "PixelBufferError",
    "ResizeFailure",
    "UnsupportedFormat",
]
