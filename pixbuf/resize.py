"""Resampling engine used by ``Image.resize``.

The engine works on raw interleaved 8-bit channel buffers and knows nothing
about ``Image``: it is configured once with source and destination
dimensions, a channel layout and a filter, then ``resize(src, dst)`` writes
the resampled bytes into ``dst``. Pillow does the numeric work.

Usage:
    from pixbuf.resize import Pixel, Resizer, ResizeType

    resizer = Resizer(64, 48, 32, 24, Pixel.BGRA, ResizeType.TRIANGLE)
    resizer.resize(src_bytes, dst_bytes)   # dst_bytes: writable, 32*24*4 long
"""

from __future__ import annotations

import enum

import numpy as np
from PIL import Image as PILImage

# Channel order of each supported layout, as indices into R, G, B, A
_LAYOUT_TO_RGBA = {
    "RGBA": [0, 1, 2, 3],
    "BGRA": [2, 1, 0, 3],
}


class Pixel(enum.Enum):
    """Interleaved 4-channel layouts the engine accepts."""

    RGBA = "RGBA"
    BGRA = "BGRA"


class ResizeType(enum.Enum):
    """Resampling filters.

    Values are the matching ``PIL.Image.Resampling`` members.
    """

    POINT = PILImage.Resampling.NEAREST
    BOX = PILImage.Resampling.BOX
    TRIANGLE = PILImage.Resampling.BILINEAR
    HAMMING = PILImage.Resampling.HAMMING
    CATMULL = PILImage.Resampling.BICUBIC
    LANCZOS3 = PILImage.Resampling.LANCZOS

    # Aliases under the common names
    NEAREST = PILImage.Resampling.NEAREST
    BILINEAR = PILImage.Resampling.BILINEAR
    BICUBIC = PILImage.Resampling.BICUBIC
    LANCZOS = PILImage.Resampling.LANCZOS


DEFAULT_RESIZE_TYPE = ResizeType.LANCZOS3


class Resizer:
    """Resample 4-channel pixel buffers between two fixed sizes.

    Attributes:
        src_size: Source (width, height)
        dst_size: Destination (width, height)
        pixel: Channel layout of both buffers
        resize_type: Filter to resample with
    """

    def __init__(
        self,
        src_w: int,
        src_h: int,
        dst_w: int,
        dst_h: int,
        pixel: Pixel = Pixel.RGBA,
        resize_type: ResizeType = DEFAULT_RESIZE_TYPE,
    ) -> None:
        for name, value in (("src_w", src_w), ("src_h", src_h), ("dst_w", dst_w), ("dst_h", dst_h)):
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        self.src_size = (src_w, src_h)
        self.dst_size = (dst_w, dst_h)
        self.pixel = pixel
        self.resize_type = resize_type

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(src={self.src_size}, dst={self.dst_size}, "
            f"pixel={self.pixel.name}, resize_type={self.resize_type.name})"
        )

    def resize(self, src, dst) -> None:
        """Resample ``src`` into ``dst``.

        Args:
            src: Source bytes (bytes-like or uint8 array), ``src_w*src_h*4`` long
            dst: Writable uint8 array, ``dst_w*dst_h*4`` long

        Raises:
            ValueError: If a buffer has the wrong length, or the source is
                empty while the destination is not
        """
        (sw, sh), (dw, dh) = self.src_size, self.dst_size
        src = np.frombuffer(src, dtype=np.uint8) if not isinstance(src, np.ndarray) else src.reshape(-1)
        dst_flat = dst.reshape(-1)
        if src.size != sw * sh * 4:
            raise ValueError(f"source buffer has {src.size} bytes, {sw}x{sh} RGBA needs {sw * sh * 4}")
        if dst_flat.size != dw * dh * 4:
            raise ValueError(f"destination buffer has {dst_flat.size} bytes, {dw}x{dh} RGBA needs {dw * dh * 4}")

        if dw * dh == 0:
            return
        if sw * sh == 0:
            raise ValueError(f"cannot resample an empty {sw}x{sh} source to {dw}x{dh}")

        order = _LAYOUT_TO_RGBA[self.pixel.value]
        rgba = np.ascontiguousarray(src.reshape(sh, sw, 4)[..., order])
        pil_img = PILImage.fromarray(rgba)
        resized = pil_img.resize((dw, dh), self.resize_type.value)

        out = np.asarray(resized, dtype=np.uint8)
        # The RGBA <-> layout permutations are their own inverses
        dst_flat[:] = out[..., order].reshape(-1)


__all__ = ["DEFAULT_RESIZE_TYPE", "Pixel", "ResizeType", "Resizer"]
