"""Packed 32-bit colors and the helpers that move them in and out of numpy.

A pixel is a single 32-bit word ``0xAARRGGBB``. Buffers store these words in a
little-endian numpy array (``COLOR_DTYPE``), which fixes the in-memory byte
order to B, G, R, A on every host. The byte layout is never reached through
a raw memory view: ``pack_rgba`` / ``unpack_rgba`` move between words and
channels explicitly, so resampling and decoding code only ever sees plain
``uint8`` channel arrays.

Usage:
    from pixbuf.color import Color, as_color_array

    red = Color.rgb(255, 0, 0)
    translucent = Color.rgba(0, 0, 255, 128)
    words = as_color_array([red, translucent])   # uint32 array, len 2
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

# One pixel: a little-endian 32-bit word, bytes B, G, R, A
COLOR_DTYPE = np.dtype("<u4")

# Bytes per packed pixel
BYTES_PER_PIXEL = 4

_CHANNEL_MAX = 0xFF
_WORD_MAX = 0xFFFFFFFF


def _check_channel(name: str, value: int) -> int:
    value = int(value)
    if not 0 <= value <= _CHANNEL_MAX:
        raise ValueError(f"{name} channel must be in 0..255, got {value}")
    return value


@dataclass(frozen=True)
class Color:
    """A packed 4-channel color.

    Attributes:
        data: The packed word, ``0xAARRGGBB``.
    """

    data: int

    def __post_init__(self) -> None:
        if not 0 <= int(self.data) <= _WORD_MAX:
            raise ValueError(f"packed color must fit in 32 bits, got {self.data:#x}")
        object.__setattr__(self, "data", int(self.data))

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> Color:
        """Opaque color from red, green and blue channels."""
        return cls.rgba(r, g, b, _CHANNEL_MAX)

    @classmethod
    def rgba(cls, r: int, g: int, b: int, a: int) -> Color:
        """Color from red, green, blue and alpha channels."""
        r = _check_channel("red", r)
        g = _check_channel("green", g)
        b = _check_channel("blue", b)
        a = _check_channel("alpha", a)
        return cls((a << 24) | (r << 16) | (g << 8) | b)

    @property
    def r(self) -> int:
        return (self.data >> 16) & _CHANNEL_MAX

    @property
    def g(self) -> int:
        return (self.data >> 8) & _CHANNEL_MAX

    @property
    def b(self) -> int:
        return self.data & _CHANNEL_MAX

    @property
    def a(self) -> int:
        return (self.data >> 24) & _CHANNEL_MAX

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Return as (r, g, b, a) tuple."""
        return (self.r, self.g, self.b, self.a)

    def __int__(self) -> int:
        return self.data

    def __index__(self) -> int:
        return self.data

    def __repr__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b}, a={self.a})"


BLACK = Color.rgb(0, 0, 0)
WHITE = Color.rgb(255, 255, 255)
TRANSPARENT = Color(0)


def pack_rgba(channels: NDArray[np.uint8]) -> NDArray[np.uint32]:
    """Pack an ``[..., 4]`` array of R, G, B, A channels into color words.

    Args:
        channels: uint8 array whose last axis holds (r, g, b, a)

    Returns:
        ``COLOR_DTYPE`` array with the leading shape of ``channels``
    """
    channels = np.asarray(channels)
    if channels.shape[-1:] != (BYTES_PER_PIXEL,):
        raise ValueError(f"expected a trailing axis of 4 channels, got shape {channels.shape}")
    c = channels.astype(COLOR_DTYPE, copy=False)
    words = (c[..., 3] << 24) | (c[..., 0] << 16) | (c[..., 1] << 8) | c[..., 2]
    return words.astype(COLOR_DTYPE, copy=False)


def unpack_rgba(words: NDArray[np.uint32]) -> NDArray[np.uint8]:
    """Split color words into an ``[..., 4]`` uint8 array of R, G, B, A."""
    words = np.asarray(words, dtype=COLOR_DTYPE)
    out = np.empty(words.shape + (BYTES_PER_PIXEL,), dtype=np.uint8)
    out[..., 0] = (words >> 16) & _CHANNEL_MAX
    out[..., 1] = (words >> 8) & _CHANNEL_MAX
    out[..., 2] = words & _CHANNEL_MAX
    out[..., 3] = (words >> 24) & _CHANNEL_MAX
    return out


def as_color_array(data: Iterable[Color | int] | np.ndarray) -> NDArray[np.uint32]:
    """Convert caller pixel data to a contiguous 1-D ``COLOR_DTYPE`` array.

    A numpy array that already has the right dtype and is contiguous is
    returned as-is (flattened view), so the caller hands over its storage.
    Anything else is copied.
    """
    if isinstance(data, np.ndarray):
        if data.dtype != COLOR_DTYPE:
            if data.dtype.kind not in "ui":
                raise TypeError(f"pixel data must be an integer array, got dtype {data.dtype}")
            data = data.astype(COLOR_DTYPE)
        return np.ascontiguousarray(data).reshape(-1)
    return np.fromiter((int(c) for c in data), dtype=COLOR_DTYPE)


__all__ = [
    "BLACK",
    "BYTES_PER_PIXEL",
    "COLOR_DTYPE",
    "Color",
    "TRANSPARENT",
    "WHITE",
    "as_color_array",
    "pack_rgba",
    "unpack_rgba",
]
