"""Base class for rendering surfaces.

``Image.draw`` and ``ImageRoi.draw`` only ever call ``image(x, y, w, h,
pixels)`` on their target, so any object with that method works as a
surface. This ABC supplies ``image`` (and a few pixel helpers) on top of the
five primitives a surface must provide: ``width``, ``height``, ``data``,
``data_mut`` and ``sync``. ``Image`` itself derives from it, which is what
lets one image be drawn onto another.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from pixbuf.color import Color, as_color_array

if TYPE_CHECKING:
    from numpy.typing import NDArray


class Renderer(ABC):
    """A surface backed by a flat, row-major array of packed colors."""

    @abstractmethod
    def width(self) -> int:
        ...

    @abstractmethod
    def height(self) -> int:
        ...

    @abstractmethod
    def data(self) -> NDArray[np.uint32]:
        """Read-only view of the backing colors."""

    @abstractmethod
    def data_mut(self) -> NDArray[np.uint32]:
        """Writable view of the backing colors."""

    @abstractmethod
    def sync(self) -> bool:
        """Flush pending output to the device. Returns True on success."""

    def image(self, x: int, y: int, w: int, h: int, pixels) -> None:
        """Copy a ``w`` x ``h`` block of colors with its top-left at (x, y).

        ``pixels`` is row-major with a row length of ``w``; only its first
        ``w * h`` entries are used. Parts of the block that fall outside the
        surface are clipped.
        """
        if w <= 0 or h <= 0:
            return
        src = as_color_array(pixels)
        if src.size < w * h:
            raise ValueError(f"{w}x{h} block needs {w * h} pixels, got {src.size}")
        src = src[: w * h].reshape(h, w)

        sw, sh = self.width(), self.height()
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, sw), min(y + h, sh)
        if x0 >= x1 or y0 >= y1:
            return

        dst = self.data_mut().reshape(sh, sw)
        dst[y0:y1, x0:x1] = src[y0 - y:y1 - y, x0 - x:x1 - x]

    def pixel(self, x: int, y: int, color: Color) -> None:
        """Set a single pixel; coordinates outside the surface are ignored."""
        w, h = self.width(), self.height()
        if 0 <= x < w and 0 <= y < h:
            self.data_mut()[y * w + x] = int(color)

    def get_pixel(self, x: int, y: int) -> Color:
        """Return the color at (x, y).

        Raises:
            IndexError: If (x, y) is outside the surface
        """
        w, h = self.width(), self.height()
        if not (0 <= x < w and 0 <= y < h):
            raise IndexError(f"pixel ({x}, {y}) outside {w}x{h} surface")
        return Color(int(self.data()[y * w + x]))

    def set(self, color: Color) -> None:
        """Fill the whole surface with one color."""
        self.data_mut()[:] = int(color)


__all__ = ["Renderer"]
