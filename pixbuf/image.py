"""In-memory pixel buffers.

``Image`` owns a flat, row-major array of packed colors (see
``pixbuf.color``) whose length always equals ``width * height``. Images can be
built from a solid color, from caller data, or decoded from a file, and can
be resized, cut into regions of interest and drawn onto any ``Renderer``.

Usage:
    from pixbuf import Color, Image, ResizeType

    img = Image.from_path("icon.png")
    thumb = img.resize(32, 32, ResizeType.TRIANGLE)

    canvas = Image.from_color(640, 480, Color.rgb(255, 255, 255))
    thumb.draw(canvas, 10, 10)
    img.roi(0, 0, 16, 16).draw(canvas, 100, 10)   # top-left corner only
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterable

import numpy as np
from PIL import Image as PILImage

from pixbuf.color import (
    BLACK,
    BYTES_PER_PIXEL,
    COLOR_DTYPE,
    Color,
    as_color_array,
    pack_rgba,
    unpack_rgba,
)
from pixbuf.errors import DecodeError, DimensionMismatch, ImageIOError, ResizeFailure
from pixbuf.renderer import Renderer
from pixbuf.resize import DEFAULT_RESIZE_TYPE, Pixel, Resizer, ResizeType

if TYPE_CHECKING:
    from numpy.typing import NDArray


def _check_dimensions(width: int, height: int) -> tuple[int, int]:
    width, height = int(width), int(height)
    if width < 0 or height < 0:
        raise ValueError(f"image dimensions must be non-negative, got {width}x{height}")
    return width, height


class ImageRoi:
    """A clamped rectangular window into an ``Image``.

    Built by ``Image.roi``. The region always lies inside the source, and
    borrows rather than copies its pixels: draw it straight away and do not
    keep it around while the source changes. Use ``to_image`` for a copy
    that outlives the source.

    Attributes:
        x: Left edge within the source
        y: Top edge within the source
        w: Region width
        h: Region height
    """

    __slots__ = ("x", "y", "w", "h", "_image")

    def __init__(self, image: Image, x: int, y: int, w: int, h: int) -> None:
        self._image = image
        self.x = x
        self.y = y
        self.w = w
        self.h = h

    @property
    def image(self) -> Image:
        """The source image."""
        return self._image

    def __iter__(self):
        """Allow unpacking: x, y, w, h = roi."""
        return iter((self.x, self.y, self.w, self.h))

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Return as (x, y, w, h) tuple."""
        return (self.x, self.y, self.w, self.h)

    def __repr__(self) -> str:
        return f"ImageRoi(x={self.x}, y={self.y}, w={self.w}, h={self.h})"

    def draw(self, renderer, x: int, y: int) -> None:
        """Draw the region with its top-left corner at (x, y).

        Each source row is blitted separately: ``w`` pixels starting at the
        row's offset in the source, after which the offset advances by the
        source's full width.
        """
        data = self._image.data()
        stride = self._image.width()
        offset = self.y * stride + self.x
        last_offset = min((self.y + self.h) * stride + self.x, len(data))
        while offset < last_offset:
            renderer.image(x, y, self.w, 1, data[offset:offset + self.w])
            offset += stride
            y += 1

    def to_image(self) -> Image:
        """Copy the region's pixels into a new, independent image."""
        src = self._image.data().reshape(self._image.height(), self._image.width())
        block = src[self.y:self.y + self.h, self.x:self.x + self.w]
        return Image.from_data(self.w, self.h, block.copy())


class Image(Renderer):
    """A decoded raster image: ``width * height`` packed colors, row-major.

    Construct with ``Image.new``, ``Image.from_color``, ``Image.from_data``
    or ``Image.from_path`` rather than calling the class directly.
    """

    def __init__(self, width: int, height: int, data: Iterable[Color | int] | np.ndarray) -> None:
        width, height = _check_dimensions(width, height)
        data = as_color_array(data)
        if data.size != width * height:
            raise DimensionMismatch(width, height, data.size)
        self._w = width
        self._h = height
        self._data = data

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def new(cls, width: int, height: int) -> Image:
        """Create an image filled with opaque black."""
        return cls.from_color(width, height, BLACK)

    @classmethod
    def default(cls) -> Image:
        """Create an empty 0x0 image."""
        return cls.new(0, 0)

    @classmethod
    def from_color(cls, width: int, height: int, color: Color) -> Image:
        """Create an image with every pixel set to ``color``."""
        width, height = _check_dimensions(width, height)
        return cls(width, height, np.full(width * height, int(color), dtype=COLOR_DTYPE))

    @classmethod
    def from_data(cls, width: int, height: int, data: Iterable[Color | int] | np.ndarray) -> Image:
        """Create an image that takes ownership of ``data``.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            data: Packed colors, row-major. A contiguous ``COLOR_DTYPE`` numpy
                array is adopted without copying; do not keep using it.

        Raises:
            DimensionMismatch: If ``len(data) != width * height``
        """
        return cls(width, height, data)

    @classmethod
    def from_path(cls, path: str | bytes | os.PathLike) -> Image:
        """Load an image from a BMP, JPEG or PNG file.

        The format is chosen from the file extension (case-insensitive)
        before the file is read.

        Raises:
            UnsupportedFormat: If the extension is missing or unknown
            InvalidPath: If the extension is not valid text
            ImageIOError: If the file cannot be opened or read
            DecodeError: If the decoder rejects the file contents
        """
        from pixbuf.decoders import get_decoder_for_path

        decode = get_decoder_for_path(path)
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise ImageIOError(f"failed to read image {os.fsdecode(path)!r}: {e}") from e
        try:
            return decode(raw)
        except DecodeError as e:
            raise DecodeError(f"{os.fsdecode(path)}: {e}") from e

    @classmethod
    def from_pil(cls, pil_image: PILImage.Image) -> Image:
        """Create an image from a Pillow image (converted to RGBA)."""
        if pil_image.mode != "RGBA":
            pil_image = pil_image.convert("RGBA")
        width, height = pil_image.size
        if width * height == 0:
            return cls.new(width, height)
        return cls(width, height, pack_rgba(np.asarray(pil_image, dtype=np.uint8)).reshape(-1))

    def to_pil(self) -> PILImage.Image:
        """Return an RGBA Pillow image with a copy of the pixels."""
        rgba = unpack_rgba(self._data).reshape(self._h, self._w, BYTES_PER_PIXEL)
        return PILImage.frombytes("RGBA", (self._w, self._h), rgba.tobytes())

    # =========================================================================
    # Renderer interface
    # =========================================================================

    def width(self) -> int:
        return self._w

    def height(self) -> int:
        return self._h

    def data(self) -> NDArray[np.uint32]:
        view = self._data.view()
        view.flags.writeable = False
        return view

    def data_mut(self) -> NDArray[np.uint32]:
        return self._data

    def sync(self) -> bool:
        # Nothing to flush for an in-memory buffer
        return True

    # =========================================================================
    # Operations
    # =========================================================================

    def into_data(self) -> NDArray[np.uint32]:
        """Hand the backing array to the caller. The image must not be used afterwards."""
        data = self._data
        self._w = self._h = 0
        self._data = np.empty(0, dtype=COLOR_DTYPE)
        return data

    def resize(self, width: int, height: int, resize_type: ResizeType = DEFAULT_RESIZE_TYPE) -> Image:
        """Return a resampled copy of the image.

        Raises:
            ResizeFailure: If the resampler cannot produce the output, for
                example when resizing an empty image to a non-empty size
        """
        width, height = _check_dimensions(width, height)
        dst_color = np.zeros(width * height, dtype=COLOR_DTYPE)

        src = unpack_rgba(self._data)[..., [2, 1, 0, 3]].reshape(-1)
        dst = unpack_rgba(dst_color)[..., [2, 1, 0, 3]].reshape(-1)

        resizer = Resizer(self._w, self._h, width, height, Pixel.BGRA, resize_type)
        try:
            resizer.resize(src, dst)
        except (ValueError, OSError) as e:
            raise ResizeFailure(
                f"failed to resize {self._w}x{self._h} image to {width}x{height} "
                f"({resize_type.name}): {e}"
            ) from e

        bgra = dst.reshape(-1, BYTES_PER_PIXEL)
        dst_color = pack_rgba(bgra[:, [2, 1, 0, 3]])
        return Image.from_data(width, height, dst_color)

    def roi(self, x: int, y: int, w: int, h: int) -> ImageRoi:
        """Get a piece of the image, clamped to its bounds.

        Requests that reach past the edges are truncated, possibly to an
        empty region; this never fails.
        """
        x, y, w, h = (max(int(v), 0) for v in (x, y, w, h))
        x1 = min(x, self._w)
        y1 = min(y, self._h)
        x2 = max(x1, min(x + w, self._w))
        y2 = max(y1, min(y + h, self._h))
        return ImageRoi(self, x1, y1, x2 - x1, y2 - y1)

    def draw(self, renderer, x: int, y: int) -> None:
        """Draw the whole image with its top-left corner at (x, y)."""
        renderer.image(x, y, self._w, self._h, self.data())

    # =========================================================================
    # Dunder
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (
            self._w == other._w
            and self._h == other._h
            and np.array_equal(self._data, other._data)
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(width={self._w}, height={self._h})"


__all__ = ["Image", "ImageRoi"]
