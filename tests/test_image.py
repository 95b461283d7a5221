"""Tests for Image construction, accessors and full-image drawing."""

import numpy as np
import pytest
from PIL import Image as PILImage

from pixbuf import Color, DimensionMismatch, Image, Renderer
from pixbuf.color import COLOR_DTYPE

RED = Color.rgb(255, 0, 0)
BLUE = Color.rgb(0, 0, 255)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class RecordingSurface:
    """Surface that records every image() call and keeps a pixel grid."""

    def __init__(self, width: int, height: int):
        self.w = width
        self.h = height
        self.grid = {}
        self.calls = []

    def image(self, x, y, w, h, pixels):
        pixels = list(pixels)
        self.calls.append((x, y, w, h, len(pixels)))
        for row in range(h):
            for col in range(w):
                self.grid[(x + col, y + row)] = int(pixels[row * w + col])


def _numbered_image(width: int, height: int) -> Image:
    """Image whose pixel i holds the word i (easy to check index-for-index)."""
    return Image.from_data(width, height, np.arange(width * height, dtype=COLOR_DTYPE))


# ---------------------------------------------------------------------------
# Tests: Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    """Every construction path keeps len(data) == width * height."""

    def test_new_is_opaque_black(self):
        img = Image.new(3, 2)
        assert img.width() == 3
        assert img.height() == 2
        assert len(img.data()) == 6
        assert all(Color(int(v)) == Color.rgb(0, 0, 0) for v in img.data())

    def test_new_zero_dimensions(self):
        """Zero dimensions give a valid, empty buffer."""
        for w, h in [(0, 0), (0, 5), (5, 0)]:
            img = Image.new(w, h)
            assert len(img.data()) == 0

    def test_default_is_empty(self):
        img = Image.default()
        assert (img.width(), img.height(), len(img.data())) == (0, 0, 0)

    def test_negative_dimensions(self):
        with pytest.raises(ValueError):
            Image.new(-1, 4)

    def test_from_color(self):
        """from_color fills all w*h entries with the color."""
        img = Image.from_color(4, 3, RED)
        assert len(img.data()) == 12
        assert all(int(v) == RED.data for v in img.data())

    def test_from_data_exact_length(self):
        img = Image.from_data(2, 2, [RED, RED, RED, RED])
        assert len(img.data()) == 4

    def test_from_data_too_short(self):
        with pytest.raises(DimensionMismatch):
            Image.from_data(2, 2, [RED, RED, RED])

    def test_from_data_too_long(self):
        with pytest.raises(DimensionMismatch):
            Image.from_data(2, 2, [RED] * 5)

    def test_dimension_mismatch_is_value_error(self):
        """DimensionMismatch can be caught as ValueError."""
        with pytest.raises(ValueError, match="got 3"):
            Image.from_data(2, 2, [RED] * 3)

    def test_from_data_adopts_array(self):
        """A matching uint32 array becomes the image's storage."""
        arr = np.zeros(4, dtype=COLOR_DTYPE)
        img = Image.from_data(2, 2, arr)
        assert np.shares_memory(img.data_mut(), arr)

    def test_from_data_copies_lists(self):
        pixels = [RED.data] * 4
        img = Image.from_data(2, 2, pixels)
        pixels[0] = BLUE.data
        assert int(img.data()[0]) == RED.data


# ---------------------------------------------------------------------------
# Tests: Accessors
# ---------------------------------------------------------------------------

class TestAccessors:
    """Tests for data / data_mut / sync / into_data."""

    def test_data_is_read_only(self):
        img = Image.new(2, 2)
        with pytest.raises(ValueError):
            img.data()[0] = RED.data

    def test_data_mut_writes_through(self):
        img = Image.new(2, 2)
        img.data_mut()[3] = RED.data
        assert img.get_pixel(1, 1) == RED

    def test_sync_succeeds(self):
        assert Image.new(1, 1).sync() is True

    def test_into_data(self):
        img = Image.from_color(2, 3, BLUE)
        data = img.into_data()
        assert len(data) == 6
        assert img.width() == 0 and len(img.data()) == 0

    def test_equality(self):
        assert Image.from_color(2, 2, RED) == Image.from_color(2, 2, RED)
        assert Image.from_color(2, 2, RED) != Image.from_color(2, 2, BLUE)
        assert Image.from_color(2, 2, RED) != Image.from_color(4, 1, RED)

    def test_pil_roundtrip(self):
        """to_pil / from_pil preserve dimensions and channels."""
        img = Image.from_data(2, 1, [Color.rgba(1, 2, 3, 4), Color.rgba(250, 251, 252, 253)])
        pil_img = img.to_pil()
        assert pil_img.mode == "RGBA"
        assert pil_img.size == (2, 1)
        assert pil_img.getpixel((1, 0)) == (250, 251, 252, 253)
        assert Image.from_pil(pil_img) == img

    def test_from_pil_converts_mode(self):
        pil_img = PILImage.new("RGB", (3, 2), (10, 20, 30))
        img = Image.from_pil(pil_img)
        assert img.get_pixel(2, 1) == Color.rgb(10, 20, 30)


# ---------------------------------------------------------------------------
# Tests: Drawing
# ---------------------------------------------------------------------------

class TestDraw:
    """Full-image blits onto a surface."""

    def test_draw_single_blit(self):
        """draw issues one image() call covering the whole buffer."""
        img = _numbered_image(4, 3)
        surface = RecordingSurface(10, 10)
        img.draw(surface, 2, 5)
        assert surface.calls == [(2, 5, 4, 3, 12)]

    def test_draw_index_for_index(self):
        """Pixel (col, row) lands at origin + (col, row), row advance == width."""
        img = _numbered_image(4, 3)
        surface = RecordingSurface(10, 10)
        img.draw(surface, 2, 5)
        assert len(surface.grid) == 12
        for row in range(3):
            for col in range(4):
                assert surface.grid[(2 + col, 5 + row)] == row * 4 + col

    def test_draw_onto_image(self):
        """An Image is itself a renderer."""
        canvas = Image.new(5, 5)
        Image.from_color(2, 2, RED).draw(canvas, 1, 2)
        assert canvas.get_pixel(1, 2) == RED
        assert canvas.get_pixel(2, 3) == RED
        assert canvas.get_pixel(0, 2) == Color.rgb(0, 0, 0)
        assert canvas.get_pixel(3, 3) == Color.rgb(0, 0, 0)

    def test_draw_clips_at_edges(self):
        canvas = Image.new(3, 3)
        Image.from_color(4, 4, BLUE).draw(canvas, -2, 1)
        expected = np.array([
            [0, 0, 0],
            [1, 1, 0],
            [1, 1, 0],
        ])
        got = (canvas.data().reshape(3, 3) == BLUE.data).astype(int)
        assert np.array_equal(got, expected)

    def test_draw_fully_outside(self):
        canvas = Image.new(3, 3)
        Image.from_color(2, 2, BLUE).draw(canvas, 10, 10)
        assert canvas == Image.new(3, 3)


class TestRendererHelpers:
    """Tests for the helpers the Renderer base provides."""

    def test_image_is_a_renderer(self):
        assert isinstance(Image.new(1, 1), Renderer)

    def test_pixel_and_get_pixel(self):
        img = Image.new(3, 3)
        img.pixel(2, 1, RED)
        img.pixel(7, 7, RED)  # ignored
        assert img.get_pixel(2, 1) == RED
        with pytest.raises(IndexError):
            img.get_pixel(3, 0)

    def test_set_fills(self):
        img = Image.new(2, 2)
        img.set(BLUE)
        assert img == Image.from_color(2, 2, BLUE)

    def test_image_rejects_short_pixels(self):
        with pytest.raises(ValueError):
            Image.new(4, 4).image(0, 0, 2, 2, [RED.data] * 3)
