"""JPEG decoder using PyTurboJPEG, with Pillow as the fallback.

TurboJPEG is used when libturbojpeg can be loaded; otherwise, or when it
rejects a file, Pillow decodes it instead.

Usage:
    from pixbuf.decoders.jpeg import parse

    image = parse(jpeg_bytes)
    image = parse(jpeg_bytes, prefer_turbojpeg=False)   # Pillow only
"""

from __future__ import annotations

import threading
import warnings
from functools import lru_cache

import numpy as np

from pixbuf.color import pack_rgba
from pixbuf.decoders.pillow import decode_with_pillow
from pixbuf.image import Image

# Thread-local storage for TurboJPEG instances
_thread_local = threading.local()


def _get_thread_local_jpeg():
    """Get or create the TurboJPEG handle for the current thread.

    Handles are created lazily on first use.
    """
    if not hasattr(_thread_local, "jpeg"):
        from turbojpeg import TurboJPEG
        _thread_local.jpeg = TurboJPEG()
    return _thread_local.jpeg


@lru_cache(maxsize=None)
def check_turbojpeg_available() -> bool:
    """Check if TurboJPEG is available.

    PyTurboJPEG imports fine without the native library, so this tries to
    open a handle. The result is cached for the life of the process.

    Returns:
        True if TurboJPEG can be initialized
    """
    try:
        _get_thread_local_jpeg()
        return True
    except Exception:
        return False


def _decode_turbojpeg(data: bytes) -> Image:
    from turbojpeg import TJPF_RGBA

    jpeg = _get_thread_local_jpeg()
    rgba = jpeg.decode(data, pixel_format=TJPF_RGBA)
    height, width = rgba.shape[:2]
    return Image.from_data(width, height, pack_rgba(np.asarray(rgba, dtype=np.uint8)).reshape(-1))


def parse(data: bytes, prefer_turbojpeg: bool = True) -> Image:
    """Decode JPEG file bytes into an image.

    Args:
        data: Raw JPEG bytes
        prefer_turbojpeg: Try TurboJPEG first when it is available

    Raises:
        DecodeError: If the bytes are not a readable JPEG
    """
    if prefer_turbojpeg and check_turbojpeg_available():
        try:
            return _decode_turbojpeg(data)
        except Exception as e:
            warnings.warn(f"TurboJPEG decode failed, falling back to Pillow: {e}")
    return decode_with_pillow(data, "JPEG")


__all__ = ["check_turbojpeg_available", "parse"]
