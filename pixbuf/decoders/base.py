"""Extension-based decoder registry.

Maps a lower-cased file extension (without the dot) to a decode function
``bytes -> Image``. Lookup trusts the extension: no magic-byte sniffing.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Callable

from pixbuf.errors import InvalidPath, UnsupportedFormat

if TYPE_CHECKING:
    from pixbuf.image import Image

DecodeFn = Callable[[bytes], "Image"]


def path_extension(path: str | bytes | os.PathLike) -> str | None:
    """Return the lower-cased extension of ``path`` without the dot.

    Returns None if the final path component has no extension.

    Raises:
        InvalidPath: If the extension is not valid text
    """
    path = os.fspath(path)
    ext = os.path.splitext(path)[1]
    if not ext:
        return None
    if isinstance(ext, bytes):
        try:
            ext = ext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidPath(f"image extension not valid unicode: {ext!r}") from e
    else:
        try:
            ext.encode("utf-8")
        except UnicodeEncodeError as e:
            # Undecodable filename bytes surface as lone surrogates
            raise InvalidPath(f"image extension not valid unicode: {ext!r}") from e
    return ext[1:].lower()


class DecoderRegistry:
    """Registry of decode functions keyed by file extension.

    Example:
        registry = DecoderRegistry()
        registry.register("png", parse_png)
        decode = registry.lookup("photo.PNG")
        image = decode(raw_bytes)
    """

    def __init__(self) -> None:
        self._decoders: dict[str, DecodeFn] = {}

    def register(self, extension: str, decode: DecodeFn) -> None:
        """Register ``decode`` for ``extension`` (leading dot optional, any case)."""
        key = extension.lower().lstrip(".")
        if not key:
            raise ValueError("extension must not be empty")
        self._decoders[key] = decode

    def unregister(self, extension: str) -> None:
        self._decoders.pop(extension.lower().lstrip("."), None)

    def extensions(self) -> list[str]:
        return sorted(self._decoders)

    def __contains__(self, extension: str) -> bool:
        return extension.lower().lstrip(".") in self._decoders

    def lookup(self, path: str | bytes | os.PathLike) -> DecodeFn:
        """Return the decode function for ``path``'s extension.

        Raises:
            UnsupportedFormat: If the path has no extension or it is unknown
            InvalidPath: If the extension is not valid text
        """
        ext = path_extension(path)
        if ext is None:
            raise UnsupportedFormat(f"no image extension: {os.fsdecode(path)!r}")
        try:
            return self._decoders[ext]
        except KeyError:
            raise UnsupportedFormat(f"unknown image extension: {ext}") from None


__all__ = ["DecodeFn", "DecoderRegistry", "path_extension"]
