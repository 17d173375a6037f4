"""Cursor asset loader — Xcursor file to RGBA ``DecodedImage``."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from theme_thumb.core.datatypes import DecodedImage
from theme_thumb.core.exceptions import DecodeError
from theme_thumb.loaders._xcursor import load_xcursor

logger = logging.getLogger(__name__)


def argb_to_rgba(pixels: bytes, width: int, height: int) -> bytes:
    """Unpack little-endian 32-bit ARGB words into RGBA bytes.

    Alpha lives in bits 24-31, red in 16-23, green in 8-15 and blue in 0-7.

    Args:
        pixels: ``width * height`` packed ARGB words.
        width: Bitmap width in pixels.
        height: Bitmap height in pixels.

    Returns:
        Row-major RGBA bytes of the same bitmap.
    """
    words = np.frombuffer(pixels, dtype="<u4", count=width * height)
    rgba = np.empty((words.size, 4), dtype=np.uint8)
    rgba[:, 0] = (words >> 16) & 0xFF
    rgba[:, 1] = (words >> 8) & 0xFF
    rgba[:, 2] = words & 0xFF
    rgba[:, 3] = words >> 24
    return rgba.tobytes()


def load_cursor_bitmap(path: Path, size: int) -> DecodedImage | None:
    """Decode the cursor file at *path* for a nominal *size*.

    The bitmap returned may differ slightly from *size*; layout code must use
    its own ``width``/``height``.

    Args:
        path: Cursor file inside a theme's ``cursors`` directory.
        size: Requested nominal size in device pixels.

    Returns:
        The decoded image, or ``None`` if the file is missing or unreadable.
    """
    try:
        cursor = load_xcursor(path, size)
    except DecodeError as exc:
        logger.debug("No cursor at %s: %s", path, exc)
        return None

    return DecodedImage(
        width=cursor.width,
        height=cursor.height,
        pixels=argb_to_rgba(cursor.pixels, cursor.width, cursor.height),
        source=path.name,
    )
