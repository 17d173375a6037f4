"""Compositor — lay glyphs out left to right on a scaled transparent canvas."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from tempfile import NamedTemporaryFile

from PIL import Image

from theme_thumb.core.datatypes import DecodedImage, Placement, Thumbnail
from theme_thumb.core.exceptions import ThumbnailWriteError

logger = logging.getLogger(__name__)

MAX_IMAGES = 9

# Nominal DPI of a 1x display, used to tag the PNG with its pixel ratio.
BASE_DPI = 96


def canvas_size(count: int, base_height: int, icon_size: int, padding: int, scale: float) -> tuple[int, int]:
    """Return the device pixel size of a canvas holding *count* glyphs.

    The width follows the content; the nominal canvas width plays no part.
    """
    width = int((icon_size * count + padding * (count - 1)) * scale)
    height = int(base_height * scale)
    return width, height


def _draw(canvas: Image.Image, glyph: Image.Image, x: int, y: int) -> None:
    """Alpha-composite *glyph* over *canvas* at (*x*, *y*), clipped to the canvas."""
    left, top = max(x, 0), max(y, 0)
    right = min(x + glyph.width, canvas.width)
    bottom = min(y + glyph.height, canvas.height)
    if right <= left or bottom <= top:
        return
    canvas.alpha_composite(glyph, dest=(left, top), source=(left - x, top - y, right - x, bottom - y))


def composite(
    images: Sequence[DecodedImage],
    base_width: int,
    base_height: int,
    icon_size: int,
    padding: int,
    scale: float,
) -> Thumbnail | None:
    """Composite up to ``MAX_IMAGES`` glyphs into one thumbnail.

    Sizes are given in logical pixels and converted with *scale*.  Glyphs
    are vertically centered and advance by the device-pixel icon size plus
    the device-pixel padding, each truncated separately, so glyph positions
    drift slightly from ``(icon_size + padding) * scale`` at fractional
    scales.

    Args:
        images: Selected glyphs in display order; extras beyond
            ``MAX_IMAGES`` are dropped.
        base_width: Nominal logical canvas width.  Unused; the width is
            derived from the glyph count.
        base_height: Logical canvas height.
        icon_size: Logical size of one glyph slot.
        padding: Logical gap between glyph slots.
        scale: Display scale factor.

    Returns:
        The thumbnail, or ``None`` when *images* is empty.
    """
    del base_width
    glyphs = list(images[:MAX_IMAGES])
    if not glyphs:
        return None

    count = len(glyphs)
    width, height = canvas_size(count, base_height, icon_size, padding, scale)
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    space_w = int(width - icon_size * count * scale)
    x = int((space_w - (count - 1) * padding * scale) / 2)
    y = int((height - icon_size * scale) / 2)
    step = int(icon_size * scale) + int(padding * scale)

    placements: list[Placement] = []
    for glyph in glyphs:
        _draw(canvas, glyph.to_image(), x, y)
        placements.append(Placement(source=glyph.source, x=x, y=y, width=glyph.width, height=glyph.height))
        x += step

    logger.debug("Composited %d glyphs into %dx%d canvas (scale %s)", count, width, height, scale)
    return Thumbnail(image=canvas, device_pixel_ratio=scale, placements=tuple(placements))


def save_png(thumbnail: Thumbnail, path: Path) -> Path:
    """Write *thumbnail* to *path* as PNG, atomically.

    The image is encoded into a temporary file next to *path* and renamed
    over it, so readers never see a partially written thumbnail.

    Args:
        thumbnail: The composited thumbnail.
        path: Destination cache file.

    Returns:
        *path*.

    Raises:
        ThumbnailWriteError: If encoding or writing fails.
    """
    dpi = round(BASE_DPI * thumbnail.device_pixel_ratio)
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(mode="wb", dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp", delete=False) as fh:
            tmp_path = Path(fh.name)
            thumbnail.image.save(fh, format="PNG", dpi=(dpi, dpi))
        os.replace(tmp_path, path)
    except (OSError, ValueError) as exc:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        msg = f"Failed to save thumbnail to '{path}'"
        raise ThumbnailWriteError(msg) from exc

    return path
