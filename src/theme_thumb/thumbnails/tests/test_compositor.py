"""Tests for the compositor and the PNG writer."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from theme_thumb.core.datatypes import DecodedImage, Thumbnail
from theme_thumb.core.exceptions import ThumbnailWriteError
from theme_thumb.thumbnails.compositor import MAX_IMAGES, canvas_size, composite, save_png

_Pixel = tuple[int, ...]


def _px(img: Image.Image, xy: tuple[int, int]) -> _Pixel:
    """Return the pixel value at *xy* as a typed tuple."""
    val = img.getpixel(xy)
    assert isinstance(val, tuple)
    return val


def _glyph(index: int, size: int = 24) -> DecodedImage:
    colour = bytes([index * 20 % 256, 100, 200, 255])
    return DecodedImage(width=size, height=size, pixels=colour * (size * size), source=f"g{index}")


class TestCanvasSize:
    """Tests for canvas dimensions."""

    @pytest.mark.parametrize("count", [1, 5, 9])
    @pytest.mark.parametrize("scale", [1.0, 2.0])
    def test_width_follows_content(self, count: int, scale: float) -> None:
        """Width is ``(icon*n + padding*(n-1)) * scale``."""
        glyphs = [_glyph(i, int(24 * scale)) for i in range(count)]

        thumb = composite(glyphs, 220, 36, 24, 7, scale)

        assert thumb is not None
        assert thumb.image.width == int((24 * count + 7 * (count - 1)) * scale)
        assert thumb.image.height == int(36 * scale)

    def test_canvas_size_helper(self) -> None:
        """``canvas_size`` matches the cursor example of two glyphs."""
        assert canvas_size(2, 36, 24, 7, 1.0) == (55, 36)
        assert canvas_size(5, 36, 36, 10, 1.5) == (330, 54)


class TestComposite:
    """Tests for ``composite``."""

    def test_empty_input_returns_none(self) -> None:
        """No glyphs means no thumbnail."""
        assert composite([], 220, 36, 24, 7, 1.0) is None

    def test_truncates_to_max_images(self) -> None:
        """Only the first nine glyphs are drawn."""
        glyphs = [_glyph(i) for i in range(12)]

        thumb = composite(glyphs, 220, 36, 24, 7, 1.0)

        assert thumb is not None
        assert thumb.count == MAX_IMAGES
        assert [p.source for p in thumb.placements] == [f"g{i}" for i in range(9)]
        assert thumb.image.width == 24 * 9 + 7 * 8

    def test_layout_at_scale_one(self) -> None:
        """Glyphs start at x=0, advance by icon+padding and are centered vertically."""
        thumb = composite([_glyph(1), _glyph(2)], 220, 36, 24, 7, 1.0)

        assert thumb is not None
        assert [(p.x, p.y) for p in thumb.placements] == [(0, 6), (31, 6)]
        assert _px(thumb.image, (0, 0))[3] == 0
        assert _px(thumb.image, (12, 18)) == (20, 100, 200, 255)
        assert _px(thumb.image, (27, 18))[3] == 0
        assert _px(thumb.image, (40, 18)) == (40, 100, 200, 255)

    def test_layout_at_scale_two(self) -> None:
        """At 2x the step is the device-pixel icon size plus padding."""
        thumb = composite([_glyph(1, 48), _glyph(2, 48)], 220, 36, 24, 7, 2.0)

        assert thumb is not None
        assert thumb.image.size == (110, 72)
        assert [(p.x, p.y) for p in thumb.placements] == [(0, 12), (62, 12)]
        assert thumb.device_pixel_ratio == 2.0

    def test_fractional_scale_truncates_step(self) -> None:
        """At 1.25x icon and padding are truncated separately before adding."""
        thumb = composite([_glyph(1, 30), _glyph(2, 30), _glyph(3, 30)], 220, 36, 24, 7, 1.25)

        assert thumb is not None
        assert [p.x for p in thumb.placements] == [0, 38, 76]

    def test_source_over_keeps_transparency(self) -> None:
        """Transparent glyph pixels leave the canvas transparent."""
        clear = DecodedImage(width=24, height=24, pixels=bytes(24 * 24 * 4))

        thumb = composite([clear], 220, 36, 24, 7, 1.0)

        assert thumb is not None
        assert _px(thumb.image, (12, 18)) == (0, 0, 0, 0)

    def test_oversized_glyph_is_clipped(self) -> None:
        """A glyph larger than its slot is clipped to the canvas, not rejected."""
        thumb = composite([_glyph(1, 48)], 220, 36, 24, 7, 1.0)

        assert thumb is not None
        assert thumb.image.size == (24, 36)
        assert _px(thumb.image, (23, 35))[3] == 255


class TestSavePng:
    """Tests for ``save_png``."""

    def test_writes_png_and_no_temp_files(self, tmp_path: Path) -> None:
        """The thumbnail is written as PNG with nothing left behind."""
        thumb = composite([_glyph(1)], 220, 36, 24, 7, 1.0)
        assert thumb is not None
        out = tmp_path / "t.png"

        save_png(thumb, out)

        with Image.open(out) as img:
            assert img.format == "PNG"
            assert img.size == (24, 36)
        assert [p.name for p in tmp_path.iterdir()] == ["t.png"]

    def test_tags_pixel_ratio_as_dpi(self, tmp_path: Path) -> None:
        """The PNG carries ``96 * ratio`` DPI."""
        thumb = composite([_glyph(1, 48)], 220, 36, 24, 7, 2.0)
        assert thumb is not None
        out = save_png(thumb, tmp_path / "t.png")

        with Image.open(out) as img:
            assert round(img.info["dpi"][0]) == 192

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """An unwritable destination raises ``ThumbnailWriteError``."""
        thumb = composite([_glyph(1)], 220, 36, 24, 7, 1.0)
        assert thumb is not None
        with pytest.raises(ThumbnailWriteError, match="Failed to save thumbnail"):
            save_png(thumb, tmp_path / "missing" / "t.png")

    def test_encode_failure_cleans_up(self, tmp_path: Path) -> None:
        """A failing encoder leaves neither the target nor a temp file."""
        thumb = Thumbnail(image=Image.new("RGBA", (4, 4)), device_pixel_ratio=1.0, placements=())

        with (
            patch.object(Image.Image, "save", side_effect=OSError("disk full")),
            pytest.raises(ThumbnailWriteError),
        ):
            save_png(thumb, tmp_path / "t.png")

        assert list(tmp_path.iterdir()) == []
