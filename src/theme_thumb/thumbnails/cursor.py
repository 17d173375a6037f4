"""CursorThumbnailer — preview of a cursor theme's most common roles."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from theme_thumb.core.datatypes import AssetKind, DecodedImage
from theme_thumb.loaders.cursor import load_cursor_bitmap
from theme_thumb.thumbnails.base import BaseThumbnailer
from theme_thumb.thumbnails.groups import CURSOR_GROUPS
from theme_thumb.thumbnails.selector import Loader


def theme_dir(source: Path) -> Path:
    """Return the cursor theme directory for a theme dir or its description file."""
    return source.parent if source.is_file() else source


class CursorThumbnailer(BaseThumbnailer):
    """Composite one glyph per cursor role from ``<theme>/cursors/<name>``."""

    kind = AssetKind.CURSOR

    def candidate_groups(self) -> Sequence[Sequence[str]]:
        """Return the cursor role groups."""
        return CURSOR_GROUPS

    def make_loader(self, asset_id: str, source: Path) -> Loader:
        """Return a loader reading Xcursor files from the theme's ``cursors`` dir."""
        cursors_dir = theme_dir(source) / "cursors"

        def load(name: str, size: int) -> DecodedImage | None:
            return load_cursor_bitmap(cursors_dir / name, size)

        return load

    def staleness_source(self, source: Path) -> Path:
        """Track the whole theme directory."""
        return theme_dir(source)
