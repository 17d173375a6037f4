"""BaseThumbnailer ABC — the generation skeleton every thumbnail kind follows."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from theme_thumb.cache.paths import resolve_path
from theme_thumb.cache.staleness import should_regenerate
from theme_thumb.core.datatypes import CANVAS_HEIGHT, CANVAS_WIDTH, AssetKind, DecodedImage
from theme_thumb.core.events import CACHE_HIT, GENERATED, EventBus
from theme_thumb.core.exceptions import NoImagesError
from theme_thumb.thumbnails.compositor import composite, save_png
from theme_thumb.thumbnails.selector import Loader, select_images

logger = logging.getLogger(__name__)


class BaseThumbnailer(ABC):
    """Template Method base for cursor and icon thumbnails.

    ``generate()`` resolves the cache path, reuses a fresh cache file,
    and otherwise selects glyphs, composites them and writes the PNG.
    Subclasses supply the candidate groups, the loader and the path whose
    modification time invalidates the cache.

    Args:
        cache_root: Root of the thumbnail cache tree.
        event_bus: Bus receiving ``cache_hit`` and ``generated`` events.
    """

    kind: AssetKind

    def __init__(self, cache_root: Path, event_bus: EventBus | None = None) -> None:
        """Initialise the thumbnailer."""
        self.cache_root = cache_root
        self.event_bus = event_bus or EventBus()

    # ── kind specifics (override in subclass) ──────────────────
    @abstractmethod
    def candidate_groups(self) -> Sequence[Sequence[str]]:
        """Return the candidate groups, one per thumbnail slot."""
        ...

    @abstractmethod
    def make_loader(self, asset_id: str, source: Path) -> Loader:
        """Return a loader resolving candidate names for this theme."""
        ...

    def staleness_source(self, source: Path) -> Path:
        """Return the path whose mtime invalidates the cache entry."""
        return source

    # ── lifecycle ──────────────────────────────────────────────
    def cache_path(self, asset_id: str, scale: float) -> Path:
        """Return (and create the directory of) the cache file for *asset_id*."""
        spec = self.kind.spec
        return resolve_path(self.cache_root, spec.dir_name, asset_id, spec.version, scale)

    def generate(self, asset_id: str, source: Path, scale: float) -> Path:
        """Return a fresh thumbnail for *asset_id*, generating it if needed.

        Args:
            asset_id: Theme id, used as the cache file stem.
            source: Theme directory or description file.
            scale: Scale factor snapshot used for both path and pixels.

        Returns:
            Path of the cached PNG.

        Raises:
            ValidationError: If *asset_id* is not a valid file stem.
            CacheDirError: If the cache directory cannot be created.
            NoImagesError: If no candidate glyph could be loaded.
            ThumbnailWriteError: If the PNG cannot be written.
        """
        out = self.cache_path(asset_id, scale)
        if not should_regenerate(self.staleness_source(source), out):
            logger.debug("Reusing cached %s thumbnail %s", self.kind, out)
            self.event_bus.emit(CACHE_HIT, kind=str(self.kind), asset_id=asset_id, path=out)
            return out

        images = self.select(asset_id, source, scale)
        spec = self.kind.spec
        thumbnail = composite(images, CANVAS_WIDTH, CANVAS_HEIGHT, spec.icon_size, spec.padding, scale)
        if thumbnail is None:
            msg = f"No {self.kind} glyphs found for '{asset_id}' in '{source}'"
            raise NoImagesError(msg)

        save_png(thumbnail, out)
        logger.info("Generated %s thumbnail %s (%d glyphs)", self.kind, out, thumbnail.count)
        self.event_bus.emit(GENERATED, kind=str(self.kind), asset_id=asset_id, path=out, count=thumbnail.count)
        return out

    def select(self, asset_id: str, source: Path, scale: float) -> list[DecodedImage]:
        """Run candidate selection at the device-pixel glyph size for *scale*."""
        size = int(self.kind.spec.icon_size * scale)
        return select_images(self.candidate_groups(), self.make_loader(asset_id, source), size)
