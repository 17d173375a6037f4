"""ThumbnailService — entry points callers use to obtain theme thumbnails."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from theme_thumb.cache.gc import sweep
from theme_thumb.core.config import ConfigManager
from theme_thumb.core.datatypes import AssetKind, ThemeDescriptor
from theme_thumb.core.events import FAILED, EventBus
from theme_thumb.core.exceptions import NoImagesError, ThumbError
from theme_thumb.core.scale import ScaleState, format_scale
from theme_thumb.loaders.icon import IconResolver, QtIconResolver
from theme_thumb.thumbnails.base import BaseThumbnailer
from theme_thumb.thumbnails.cursor import CursorThumbnailer
from theme_thumb.thumbnails.icon import IconThumbnailer

logger = logging.getLogger(__name__)

_Key = tuple[AssetKind, str, float]


@dataclass
class _KeyLock:
    """Lock of one generation key and the number of callers using it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class ThumbnailService:
    """Generate, cache and sweep theme thumbnails for the current scale.

    Every ``get_*`` call snapshots the scale factor once, so a concurrent
    ``update_scale_factor()`` cannot make a thumbnail's path and pixels
    disagree.  Calls for the same ``(kind, id, scale)`` are serialised:
    the first one regenerates, the others find the fresh cache file.
    Failures are logged and reported as ``None``.

    Args:
        cache_root: Root of the thumbnail cache tree.  Defaults to the
                    configured or XDG location.
        resolver: Icon lookup backend.  Defaults to a Qt icon theme resolver
                  over the configured icon directories.
        scale_state: Shared scale factor holder.
        event_bus: Bus receiving cache and generation events.
        config: Configuration.  When omitted, the default configuration
                directory is loaded.
    """

    def __init__(
        self,
        cache_root: Path | None = None,
        *,
        resolver: IconResolver | None = None,
        scale_state: ScaleState | None = None,
        event_bus: EventBus | None = None,
        config: ConfigManager | None = None,
    ) -> None:
        """Initialise the service and its per-kind thumbnailers."""
        if config is None:
            config = ConfigManager()
            config.load()
        self.config = config
        self.cache_root = cache_root or self.config.cache_root()
        self.scale_state = scale_state or ScaleState()
        self.event_bus = event_bus or EventBus()
        icon_resolver = resolver or QtIconResolver(self.config.icon_dirs())

        self._thumbnailers: dict[AssetKind, BaseThumbnailer] = {
            AssetKind.CURSOR: CursorThumbnailer(self.cache_root, event_bus=self.event_bus),
            AssetKind.ICON: IconThumbnailer(self.cache_root, icon_resolver, event_bus=self.event_bus),
        }
        self._guard = threading.Lock()
        self._key_locks: dict[_Key, _KeyLock] = {}

    # ── scale ──────────────────────────────────────────────────
    def update_scale_factor(self, value: float) -> None:
        """Set the scale factor subsequent calls generate for."""
        self.scale_state.set(value)

    def scale_factor(self) -> float:
        """Return the current scale factor (``0.0`` when unset)."""
        return self.scale_state.get()

    # ── lifecycle ──────────────────────────────────────────────
    def init(self) -> list[Path]:
        """Sweep cache partitions of other scales and older format versions.

        Returns:
            The directories removed; empty when the scale is not set yet.
        """
        scale = self.scale_state.get()
        if scale <= 0:
            logger.info("Scale factor is not set, skipping cache sweep")
            return []
        removed = sweep(self.cache_root, scale, event_bus=self.event_bus)
        logger.info("Cache sweep for X%s removed %d directories", format_scale(scale), len(removed))
        return removed

    # ── entry points ───────────────────────────────────────────
    def get_cursor(self, asset_id: str, desc_path: Path | str) -> Path | None:
        """Return the cursor thumbnail of theme *asset_id* at *desc_path*."""
        return self._get(AssetKind.CURSOR, asset_id, Path(desc_path))

    def get_icon(self, asset_id: str, desc_path: Path | str) -> Path | None:
        """Return the icon thumbnail of icon theme *asset_id*."""
        return self._get(AssetKind.ICON, asset_id, Path(desc_path))

    def get_global(self, asset_id: str, descriptor: ThemeDescriptor, gtk_theme: str) -> Path | None:
        """Return the theme's own example image, without caching.

        The last example is used when *gtk_theme* is the dark variant, the
        first one otherwise.  Relative entries resolve against the theme's
        base path.

        Args:
            asset_id: Theme id (informational).
            descriptor: Theme description with its example list.
            gtk_theme: Name of the active GTK theme.

        Returns:
            The example path, or ``None`` if the scale is unset or the theme
            lists no example.
        """
        if not self.scale_state.is_usable():
            logger.info("Scale factor is not set, no global preview for '%s'", asset_id)
            return None

        examples = descriptor.examples()
        if not examples:
            logger.debug("Theme '%s' lists no example image", asset_id)
            return None

        chosen = Path(examples[-1] if gtk_theme == self.config.dark_theme() else examples[0])
        if not chosen.is_absolute():
            chosen = (descriptor.path / chosen).absolute()
        return chosen

    # ── internals ──────────────────────────────────────────────
    @contextmanager
    def _locked(self, key: _Key) -> Iterator[None]:
        with self._guard:
            entry = self._key_locks.setdefault(key, _KeyLock())
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._key_locks[key]

    def _get(self, kind: AssetKind, asset_id: str, source: Path) -> Path | None:
        scale = self.scale_state.get()
        if scale <= 0:
            logger.info("Scale factor is not set, no %s thumbnail for '%s'", kind, asset_id)
            return None

        with self._locked((kind, asset_id, scale)):
            try:
                return self._thumbnailers[kind].generate(asset_id, source, scale)
            except NoImagesError as exc:
                logger.info("%s", exc)
                self.event_bus.emit(FAILED, kind=str(kind), asset_id=asset_id, message=str(exc))
            except ThumbError as exc:
                logger.warning("Cannot produce %s thumbnail for '%s': %s", kind, asset_id, exc)
                self.event_bus.emit(FAILED, kind=str(kind), asset_id=asset_id, message=str(exc))
        return None
