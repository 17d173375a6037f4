"""IconThumbnailer — preview of an icon theme through common application icons."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from theme_thumb.core.datatypes import AssetKind, DecodedImage
from theme_thumb.core.events import EventBus
from theme_thumb.loaders.icon import IconResolver, load_icon
from theme_thumb.thumbnails.base import BaseThumbnailer
from theme_thumb.thumbnails.groups import ICON_GROUPS
from theme_thumb.thumbnails.selector import Loader


class IconThumbnailer(BaseThumbnailer):
    """Composite one icon per application category of the theme named by the id.

    Args:
        cache_root: Root of the thumbnail cache tree.
        resolver: Icon lookup backend.
        event_bus: Bus receiving generation events.
    """

    kind = AssetKind.ICON

    def __init__(self, cache_root: Path, resolver: IconResolver, event_bus: EventBus | None = None) -> None:
        """Initialise the thumbnailer with its icon backend."""
        super().__init__(cache_root, event_bus=event_bus)
        self.resolver = resolver

    def candidate_groups(self) -> Sequence[Sequence[str]]:
        """Return the application category groups."""
        return ICON_GROUPS

    def make_loader(self, asset_id: str, source: Path) -> Loader:
        """Return a loader resolving icon names in theme *asset_id*."""

        def load(name: str, size: int) -> DecodedImage | None:
            return load_icon(self.resolver, asset_id, name, size)

        return load
