"""Process-wide entry points backed by one shared ``ThumbnailService``."""

from __future__ import annotations

import threading
from pathlib import Path

from theme_thumb.core.datatypes import ThemeDescriptor
from theme_thumb.thumbnails import ThumbnailService

_lock = threading.Lock()
_service: ThumbnailService | None = None


def get_service() -> ThumbnailService:
    """Return the shared service, creating it on first use."""
    global _service
    with _lock:
        if _service is None:
            _service = ThumbnailService()
        return _service


def set_service(service: ThumbnailService | None) -> None:
    """Replace the shared service; ``None`` drops it so the next call recreates it."""
    global _service
    with _lock:
        _service = service


def update_scale_factor(value: float) -> None:
    """Set the display scale factor thumbnails are generated for."""
    get_service().update_scale_factor(value)


def get_scale_factor() -> float:
    """Return the current display scale factor (``0.0`` when unset)."""
    return get_service().scale_factor()


def init() -> list[Path]:
    """Remove cache partitions that no longer match the scale or format versions."""
    return get_service().init()


def get_cursor(asset_id: str, desc_path: Path | str) -> Path | None:
    """Return the cached cursor thumbnail path, or ``None``."""
    return get_service().get_cursor(asset_id, desc_path)


def get_icon(asset_id: str, desc_path: Path | str) -> Path | None:
    """Return the cached icon thumbnail path, or ``None``."""
    return get_service().get_icon(asset_id, desc_path)


def get_global(asset_id: str, descriptor: ThemeDescriptor, gtk_theme: str) -> Path | None:
    """Return the theme's example image path, or ``None``."""
    return get_service().get_global(asset_id, descriptor, gtk_theme)
