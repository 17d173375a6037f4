"""Cache path resolution — ``<root>/X<scale>/<kind>-v<version>/<id>.png``."""

from __future__ import annotations

import logging
from pathlib import Path

from theme_thumb.core.exceptions import CacheDirError, ValidationError
from theme_thumb.core.scale import format_scale

logger = logging.getLogger(__name__)


def scale_dir_name(scale: float) -> str:
    """Return the scale partition directory name, e.g. ``X1.5``."""
    return f"X{format_scale(scale)}"


def kind_dir_name(kind: str, version: int) -> str:
    """Return the version partition directory name, e.g. ``cursor-v2``."""
    return f"{kind}-v{version}"


def validate_asset_id(asset_id: str) -> None:
    """Reject ids that would escape their cache directory.

    Raises:
        ValidationError: If *asset_id* is empty, ``.``/``..`` or contains a
            path separator.
    """
    if not asset_id or asset_id in {".", ".."} or "/" in asset_id or "\\" in asset_id or "\x00" in asset_id:
        msg = f"Invalid asset id {asset_id!r}"
        raise ValidationError(msg)


def resolve_path(cache_root: Path, kind: str, asset_id: str, version: int, scale: float) -> Path:
    """Return the cache file path for an asset, creating its directory.

    Args:
        cache_root: Root of the thumbnail cache tree.
        kind: Kind directory prefix (``"cursor"``, ``"icon"``, ...).
        asset_id: Theme id; becomes the file stem.
        version: Format version of *kind*.
        scale: Scale factor the thumbnail is generated for.

    Returns:
        Path of ``<id>.png`` inside the scale and version partitions.

    Raises:
        ValidationError: If *asset_id* is not a plain file stem.
        CacheDirError: If the directory tree cannot be created.
    """
    validate_asset_id(asset_id)
    directory = cache_root / scale_dir_name(scale) / kind_dir_name(kind, version)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create cache directory '{directory}'"
        raise CacheDirError(msg) from exc
    return directory / f"{asset_id}.png"
