"""Cache garbage collection — drop partitions for other scales and old versions.

The cache never evicts individual entries.  A thumbnail becomes garbage only
when its scale partition (``X<scale>``) or its version partition
(``<kind>-v<version>``) stops matching what the running process generates.
"""

from __future__ import annotations

import glob
import logging
import shutil
from pathlib import Path

from theme_thumb.cache.paths import kind_dir_name, scale_dir_name
from theme_thumb.core.datatypes import GTK_DIR_NAME, GTK_VERSION, AssetKind
from theme_thumb.core.events import REMOVED, EventBus

logger = logging.getLogger(__name__)


def current_versions() -> dict[str, int]:
    """Return the format version of every kind with a cache partition."""
    versions = {GTK_DIR_NAME: GTK_VERSION}
    for kind in AssetKind:
        versions[kind.spec.dir_name] = kind.spec.version
    return versions


def remove_unused_dirs(pattern: str, keep: str, *, event_bus: EventBus | None = None) -> list[Path]:
    """Recursively delete every directory matching *pattern* except *keep*.

    Removal is best effort: a directory that cannot be deleted is logged and
    skipped.

    Args:
        pattern: Shell glob selecting candidate directories.
        keep: Base name of the one directory to preserve.
        event_bus: Optional bus receiving a ``removed`` event per deletion.

    Returns:
        The directories actually removed.
    """
    removed: list[Path] = []
    for match in sorted(glob.glob(pattern)):
        path = Path(match)
        if path.name == keep or not path.is_dir():
            continue
        try:
            shutil.rmtree(path)
        except OSError as exc:
            logger.warning("Failed to remove stale cache directory %s: %s", path, exc)
            continue
        logger.info("Removed stale cache directory %s", path)
        removed.append(path)
        if event_bus is not None:
            event_bus.emit(REMOVED, path=path)
    return removed


def remove_unused_scale_dirs(cache_root: Path, scale: float, *, event_bus: EventBus | None = None) -> list[Path]:
    """Delete every ``X*`` partition except the one for *scale*."""
    pattern = str(Path(glob.escape(str(cache_root))) / "X*")
    return remove_unused_dirs(pattern, scale_dir_name(scale), event_bus=event_bus)


def remove_old_version_dirs(
    cache_root: Path,
    scale: float,
    kind: str,
    version: int,
    *,
    event_bus: EventBus | None = None,
) -> list[Path]:
    """Delete ``<kind>-v*`` partitions of the current scale other than *version*."""
    scale_dir = Path(glob.escape(str(cache_root / scale_dir_name(scale))))
    pattern = str(scale_dir / f"{kind}-v*")
    return remove_unused_dirs(pattern, kind_dir_name(kind, version), event_bus=event_bus)


def remove_all_old_version_dirs(cache_root: Path, scale: float, *, event_bus: EventBus | None = None) -> list[Path]:
    """Run the version sweep for every known kind."""
    removed: list[Path] = []
    for kind, version in current_versions().items():
        removed.extend(remove_old_version_dirs(cache_root, scale, kind, version, event_bus=event_bus))
    return removed


def sweep(cache_root: Path, scale: float, *, event_bus: EventBus | None = None) -> list[Path]:
    """Run the scale sweep and then the version sweep.

    Args:
        cache_root: Root of the thumbnail cache tree.
        scale: The currently active scale factor.
        event_bus: Optional bus receiving ``removed`` events.

    Returns:
        All directories removed by both phases.
    """
    removed = remove_unused_scale_dirs(cache_root, scale, event_bus=event_bus)
    removed.extend(remove_all_old_version_dirs(cache_root, scale, event_bus=event_bus))
    return removed
