"""mtime based reuse-or-regenerate decision for cached thumbnails."""

from __future__ import annotations

from pathlib import Path


def should_regenerate(source: Path, cached: Path) -> bool:
    """Return ``True`` if *cached* has to be (re)generated from *source*.

    A file *source* is tracked through its parent directory so that a theme
    description file stands for the whole theme.  Only modification times are
    compared; a touched but unchanged theme still triggers regeneration.

    Args:
        source: Theme directory or theme description file.
        cached: Existing or prospective cache file.

    Returns:
        ``True`` when *cached* is missing or older than the source directory.
    """
    try:
        cached_mtime = cached.stat().st_mtime
    except FileNotFoundError:
        return True

    source_dir = source.parent if source.is_file() else source
    try:
        source_mtime = source_dir.stat().st_mtime
    except OSError:
        return False
    return source_mtime > cached_mtime
