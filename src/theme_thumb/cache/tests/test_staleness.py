"""Tests for the mtime based staleness check."""

from __future__ import annotations

import os
from pathlib import Path

from theme_thumb.cache.staleness import should_regenerate


def _set_mtime(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


class TestShouldRegenerate:
    """Tests for ``should_regenerate``."""

    def test_missing_cache_file(self, tmp_path: Path) -> None:
        """A missing cache file always needs generation."""
        assert should_regenerate(tmp_path, tmp_path / "missing.png") is True

    def test_fresh_cache_is_reused(self, tmp_path: Path) -> None:
        """A cache file newer than the source directory is reused."""
        theme = tmp_path / "theme"
        theme.mkdir()
        cached = tmp_path / "thumb.png"
        cached.write_bytes(b"png")
        _set_mtime(theme, 1_000)
        _set_mtime(cached, 2_000)

        assert should_regenerate(theme, cached) is False

    def test_equal_mtime_is_reused(self, tmp_path: Path) -> None:
        """Only a strictly newer source forces regeneration."""
        theme = tmp_path / "theme"
        theme.mkdir()
        cached = tmp_path / "thumb.png"
        cached.write_bytes(b"png")
        _set_mtime(theme, 1_500)
        _set_mtime(cached, 1_500)

        assert should_regenerate(theme, cached) is False

    def test_newer_source_dir_regenerates(self, tmp_path: Path) -> None:
        """A source directory modified after the cache file is stale."""
        theme = tmp_path / "theme"
        theme.mkdir()
        cached = tmp_path / "thumb.png"
        cached.write_bytes(b"png")
        _set_mtime(cached, 1_000)
        _set_mtime(theme, 2_000)

        assert should_regenerate(theme, cached) is True

    def test_file_source_uses_parent_dir(self, tmp_path: Path) -> None:
        """A description file is tracked through its directory, not itself."""
        theme = tmp_path / "theme"
        theme.mkdir()
        desc = theme / "index.theme"
        desc.write_text("[Icon Theme]\n")
        cached = tmp_path / "thumb.png"
        cached.write_bytes(b"png")
        _set_mtime(desc, 3_000)
        _set_mtime(cached, 2_000)
        _set_mtime(theme, 1_000)

        assert should_regenerate(desc, cached) is False

        _set_mtime(theme, 2_500)
        assert should_regenerate(desc, cached) is True

    def test_missing_source_keeps_cache(self, tmp_path: Path) -> None:
        """A vanished source never invalidates an existing cache file."""
        cached = tmp_path / "thumb.png"
        cached.write_bytes(b"png")
        assert should_regenerate(tmp_path / "gone", cached) is False
