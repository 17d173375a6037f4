"""Integration tests for the ConfigManager."""

from __future__ import annotations

from pathlib import Path

import pytest

from theme_thumb.core.config import DEFAULT_DARK_THEME, ConfigManager
from theme_thumb.core.paths import CACHE_SUBDIR


class TestConfigManagerDefaults:
    """Tests for in-memory configuration."""

    def test_get_returns_default_when_empty(self) -> None:
        """An empty config returns the provided default."""
        cfg = ConfigManager(config_dir=Path("/nonexistent"))
        assert cfg.get("dark_theme", default="dark") == "dark"

    def test_set_global_and_get(self) -> None:
        """Values set via ``set_global`` are retrievable."""
        cfg = ConfigManager(config_dir=Path("/nonexistent"))
        cfg.set_global("dark_theme", "bloom-dark")

        assert cfg.get("dark_theme") == "bloom-dark"
        assert cfg.dark_theme() == "bloom-dark"

    def test_dark_theme_default(self) -> None:
        """Without configuration the desktop's dark GTK theme is used."""
        assert ConfigManager(config_dir=Path("/nonexistent")).dark_theme() == DEFAULT_DARK_THEME

    def test_cache_root_follows_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The default cache root lives below ``$XDG_CACHE_HOME``."""
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

        assert ConfigManager(config_dir=Path("/nonexistent")).cache_root() == tmp_path / CACHE_SUBDIR

    def test_icon_dirs_unset(self) -> None:
        """No configured icon directories means the resolver's defaults."""
        assert ConfigManager(config_dir=Path("/nonexistent")).icon_dirs() is None


class TestConfigManagerToml:
    """Tests for TOML-based configuration loading."""

    def test_load_global_config(self, tmp_path: Path) -> None:
        """Global config.toml values are loaded correctly."""
        config_dir = tmp_path / "cfg"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text(f'cache_dir = "{tmp_path / "thumbs"}"\ndark_theme = "night"\n')

        cfg = ConfigManager(config_dir=config_dir)
        cfg.load()

        assert cfg.cache_root() == tmp_path / "thumbs"
        assert cfg.dark_theme() == "night"

    def test_kind_config_overrides_global(self, tmp_path: Path) -> None:
        """Per-kind TOML files override global values for that kind only."""
        config_dir = tmp_path / "cfg"
        kinds_dir = config_dir / "kinds"
        kinds_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text('icon_dirs = ["/usr/share/icons"]\n')
        (kinds_dir / "icon.toml").write_text(f'icon_dirs = ["{tmp_path / "icons"}", "{tmp_path / "pixmaps"}"]\n')

        cfg = ConfigManager(config_dir=config_dir)
        cfg.load()

        assert cfg.icon_dirs() == [tmp_path / "icons", tmp_path / "pixmaps"]
        assert cfg.get("icon_dirs") == ["/usr/share/icons"]

    def test_load_missing_dir_is_silent(self, tmp_path: Path) -> None:
        """Loading from a non-existent directory does not raise."""
        cfg = ConfigManager(config_dir=tmp_path / "does_not_exist")
        cfg.load()

        assert cfg.get("anything") is None
