"""ConfigManager — global and per-kind settings backed by TOML files."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from theme_thumb.core.paths import get_config_dir, get_thumbnail_cache_root

logger = logging.getLogger(__name__)

DEFAULT_DARK_THEME = "deepin-dark"


class ConfigManager:
    """Hierarchical thumbnail configuration.

    Global values from ``config.toml`` can be overridden per asset kind by
    ``kinds/<kind>.toml`` (e.g. ``kinds/icon.toml``).

    Recognised keys:
        ``cache_dir``: Root of the thumbnail cache tree.
        ``icon_dirs``: Icon theme search directories, in priority order.
        ``dark_theme``: GTK theme name that selects the dark example image.

    Args:
        config_dir: Root directory for configuration files.
                    Defaults to ``$XDG_CONFIG_HOME/theme-thumb/``.
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialise the config manager.

        Args:
            config_dir: Custom configuration directory.  Uses the
                        XDG default if ``None``.
        """
        self._config_dir = config_dir or get_config_dir()
        self._global: dict[str, Any] = {}
        self._per_kind: dict[str, dict[str, Any]] = {}

    @property
    def config_dir(self) -> Path:
        """Return the configuration directory path."""
        return self._config_dir

    def load(self) -> None:
        """Load global and per-kind config from ``config_dir``.

        Missing files are silently skipped.
        """
        global_file = self._config_dir / "config.toml"
        if global_file.is_file():
            self._global = self._read_toml(global_file)
            logger.info("Loaded global config from %s", global_file)

        kinds_dir = self._config_dir / "kinds"
        if kinds_dir.is_dir():
            for toml_file in kinds_dir.glob("*.toml"):
                self._per_kind[toml_file.stem] = self._read_toml(toml_file)
                logger.info("Loaded config for kind '%s'", toml_file.stem)

    def get(self, key: str, *, kind: str | None = None, default: Any = None) -> Any:
        """Retrieve a config value with optional kind-level override.

        Args:
            key: The configuration key.
            kind: If given, check that kind's config first.
            default: Fallback value when the key is not found.

        Returns:
            The configuration value, or *default*.
        """
        if kind and kind in self._per_kind:
            value = self._per_kind[kind].get(key)
            if value is not None:
                return value
        return self._global.get(key, default)

    def set_global(self, key: str, value: Any) -> None:
        """Set a global configuration value (in-memory only)."""
        self._global[key] = value

    def cache_root(self) -> Path:
        """Return the configured cache root, or the XDG default."""
        raw = self.get("cache_dir")
        return Path(raw).expanduser() if raw else get_thumbnail_cache_root()

    def icon_dirs(self) -> list[Path] | None:
        """Return the configured icon search directories, if any."""
        raw = self.get("icon_dirs", kind="icon")
        if not raw:
            return None
        return [Path(p).expanduser() for p in raw]

    def dark_theme(self) -> str:
        """Return the GTK theme name treated as the dark variant."""
        return str(self.get("dark_theme", default=DEFAULT_DARK_THEME))

    @staticmethod
    def _read_toml(path: Path) -> dict[str, Any]:
        """Read and parse a TOML file.

        Args:
            path: Path to the TOML file.

        Returns:
            Parsed dictionary.
        """
        with path.open("rb") as fh:
            return tomllib.load(fh)
