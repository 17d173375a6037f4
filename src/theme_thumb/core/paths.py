"""XDG base directory lookups for the cache and configuration roots."""

import os
from pathlib import Path

APP_NAME = "theme-thumb"

# Thumbnail tree below the user cache directory, shared with the desktop's
# other thumbnail consumers.
CACHE_SUBDIR = Path("deepin") / "dde-api" / "theme_thumb"


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Return an XDG base directory, honouring its environment override.

    Args:
        env_var: XDG environment variable name (e.g. ``"XDG_CACHE_HOME"``).
        default_subdir: Fallback below the home directory (e.g. ``".cache"``).

    Returns:
        The base directory path.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def get_user_cache_dir() -> Path:
    """Return ``$XDG_CACHE_HOME`` or ``~/.cache``."""
    return _get_xdg_base("XDG_CACHE_HOME", ".cache")


def get_thumbnail_cache_root() -> Path:
    """Return the root of the thumbnail cache tree."""
    return get_user_cache_dir() / CACHE_SUBDIR


def get_config_dir() -> Path:
    """Return ``$XDG_CONFIG_HOME/theme-thumb`` or ``~/.config/theme-thumb``."""
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME
