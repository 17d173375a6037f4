"""Read a theme description file into a ``ThemeDescriptor``."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from theme_thumb.core.datatypes import ThemeDescriptor
from theme_thumb.core.exceptions import DecodeError

logger = logging.getLogger(__name__)

# Sections searched, in order, for the Name and Example keys.
THEME_SECTIONS: tuple[str, ...] = ("Deepin Theme", "Icon Theme", "X-GNOME-Metatheme", "Desktop Entry")


def load_theme_descriptor(desc_file: Path) -> ThemeDescriptor:
    """Parse *desc_file* (an ``index.theme``-style key file).

    The descriptor's base path is the directory holding the file; its name
    falls back to that directory's name when no ``Name`` key is present.

    Args:
        desc_file: Path of the theme description file.

    Returns:
        The descriptor with base path, example list and name.

    Raises:
        DecodeError: If the file cannot be read or parsed.
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read_string(desc_file.read_text(encoding="utf-8", errors="replace"))
    except (OSError, configparser.Error) as exc:
        msg = f"Cannot read theme description '{desc_file}'"
        raise DecodeError(msg) from exc

    name = ""
    example = ""
    for section in THEME_SECTIONS:
        if not parser.has_section(section):
            continue
        name = name or parser[section].get("Name", "")
        example = example or parser[section].get("Example", "")

    base = desc_file.parent
    logger.debug("Theme description %s: name=%r example=%r", desc_file, name, example)
    return ThemeDescriptor(path=base, example=example, name=name or base.name)
