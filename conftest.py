"""Shared fixtures: synthetic Xcursor files and icon themes under ``tmp_path``."""

from __future__ import annotations

import os
import struct
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from PIL import Image

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

_XCURSOR_MAGIC = 0x72756358
_IMAGE_TYPE = 0xFFFD0002

# (nominal size, width, height, packed ARGB colour)
CursorFrame = tuple[int, int, int, int]


def build_xcursor(frames: Sequence[CursorFrame]) -> bytes:
    """Return the bytes of an Xcursor file holding solid-colour *frames*."""
    header_len = 16
    data_start = header_len + 12 * len(frames)
    toc = b""
    chunks = b""
    for nominal, width, height, argb in frames:
        toc += struct.pack("<3I", _IMAGE_TYPE, nominal, data_start + len(chunks))
        chunks += struct.pack("<9I", 36, _IMAGE_TYPE, nominal, 1, width, height, 0, 0, 50)
        chunks += struct.pack(f"<{width * height}I", *([argb] * (width * height)))
    return struct.pack("<4I", _XCURSOR_MAGIC, header_len, 0x10000, len(frames)) + toc + chunks


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's own ``config.toml`` out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))


@pytest.fixture()
def xcursor_builder() -> Callable[[Sequence[CursorFrame]], bytes]:
    """Return ``build_xcursor`` for tests that need raw cursor bytes."""
    return build_xcursor


@pytest.fixture()
def make_cursor_theme(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating ``<name>/cursors/<cursor>`` files.

    Each cursor maps to a packed ARGB colour; every cursor gets 24/32/48px
    frames unless *sizes* says otherwise.
    """

    def _make(cursors: dict[str, int], *, name: str = "theme", sizes: Sequence[int] = (24, 32, 48)) -> Path:
        theme_dir = tmp_path / name
        cursors_dir = theme_dir / "cursors"
        cursors_dir.mkdir(parents=True, exist_ok=True)
        for cursor, argb in cursors.items():
            frames = [(size, size, size, argb) for size in sizes]
            (cursors_dir / cursor).write_bytes(build_xcursor(frames))
        (theme_dir / "index.theme").write_text(f"[Icon Theme]\nName={name}\n")
        return theme_dir

    return _make


@pytest.fixture()
def make_icon_theme(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating an icon theme with solid-colour PNG icons.

    Returns the base directory holding the theme (pass it as a search dir).
    """

    def _make(
        icons: dict[str, tuple[int, int, int, int]],
        *,
        name: str = "test-icons",
        size: int = 48,
        inherits: str = "",
    ) -> Path:
        base = tmp_path / "icons"
        app_dir = base / name / f"{size}x{size}" / "apps"
        app_dir.mkdir(parents=True, exist_ok=True)
        index = [
            "[Icon Theme]",
            f"Name={name}",
            f"Directories={size}x{size}/apps",
        ]
        if inherits:
            index.append(f"Inherits={inherits}")
        index += ["", f"[{size}x{size}/apps]", f"Size={size}", "Type=Fixed", ""]
        (base / name / "index.theme").write_text("\n".join(index))
        for icon, colour in icons.items():
            Image.new("RGBA", (size, size), colour).save(str(app_dir / f"{icon}.png"))
        return base

    return _make
