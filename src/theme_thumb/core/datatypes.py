"""Shared value objects used across loaders, the compositor and the cache."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

# Logical canvas of every thumbnail before scaling.
CANVAS_WIDTH = 220
CANVAS_HEIGHT = 36


@dataclass(frozen=True)
class KindSpec:
    """Cache directory name, format version and layout metrics of an asset kind."""

    dir_name: str
    version: int
    icon_size: int
    padding: int


class AssetKind(enum.Enum):
    """Kinds of thumbnails this package generates."""

    CURSOR = KindSpec(dir_name="cursor", version=2, icon_size=24, padding=7)
    ICON = KindSpec(dir_name="icon", version=2, icon_size=36, padding=10)

    @property
    def spec(self) -> KindSpec:
        """Return the ``KindSpec`` bound to this kind."""
        return self.value

    def __str__(self) -> str:
        return self.value.dir_name


# Cache kinds that are only swept, never generated here.
GTK_DIR_NAME = "gtk"
GTK_VERSION = 1


@dataclass(frozen=True)
class DecodedImage:
    """A decoded RGBA pixel buffer.

    Two images compare equal only if their dimensions and every pixel byte
    match; ``source`` is informational and ignored by comparison.
    """

    width: int
    height: int
    pixels: bytes
    source: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            msg = f"Expected {expected} RGBA bytes for {self.width}x{self.height}, got {len(self.pixels)}"
            raise ValueError(msg)

    @classmethod
    def from_image(cls, image: Image.Image, *, source: str = "") -> DecodedImage:
        """Build a ``DecodedImage`` from any PIL image."""
        rgba = image.convert("RGBA")
        return cls(width=rgba.width, height=rgba.height, pixels=rgba.tobytes(), source=source)

    def to_image(self) -> Image.Image:
        """Return a new RGBA PIL image holding a copy of the pixels."""
        return Image.frombytes("RGBA", (self.width, self.height), self.pixels)


@dataclass(frozen=True)
class ThemeDescriptor:
    """What the thumbnail core needs to know about a theme description."""

    path: Path
    example: str = ""
    name: str = ""

    def examples(self) -> list[str]:
        """Return the non-empty entries of the comma separated example list."""
        return [item.strip() for item in self.example.split(",") if item.strip()]


@dataclass(frozen=True)
class Placement:
    """Position and size of one glyph inside a composited thumbnail."""

    source: str
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Thumbnail:
    """A composited thumbnail ready to be written to the cache."""

    image: Image.Image
    device_pixel_ratio: float
    placements: tuple[Placement, ...]

    @property
    def count(self) -> int:
        """Return the number of glyphs drawn onto the canvas."""
        return len(self.placements)
