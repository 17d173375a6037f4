"""Icon asset loader — resolve an icon name inside an icon theme.

The thumbnail core only depends on the ``IconResolver`` protocol.  The
default ``QtIconResolver`` backend hands the lookup to Qt's icon engine,
which follows the freedesktop.org icon theme rules: exact size over closest
size, inherited themes, ``hicolor`` and finally unthemed icons from the
fallback search paths.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from PIL import Image, ImageOps

from theme_thumb.core.datatypes import DecodedImage

if TYPE_CHECKING:
    from PySide6.QtGui import QGuiApplication, QImage

logger = logging.getLogger(__name__)

FALLBACK_THEME = "hicolor"

# QIcon's theme name and search paths are process-wide.
_qt_lock = threading.Lock()
_app: QGuiApplication | None = None


class IconResolver(Protocol):
    """Capability turning ``(theme, icon name, size)`` into pixels."""

    def resolve(self, theme: str, name: str, size: int) -> DecodedImage | None:
        """Return the icon rendered into a ``size``x``size`` square, or ``None``."""
        ...


def load_icon(resolver: IconResolver, theme: str, name: str, size: int) -> DecodedImage | None:
    """Load *name* from *theme* at *size* pixels through *resolver*."""
    image = resolver.resolve(theme, name, size)
    if image is None:
        logger.debug("Icon '%s' not found in theme '%s'", name, theme)
    return image


def ensure_gui_app() -> QGuiApplication:
    """Return the running ``QGuiApplication``, creating one if needed.

    Without a display server the ``offscreen`` platform is selected, so
    icons can be rendered from daemons and test runs.
    """
    global _app
    from PySide6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        if not os.environ.get("DISPLAY") and not os.environ.get("WAYLAND_DISPLAY"):
            os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        _app = QGuiApplication([])
        logger.debug("Created QGuiApplication on platform '%s'", _app.platformName())
        return _app
    return app  # type: ignore[return-value]


def qimage_to_pil(qimage: QImage) -> Image.Image:
    """Copy *qimage* into a new RGBA PIL image."""
    from PySide6.QtGui import QImage

    rgba = qimage.convertToFormat(QImage.Format.Format_RGBA8888)
    size = (rgba.width(), rgba.height())
    return Image.frombuffer("RGBA", size, bytes(rgba.constBits()), "raw", "RGBA", rgba.bytesPerLine(), 1).copy()


def fit_square(image: Image.Image, size: int) -> Image.Image:
    """Scale *image* to fit a ``size`` square, keeping its aspect, centered."""
    contained = ImageOps.contain(image.convert("RGBA"), (size, size), method=Image.Resampling.LANCZOS)
    canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    canvas.paste(contained, ((size - contained.width) // 2, (size - contained.height) // 2))
    return canvas


class QtIconResolver:
    """``IconResolver`` backed by ``QIcon.fromTheme``.

    Qt never scales an icon up, so pixmaps smaller than the request (or not
    square) are fitted into the requested square with Pillow.

    Args:
        search_dirs: Directories holding ``<theme>/index.theme``; also
                     searched for unthemed icons.  ``None`` keeps Qt's
                     default search paths.
    """

    def __init__(self, search_dirs: list[Path] | None = None) -> None:
        """Initialise the resolver with its base directories."""
        self._search_dirs = [str(d) for d in search_dirs] if search_dirs is not None else None

    def resolve(self, theme: str, name: str, size: int) -> DecodedImage | None:
        """Look up *name* in *theme* and render it into a *size* square."""
        from PySide6.QtCore import QSize
        from PySide6.QtGui import QIcon

        ensure_gui_app()
        with _qt_lock:
            if self._search_dirs is not None and QIcon.themeSearchPaths() != self._search_dirs:
                QIcon.setThemeSearchPaths(self._search_dirs)
                QIcon.setFallbackSearchPaths(self._search_dirs)
            QIcon.setFallbackThemeName(FALLBACK_THEME)
            if QIcon.themeName() != theme:
                QIcon.setThemeName(theme)

            icon = QIcon.fromTheme(name)
            if icon.isNull():
                return None
            pixmap = icon.pixmap(QSize(size, size), 1.0)
            if pixmap.isNull():
                logger.debug("Icon '%s' of theme '%s' rendered an empty pixmap", name, theme)
                return None
            image = qimage_to_pil(pixmap.toImage())

        if image.size != (size, size):
            image = fit_square(image, size)
        return DecodedImage.from_image(image, source=name)
