"""ScaleState — the display scale factor every generation call works against."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


def format_scale(value: float) -> str:
    """Render a scale factor the way cache directory names spell it.

    The ``%g`` form is locale independent and drops a trailing ``.0``
    (``1``, ``1.25``, ``2``).
    """
    return f"{value:g}"


class ScaleState:
    """Lock-guarded holder of the current display scale factor.

    A value of zero or below means the factor has not been set yet and no
    thumbnail may be generated.

    Args:
        value: Initial scale factor.  Defaults to unset.
    """

    def __init__(self, value: float = 0.0) -> None:
        """Initialise the holder with *value*."""
        self._lock = threading.Lock()
        self._value = float(value)

    def set(self, value: float) -> None:
        """Store *value* as the current scale factor."""
        with self._lock:
            self._value = float(value)
        logger.info("Scale factor set to %s", format_scale(value))

    def get(self) -> float:
        """Return the last stored scale factor (``0.0`` when unset)."""
        with self._lock:
            return self._value

    def is_usable(self) -> bool:
        """Return ``True`` if the stored scale factor is strictly positive."""
        return self.get() > 0
