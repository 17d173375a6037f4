"""EventBus — observer hooks for cache hits, generations and cache sweeps."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any

logger = logging.getLogger(__name__)

# Callable[..., None]; handlers receive the event payload as keyword arguments.
EventHandler = Any

CACHE_HIT = "cache_hit"
GENERATED = "generated"
FAILED = "failed"
REMOVED = "removed"


class EventBus:
    """Publish/subscribe bus shared by the thumbnailers and the cache sweeper.

    Payloads:
        ``cache_hit``: ``kind``, ``asset_id``, ``path``
        ``generated``: ``kind``, ``asset_id``, ``path``, ``count``
        ``failed``: ``kind``, ``asset_id``, ``message``
        ``removed``: ``path``

    Handlers may be called from whichever thread produced the event.
    """

    def __init__(self) -> None:
        """Initialise an empty event bus."""
        self._lock = threading.Lock()
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event: str, handler: EventHandler) -> None:
        """Register *handler* for *event*."""
        with self._lock:
            self._handlers[event].append(handler)

    def unsubscribe(self, event: str, handler: EventHandler) -> None:
        """Remove a previously registered handler.

        Args:
            event: The event name.
            handler: The handler to remove.
        """
        with self._lock:
            try:
                self._handlers[event].remove(handler)
            except ValueError:
                logger.warning("Handler %r was not subscribed to event %r", handler, event)

    def emit(self, event: str, **kwargs: Any) -> None:
        """Call every handler subscribed to *event* with *kwargs*.

        A failing handler is logged and does not stop the others.
        """
        with self._lock:
            handlers = list(self._handlers.get(event, []))
        for handler in handlers:
            try:
                handler(**kwargs)
            except Exception:
                logger.exception("Error in handler %r for event %r", handler, event)
