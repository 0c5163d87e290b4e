"""Cleanup registry — unregister actions swept at a test boundary.

Every helper registers its ``unregister`` when it is built.  The test
framework drains the registry once per test case so listeners from a
finished test never deliver into the next one.

Pass an explicit ``CleanupRegistry`` (the pytest plugin provides one per
test) to keep independent runs from sharing state.  ``default_registry``
and ``event_cleanup()`` remain for callers that want one process-wide
sweep.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class CleanupRegistry:
    """Accumulates cleanup actions; ``drain()`` runs and clears them all."""

    __slots__ = ("_handlers", "_lock")

    def __init__(self) -> None:
        self._handlers: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    def register(self, handler: Callable[[], None]) -> None:
        with self._lock:
            self._handlers.append(handler)

    def drain(self) -> int:
        """Run every handler in registration order, then empty the registry.

        A failing handler does not stop the sweep.  The first exception is
        re-raised once every handler has run.

        Returns:
            Number of handlers run.

        """
        with self._lock:
            handlers, self._handlers = self._handlers, []

        first_error: Exception | None = None
        for handler in handlers:
            try:
                handler()
            except Exception as e:
                logger.exception("cleanup handler %r failed", handler)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
        return len(handlers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)


default_registry = CleanupRegistry()


def event_cleanup(registry: CleanupRegistry | None = None) -> int:
    """Drain ``registry`` (the process-wide default when omitted)."""
    return (registry if registry is not None else default_registry).drain()
