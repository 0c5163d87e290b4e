"""Event log — queryable, thread-safe event store.

Stores a bounded ring buffer of ``HarnessEvent`` objects for inspection
after a failed or hanging verification.  Supports querying by event type,
time range, and path.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Client callbacks
    may be delivered from a different thread than the test body.

"""

from __future__ import annotations

import threading
from collections import deque
from typing import TYPE_CHECKING, Any, Literal

from syncorder.observability.events import EventObserved, HarnessEvent

if TYPE_CHECKING:
    from syncorder.events import EventRecord


class EventLog:
    """Bounded event store with query support.

    Events are stored in a ring buffer (deque with maxlen).  When the
    buffer is full, the oldest events are discarded automatically.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[HarnessEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: HarnessEvent) -> None:
        """Record an event in the log."""
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        limit: int = 100,
    ) -> list[HarnessEvent]:
        """Query events with optional filters.

        Args:
            event_type: Only return events of this type.
            since_ns: Only return events after this timestamp (nanoseconds).
            path: Only return events whose path contains this substring.
            limit: Maximum number of events to return.

        Returns:
            List of matching events, most recent first.

        """
        with self._lock:
            results: list[HarnessEvent] = []
            for event in reversed(self._events):
                if len(results) >= limit:
                    break

                if event_type is not None and not isinstance(event, event_type):
                    continue

                if since_ns and event.timestamp_ns < since_ns:
                    continue

                if path is not None:
                    event_path = getattr(event, "path", None) or ""
                    if path not in event_path:
                        continue

                results.append(event)

            return results

    def records(self, phase: Literal["replay", "live"] | None = None) -> list[EventRecord]:
        """Return observed records in arrival order, optionally for one phase.

        Unlike the actual queue, this keeps replay records after the trim,
        which is usually what you want when a wait times out.
        """
        with self._lock:
            return [
                e.record
                for e in self._events
                if isinstance(e, EventObserved) and (phase is None or e.phase == phase)
            ]

    def recent(self, n: int = 20) -> list[HarnessEvent]:
        """Return the N most recent events."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return summary statistics about stored events."""
        with self._lock:
            events = list(self._events)

        type_counts: dict[str, int] = {}
        for event in events:
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": type_counts,
        }
