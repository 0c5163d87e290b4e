"""Event test helper — declare an event sequence, then wait for it.

Typical use::

    helper = EventTestHelper(client, [
        (room, ("child_added", "alice")),
        (room, ("value",)),
    ], "join", registry=registry)

    wait_until(helper.watches_initialized_waiter)
    room.child("alice").set({"online": True})
    wait_until(helper.waiter)

``waiter()`` returns False while events are still outstanding and raises
``EventOrderError`` the moment the observed sequence diverges.  Polling,
timeouts, and the realtime client itself belong to the caller.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from syncorder.cleanup import default_registry
from syncorder.config import HarnessConfig
from syncorder.observability.collector import HarnessCollector
from syncorder.observability.log import EventLog
from syncorder.resolver import RegistrationResolver
from syncorder.tracker import InitializationTracker
from syncorder.waiter import EventComparator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from syncorder._types import ExpectedEvent, SyncClient
    from syncorder.cleanup import CleanupRegistry
    from syncorder.events import EventRecord

logger = logging.getLogger(__name__)


class EventTestHelper:
    """Verifies that a declared sequence of events arrives in order.

    Expectations span every watched path: the order asserted is the global
    delivery order, not a per-path order.  Each path starts in a replay
    phase; ``watches_initialized_waiter()`` discards the replay events once
    every path is live, and from then on every observed event must match
    the next expectation.

    Args:
        client: The realtime client to subscribe through.
        path_and_events: Initial ``(ref, (kind, key?))`` expectations.
        label: Prefix for failure messages (overrides ``config.label``).
        config: Harness configuration.
        registry: Receives this helper's ``unregister``.  Defaults to the
            process-wide registry drained by ``event_cleanup()``.
        collector: Observability sink; a private one is created if omitted.

    """

    def __init__(
        self,
        client: SyncClient,
        path_and_events: Sequence[ExpectedEvent] = (),
        label: str | None = None,
        *,
        config: HarnessConfig | None = None,
        registry: CleanupRegistry | None = None,
        collector: HarnessCollector | None = None,
    ) -> None:
        self.config = (config or HarnessConfig()).with_label(label)
        self.collector = (
            collector
            if collector is not None
            else HarnessCollector(EventLog(self.config.max_log_events))
        )
        self._comparator = EventComparator(self.config.label)
        self._tracker = InitializationTracker()
        self._resolver = RegistrationResolver(
            client,
            self._comparator,
            self._tracker,
            root_url=self.config.root_url,
            eager_check=self.config.eager_check,
            collector=self.collector,
        )

        self._resolver.add_expected_events(path_and_events)

        (registry if registry is not None else default_registry).register(self.unregister)

    @property
    def label(self) -> str | None:
        return self.config.label

    @property
    def expected(self) -> tuple[EventRecord, ...]:
        """The expectation queue."""
        return self._comparator.expected

    @property
    def actual(self) -> tuple[EventRecord, ...]:
        """The actual queue, replay events included until they are trimmed."""
        return self._comparator.actual

    @property
    def pending(self) -> tuple[EventRecord, ...]:
        """Expectations not yet observed."""
        return self._comparator.pending

    def waiter(self) -> bool:
        """True once every expected event arrived in order.

        Raises:
            EventOrderError: On the first mismatching or extra event.

        """
        return self._resolver.check()

    def watches_initialized_waiter(self) -> bool:
        """True once every watched path has finished its replay.

        The first call that returns True drops the replay events from the
        tail of the actual queue.  Later calls return True without touching
        the queue, until ``add_expected_events`` watches a new path.
        """
        if not self._tracker.all_initialized:
            return False

        count = self._tracker.take_replay_count()
        interleaved = self._tracker.take_interleaved_count()
        if interleaved:
            logger.warning(
                "%s%d live event(s) arrived while other paths were still replaying; "
                "trimming %d replay event(s) from the tail may have dropped live events",
                f"{self.label}: " if self.label else "",
                interleaved,
                count,
            )
        if count:
            self._comparator.trim_tail(count)
            self.collector.record_trim(
                count, remaining=len(self._comparator.actual), interleaved_live=interleaved
            )
        return True

    def add_expected_events(self, path_and_events: Sequence[ExpectedEvent]) -> None:
        """Extend the expected sequence, subscribing any newly named paths."""
        self._resolver.add_expected_events(path_and_events)

    def unregister(self) -> None:
        """Detach the listeners on every path this helper watches."""
        self._resolver.unregister()


def event_test_helper(
    client: SyncClient,
    path_and_events: Sequence[ExpectedEvent],
    label: str | None = None,
    **kwargs: object,
) -> EventTestHelper:
    """Build an ``EventTestHelper``; see its docstring for arguments."""
    return EventTestHelper(client, path_and_events, label, **kwargs)  # type: ignore[arg-type]
