"""Registration resolver — turns expectations into subscriptions.

Owns the path listeners of one helper and the sink they deliver into.

Subscribe order matters.  When a client deduplicates a deeper listen
(``a/b/c``) into an ancestor listen (``a``) it sends unlisten/relisten
traffic, and the replay events come out in a different order than if the
ancestor had been registered first.  Worse, whether that happens depends
on whether the client was already connected when the listens were made.
Subscribing shortest path first makes the replay order match the order a
test author would write by hand.  It narrows the problem; it does not
promise the client never reorders.

"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from syncorder._errors import EventOrderError, RegistrationError
from syncorder.events import EventKind, EventRecord, raw_path
from syncorder.listener import PathListener
from syncorder.observability.collector import HarnessCollector

if TYPE_CHECKING:
    from collections.abc import Iterable

    from syncorder._types import ExpectedEvent, PathKey, Reference, SyncClient
    from syncorder.tracker import InitializationTracker
    from syncorder.waiter import EventComparator

logger = logging.getLogger(__name__)


def subscribe_order(refs: Iterable[Reference]) -> list[Reference]:
    """Distinct references, shortest string form first.

    Ties keep their input order.  Duplicates (same ``str(ref)``) keep the
    first occurrence.
    """
    seen: set[str] = set()
    unique: list[Reference] = []
    for ref in refs:
        key = str(ref)
        if key not in seen:
            seen.add(key)
            unique.append(ref)
    return sorted(unique, key=lambda ref: len(str(ref)))


class RegistrationResolver:
    """Normalizes expectations, subscribes paths, and dispatches events.

    Args:
        client: The realtime client to subscribe through.
        comparator: Receives expected and observed records.
        tracker: Replay/live state for each subscribed path.
        root_url: Connection root stripped from raw paths.
        eager_check: Run the comparator on every live event.
        collector: Observability sink.

    """

    __slots__ = (
        "_client",
        "_collector",
        "_comparator",
        "_root_url",
        "_subscribed",
        "_tracker",
        "eager_check",
    )

    def __init__(
        self,
        client: SyncClient,
        comparator: EventComparator,
        tracker: InitializationTracker,
        *,
        root_url: str = "",
        eager_check: bool = True,
        collector: HarnessCollector | None = None,
    ) -> None:
        self._client = client
        self._comparator = comparator
        self._tracker = tracker
        self._root_url = root_url
        self._collector = collector if collector is not None else HarnessCollector()
        self._subscribed = 0
        self.eager_check = eager_check

    # ----- Expectations -----

    def normalize(self, entries: Sequence[ExpectedEvent]) -> list[EventRecord]:
        """Convert ``(ref, (kind, key?))`` entries into new records.

        The entries are only read.  ``value`` expectations take their key
        from the reference, so it may be omitted.

        Raises:
            RegistrationError: On a malformed entry.  Nothing is recorded.

        """
        records: list[EventRecord] = []
        for i, entry in enumerate(entries):
            try:
                ref, event = entry
            except (TypeError, ValueError):
                msg = f"Expectation {i} must be a (ref, (kind, key)) pair, got {entry!r}"
                raise RegistrationError(msg) from None
            shaped = isinstance(event, Sequence) and not isinstance(event, str)
            if not shaped or not 1 <= len(event) <= 2:
                msg = f"Expectation {i} event must be (kind,) or (kind, key), got {event!r}"
                raise RegistrationError(msg)

            kind = EventKind.parse(event[0])
            if kind is EventKind.VALUE:
                key = ref.key
            else:
                key = event[1] if len(event) == 2 else None
            records.append(EventRecord(path=raw_path(ref, self._root_url), kind=kind, key=key))
        return records

    def add_expected_events(self, entries: Sequence[ExpectedEvent]) -> list[EventRecord]:
        """Append a batch of expectations and subscribe any new paths.

        Previously observed events are kept; the batch extends the sequence.

        Returns:
            The records appended to the expectation queue.

        """
        entries = list(entries)
        records = self.normalize(entries)
        self._comparator.expect(records)
        self._collector.record_expectations(
            len(records), total=len(self._comparator.expected)
        )

        for ref in subscribe_order(ref for ref, _ in entries):
            self._listen(ref)
        return records

    def _listen(self, ref: Reference) -> None:
        path_key = str(ref)
        if path_key in self._tracker:
            return
        listener = PathListener(self._client, ref, self.dispatch, root_url=self._root_url)
        # Tracked before listening: the client may replay synchronously.
        self._tracker.track(path_key, listener)
        logger.debug("subscribing %s (order %d)", path_key, self._subscribed)
        self._collector.record_subscribe(raw_path(ref, self._root_url), order=self._subscribed)
        self._subscribed += 1
        listener.listen()

    # ----- Delivery -----

    def dispatch(self, path_key: PathKey, record: EventRecord) -> None:
        """Sink for every path listener.

        Appends to the actual queue, then classifies the event.  Live events
        run the comparator immediately, so an ordering failure raises out of
        the client's delivery call for the event that caused it.
        """
        position = self._comparator.observe(record)
        live = self._tracker.observe(path_key, record.kind)
        self._collector.record_observed(record, live=live, position=position)
        if live and self.eager_check:
            self.check()

    def check(self) -> bool:
        """Run the comparator, recording any failure before it propagates."""
        try:
            return self._comparator.check()
        except EventOrderError as e:
            self._collector.record_mismatch(e)
            raise

    # ----- Teardown -----

    def unregister(self) -> None:
        """Detach every listener this resolver attached."""
        for path_key in self._tracker.unlisten_all():
            self._collector.record_unsubscribe(raw_path(path_key, self._root_url))
