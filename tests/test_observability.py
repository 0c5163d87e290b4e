"""Tests for syncorder.observability — helper event log."""

from __future__ import annotations

import threading

from syncorder._errors import EventOrderError
from syncorder.events import EventKind, EventRecord
from syncorder.observability.collector import HarnessCollector
from syncorder.observability.events import (
    EventObserved,
    ExpectationsAdded,
    MismatchDetected,
    PathSubscribed,
    PathUnsubscribed,
    ReplayTrimmed,
    now_ns,
)
from syncorder.observability.log import EventLog


def _observed(
    path: str = "/p", *, phase: str = "live", position: int = 0, timestamp_ns: int | None = None
) -> EventObserved:
    return EventObserved(
        record=EventRecord(path, EventKind.VALUE, path.rsplit("/", 1)[-1]),
        phase=phase,  # type: ignore[arg-type]
        position=position,
        timestamp_ns=now_ns() if timestamp_ns is None else timestamp_ns,
    )


# ---------------------------------------------------------------------------
# EventLog
# ---------------------------------------------------------------------------


class TestEventLog:
    """Tests for the event log store."""

    def test_append_and_len(self) -> None:
        log = EventLog()
        assert len(log) == 0
        log.append(_observed())
        assert len(log) == 1

    def test_max_events_enforced(self) -> None:
        log = EventLog(max_events=5)
        for i in range(10):
            log.append(_observed(f"/{i}"))
        assert len(log) == 5

    def test_recent(self) -> None:
        log = EventLog()
        for i in range(5):
            log.append(_observed(f"/{i}"))
        recent = log.recent(3)
        assert len(recent) == 3
        assert recent[-1].path == "/4"

    def test_query_by_type(self) -> None:
        log = EventLog()
        log.append(_observed())
        log.append(PathSubscribed(path="/p", order=0, timestamp_ns=now_ns()))
        log.append(_observed("/q"))

        results = log.query(event_type=EventObserved)
        assert len(results) == 2
        assert all(isinstance(r, EventObserved) for r in results)

    def test_query_by_path(self) -> None:
        log = EventLog()
        log.append(_observed("/rooms/a"))
        log.append(_observed("/users/b"))
        log.append(ReplayTrimmed(count=1, remaining=0, interleaved_live=0, timestamp_ns=now_ns()))

        results = log.query(path="rooms")
        assert len(results) == 1
        assert results[0].path == "/rooms/a"

    def test_query_since_and_limit(self) -> None:
        log = EventLog()
        log.append(_observed("/old", timestamp_ns=100))
        for i in range(3):
            log.append(_observed(f"/new{i}", timestamp_ns=200 + i))

        assert len(log.query(since_ns=200)) == 3
        assert [e.path for e in log.query(limit=2)] == ["/new2", "/new1"]

    def test_records_by_phase(self) -> None:
        log = EventLog()
        log.append(_observed("/a", phase="replay"))
        log.append(PathSubscribed(path="/b", order=1, timestamp_ns=now_ns()))
        log.append(_observed("/b", phase="replay"))
        log.append(_observed("/a", phase="live"))

        assert [r.path for r in log.records()] == ["/a", "/b", "/a"]
        assert [r.path for r in log.records(phase="replay")] == ["/a", "/b"]
        assert [r.path for r in log.records(phase="live")] == ["/a"]

    def test_clear(self) -> None:
        log = EventLog()
        for i in range(3):
            log.append(_observed(f"/{i}"))
        assert log.clear() == 3
        assert len(log) == 0

    def test_stats(self) -> None:
        log = EventLog()
        log.append(_observed())
        log.append(PathUnsubscribed(path="/p", timestamp_ns=now_ns()))

        stats = log.stats()
        assert stats["total"] == 2
        assert stats["by_type"]["EventObserved"] == 1
        assert stats["by_type"]["PathUnsubscribed"] == 1

    def test_thread_safety(self) -> None:
        """Concurrent appends should not lose events."""
        log = EventLog(max_events=50_000)

        def writer(n: int) -> None:
            for i in range(1_000):
                log.append(_observed(f"/{n}/{i}"))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(log) == 8_000


# ---------------------------------------------------------------------------
# HarnessCollector
# ---------------------------------------------------------------------------


class TestHarnessCollector:
    """Each record_* method appends one event."""

    def test_creates_default_log(self) -> None:
        assert isinstance(HarnessCollector().log, EventLog)

    def test_record_observed(self) -> None:
        collector = HarnessCollector()
        record = EventRecord("/p", EventKind.CHILD_ADDED, "x")
        collector.record_observed(record, live=False, position=3)

        (event,) = collector.log.recent()
        assert isinstance(event, EventObserved)
        assert event.record == record
        assert event.phase == "replay"
        assert event.position == 3

    def test_record_registration(self) -> None:
        collector = HarnessCollector()
        collector.record_expectations(2, total=5)
        collector.record_subscribe("/p", order=0)
        collector.record_unsubscribe("/p")

        events = collector.log.recent()
        assert isinstance(events[0], ExpectationsAdded)
        assert events[0].total == 5
        assert isinstance(events[1], PathSubscribed)
        assert isinstance(events[2], PathUnsubscribed)

    def test_record_trim(self) -> None:
        collector = HarnessCollector()
        collector.record_trim(4, remaining=1, interleaved_live=2)
        (event,) = collector.log.query(event_type=ReplayTrimmed)
        assert (event.count, event.remaining, event.interleaved_live) == (4, 1, 2)

    def test_record_mismatch(self) -> None:
        collector = HarnessCollector()
        err = EventOrderError(1, EventRecord("/p", EventKind.VALUE, "p"))
        collector.record_mismatch(err)

        (event,) = collector.log.query(event_type=MismatchDetected)
        assert event.index == 1
        assert event.extra
        assert event.message == str(err)

    def test_shared_log(self) -> None:
        log = EventLog()
        HarnessCollector(log).record_unsubscribe("/a")
        HarnessCollector(log).record_unsubscribe("/b")
        assert len(log) == 2
