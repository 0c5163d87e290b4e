"""Observability for event test helpers.

Every helper records what it receives and does into an ``EventLog``
through a ``HarnessCollector``:
- **Delivery**: each notification, tagged replay or live, and the replay trim
- **Registration**: expectation batches, path subscribe/unsubscribe
- **Verification**: ordering failures raised by the waiter

All events are frozen dataclasses with nanosecond timestamps.

Quick Start:
    >>> from syncorder.observability import HarnessCollector, EventLog
    >>> collector = HarnessCollector(EventLog())
    >>> # helper = EventTestHelper(client, [...], collector=collector)
    >>> # collector.log.records(phase="live")

"""

from syncorder.observability.collector import HarnessCollector
from syncorder.observability.events import (
    EventObserved,
    ExpectationsAdded,
    HarnessEvent,
    MismatchDetected,
    PathSubscribed,
    PathUnsubscribed,
    ReplayTrimmed,
    now_ns,
)
from syncorder.observability.log import EventLog

__all__ = [
    "EventLog",
    "EventObserved",
    "ExpectationsAdded",
    "HarnessCollector",
    "HarnessEvent",
    "MismatchDetected",
    "PathSubscribed",
    "PathUnsubscribed",
    "ReplayTrimmed",
    "now_ns",
]
