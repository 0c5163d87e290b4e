"""Harness collector — records what a helper saw into an event log.

The resolver and helper call one ``record_*`` method per occurrence;
the collector stamps each with a monotonic timestamp and appends it to
its ``EventLog``.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

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

if TYPE_CHECKING:
    from syncorder._errors import EventOrderError
    from syncorder.events import EventRecord


class HarnessCollector:
    """Event collector for one or more helpers.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Delivery -----

    def record_observed(self, record: EventRecord, *, live: bool, position: int) -> None:
        """Record a notification appended to the actual queue."""
        self._log.append(
            EventObserved(
                record=record,
                phase="live" if live else "replay",
                position=position,
                timestamp_ns=now_ns(),
            )
        )

    def record_trim(self, count: int, *, remaining: int, interleaved_live: int = 0) -> None:
        """Record the replay trim."""
        self._log.append(
            ReplayTrimmed(
                count=count,
                remaining=remaining,
                interleaved_live=interleaved_live,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Registration -----

    def record_expectations(self, count: int, *, total: int) -> None:
        """Record a batch of expectations."""
        self._log.append(ExpectationsAdded(count=count, total=total, timestamp_ns=now_ns()))

    def record_subscribe(self, path: str, *, order: int) -> None:
        """Record a path listener being attached."""
        self._log.append(PathSubscribed(path=path, order=order, timestamp_ns=now_ns()))

    def record_unsubscribe(self, path: str) -> None:
        """Record a path listener being detached."""
        self._log.append(PathUnsubscribed(path=path, timestamp_ns=now_ns()))

    # ----- Verification -----

    def record_mismatch(self, error: EventOrderError) -> None:
        """Record an ordering failure raised by the waiter."""
        self._log.append(
            MismatchDetected(
                index=error.index,
                message=str(error),
                extra=error.extra,
                timestamp_ns=now_ns(),
            )
        )
