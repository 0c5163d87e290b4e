"""Harness event model for observability.

Records what a helper saw and did while verifying a sequence: every
notification it received (tagged replay or live), each batch of
expectations, each subscription, the replay trim, and any mismatch.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from syncorder.events import EventRecord


# ---------------------------------------------------------------------------
# Delivery events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EventObserved:
    """A notification was appended to the actual queue.

    Attributes:
        record: The normalized record.
        phase: ``replay`` while its path was still initializing, else ``live``.
        position: Index of the record in the actual queue.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    record: EventRecord
    phase: Literal["replay", "live"]
    position: int
    timestamp_ns: int

    @property
    def path(self) -> str:
        return self.record.path


@dataclass(frozen=True, slots=True)
class ReplayTrimmed:
    """Replay events were dropped once every watched path initialized.

    Attributes:
        count: Number of records removed from the tail of the actual queue.
        remaining: Actual queue length after trimming.
        interleaved_live: Live events seen while another path was still
            replaying (non-zero means the trim may have removed live events).
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    count: int
    remaining: int
    interleaved_live: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Registration events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ExpectationsAdded:
    """A batch of expectations was appended.

    Attributes:
        count: Records in this batch.
        total: Expectation queue length after the batch.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    count: int
    total: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class PathSubscribed:
    """A path listener was attached.

    Attributes:
        path: Raw path of the subscribed reference.
        order: Zero-based subscription order within the helper.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    order: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class PathUnsubscribed:
    """A path listener was detached."""

    path: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Verification events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MismatchDetected:
    """The waiter raised an ordering failure.

    Attributes:
        index: Failing position in the actual queue.
        message: The failure message as raised.
        extra: True for an unexpected trailing event.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    index: int
    message: str
    extra: bool
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type HarnessEvent = (
    EventObserved
    | ReplayTrimmed
    | ExpectationsAdded
    | PathSubscribed
    | PathUnsubscribed
    | MismatchDetected
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
