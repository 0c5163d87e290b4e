"""Comparator — checks the actual queue against the expectation queue.

Both queues are flat across every watched path.  At any point the actual
queue must be a positional prefix of the expectation queue; the first
divergence is a permanent failure.  A shorter actual queue is not a
failure, only a reason to keep waiting.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from syncorder._errors import EventOrderError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from syncorder.events import EventRecord


class EventComparator:
    """Ordered expected/actual queues with fail-fast comparison.

    Args:
        label: Prefix for failure messages.

    """

    __slots__ = ("_actual", "_expected", "label")

    def __init__(self, label: str | None = None) -> None:
        self.label = label
        self._expected: list[EventRecord] = []
        self._actual: list[EventRecord] = []

    @property
    def expected(self) -> tuple[EventRecord, ...]:
        return tuple(self._expected)

    @property
    def actual(self) -> tuple[EventRecord, ...]:
        return tuple(self._actual)

    @property
    def pending(self) -> tuple[EventRecord, ...]:
        """Expected records not yet observed."""
        return tuple(self._expected[len(self._actual):])

    def expect(self, records: Iterable[EventRecord]) -> None:
        self._expected.extend(records)

    def observe(self, record: EventRecord) -> int:
        """Append an observed record and return its position."""
        self._actual.append(record)
        return len(self._actual) - 1

    def trim_tail(self, count: int) -> list[EventRecord]:
        """Remove the last ``count`` observed records and return them."""
        if count <= 0:
            return []
        count = min(count, len(self._actual))
        removed = self._actual[-count:]
        del self._actual[-count:]
        return removed

    def check(self) -> bool:
        """Compare the queues.

        Returns:
            True when every expected record has been observed in order,
            False when the observed records so far are a strict prefix.

        Raises:
            EventOrderError: At the first mismatching position, or for the
                first observed record beyond the expectations.

        """
        expected, actual = self._expected, self._actual
        overlap = min(len(expected), len(actual))
        for i in range(overlap):
            if expected[i] != actual[i]:
                raise EventOrderError(i, actual[i], expected[i], label=self.label)

        if len(actual) > len(expected):
            raise EventOrderError(overlap, actual[overlap], label=self.label)

        return len(expected) == len(actual)
