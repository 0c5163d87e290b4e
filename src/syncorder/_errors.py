"""Syncorder error hierarchy.

All syncorder-specific errors inherit from SyncOrderError for easy catching.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from syncorder.events import EventRecord


class SyncOrderError(Exception):
    """Base error for all syncorder operations."""


class ConfigError(SyncOrderError):
    """Invalid or missing configuration."""


class RegistrationError(SyncOrderError):
    """Malformed expectation entry passed to ``add_expected_events``."""


class EventOrderError(SyncOrderError, AssertionError):
    """Observed events diverged from the expected sequence.

    Raised by the waiter either for a positional mismatch inside the
    overlapping prefix or for an extra event past the end of the
    expectations.  The message is self-contained: label, index, and both
    sides rendered as ``{path: P, event:[kind, key]}``.

    Attributes:
        label: Helper label, or None.
        index: Position in the actual queue where verification failed.
        expected: The expected record at ``index`` (None for extra events).
        actual: The observed record at ``index``.

    """

    def __init__(
        self,
        index: int,
        actual: EventRecord,
        expected: EventRecord | None = None,
        *,
        label: str | None = None,
    ) -> None:
        self.label = label
        self.index = index
        self.expected = expected
        self.actual = actual
        prefix = f"{label}: " if label else ""
        if expected is None:
            msg = f"{prefix}Extra event detected '{actual}'."
        else:
            msg = f"{prefix}Event {index} incorrect. Expected: {expected} Actual: {actual}"
        super().__init__(msg)

    @property
    def extra(self) -> bool:
        """True when the failure is an unexpected trailing event."""
        return self.expected is None
