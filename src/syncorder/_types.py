"""Shared type definitions for syncorder.

The realtime-sync client is an external collaborator.  These protocols
describe the small surface the harness needs from it; any client whose
references and snapshots duck-type to them can be observed.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from syncorder.events import EventKind, EventRecord

# Reference string with the connection root stripped (e.g., "/rooms/a")
type RawPath = str

# Child key for child events, the node's own key for value events
type EventKey = str | None

# ``str(ref)`` of a subscribed reference, used for listener bookkeeping
type PathKey = str

# One expectation as written by a test: ``(ref, (kind, key))`` or ``(ref, (kind,))``
type ExpectedEvent = tuple[Reference, Sequence[EventKind | str | None]]

# Receives every normalized notification from a path listener
type EventSink = Callable[[PathKey, EventRecord], None]


@runtime_checkable
class Reference(Protocol):
    """A path-addressed location in the synchronized tree."""

    @property
    def key(self) -> str | None: ...

    @property
    def parent(self) -> Reference | None: ...

    def __str__(self) -> str: ...


@runtime_checkable
class Snapshot(Protocol):
    """Data delivered with a notification."""

    @property
    def ref(self) -> Reference: ...

    @property
    def key(self) -> str | None: ...


type SnapshotCallback = Callable[[Snapshot], None]


class SyncClient(Protocol):
    """Subscription surface of the realtime-sync client."""

    def subscribe(self, ref: Reference, kind: str, callback: SnapshotCallback) -> None: ...

    def unsubscribe(self, ref: Reference, kind: str, callback: SnapshotCallback) -> None: ...
