"""Event record model.

Every notification delivered by the realtime client is reduced to an
``EventRecord``, a ``(path, kind, key)`` triple that compares by value.
Expectations written by a test are normalized into the same shape, so the
waiter only ever compares records.

The reference a record is filed under depends on its kind: ``value``
snapshots are filed under their own reference, child events under the
parent that was subscribed.  ``resolve_reference`` is the single place
that rule lives.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from syncorder._errors import RegistrationError

if TYPE_CHECKING:
    from syncorder._types import EventKey, RawPath, Reference, Snapshot


class EventKind(StrEnum):
    """Notification kinds delivered by the realtime client."""

    VALUE = "value"
    CHILD_ADDED = "child_added"
    CHILD_REMOVED = "child_removed"
    CHILD_MOVED = "child_moved"
    CHILD_CHANGED = "child_changed"

    @property
    def uses_own_reference(self) -> bool:
        """True if snapshots of this kind are filed under their own reference."""
        return self is EventKind.VALUE

    @classmethod
    def parse(cls, value: EventKind | str) -> EventKind:
        """Coerce a kind name to ``EventKind``.

        Raises:
            RegistrationError: If ``value`` names no known kind.

        """
        try:
            return cls(value)
        except ValueError:
            msg = f"Unknown event kind {value!r}; expected one of {', '.join(cls)}"
            raise RegistrationError(msg) from None


# Subscription order for a path listener.  Value goes last so that the
# client replays existing children before the value that ends the replay.
LISTEN_ORDER: tuple[EventKind, ...] = (
    EventKind.CHILD_REMOVED,
    EventKind.CHILD_ADDED,
    EventKind.CHILD_MOVED,
    EventKind.CHILD_CHANGED,
    EventKind.VALUE,
)


def resolve_reference(snapshot: Snapshot, kind: EventKind) -> Reference:
    """Return the reference a snapshot of ``kind`` was delivered for."""
    if kind.uses_own_reference:
        return snapshot.ref
    parent = snapshot.ref.parent
    if parent is None:
        msg = f"{kind} snapshot at {snapshot.ref} has no parent reference"
        raise ValueError(msg)
    return parent


def raw_path(ref: Reference | str, root_url: str = "") -> RawPath:
    """Strip the shared connection root from a reference's string form."""
    text = str(ref)
    if root_url and text.startswith(root_url):
        return text[len(root_url):]
    return text


@dataclass(frozen=True, slots=True)
class EventRecord:
    """One observed (or expected) notification.

    Attributes:
        path: Raw path of the reference the event was filed under.
        kind: Notification kind.
        key: Child key for child events; the node's own key for value.

    """

    path: RawPath
    kind: EventKind
    key: EventKey = None

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Snapshot,
        kind: EventKind,
        root_url: str = "",
    ) -> EventRecord:
        ref = resolve_reference(snapshot, kind)
        return cls(path=raw_path(ref, root_url), kind=kind, key=snapshot.key)

    def __str__(self) -> str:
        return f"{{path: {self.path}, event:[{self.kind}, {self.key}]}}"
