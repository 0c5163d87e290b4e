"""Initialization tracker — separates replay events from live events.

After subscribing, the client replays existing state for a path (child
events, then a ``value``) before any live update.  Every event on a path
that has not yet seen its ``value`` counts as replay; the ``value`` ends
the replay for that path.  Once every tracked path is initialized the
helper trims the counted replay events off the tail of the actual queue.

The trim assumes replay events sit contiguously at the tail.  A live event
delivered on one path while another is still replaying breaks that
assumption; the tracker counts those in ``interleaved_live_events`` so the
helper can warn, but does not try to repair the queue.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from syncorder.events import EventKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from syncorder._types import PathKey
    from syncorder.listener import PathListener


@dataclass(slots=True)
class PathState:
    """Bookkeeping for one subscribed path.

    Attributes:
        listener: The path's listener.
        initialized: True once the path's replay ``value`` arrived.

    """

    listener: PathListener
    initialized: bool = False

    def unlisten(self) -> None:
        self.listener.unlisten()


class InitializationTracker:
    """Per-path replay/live state plus the global replay counter."""

    __slots__ = ("_paths", "initialization_events", "interleaved_live_events")

    def __init__(self) -> None:
        self._paths: dict[PathKey, PathState] = {}
        self.initialization_events = 0
        self.interleaved_live_events = 0

    def __contains__(self, path_key: object) -> bool:
        return path_key in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[PathKey]:
        return iter(self._paths)

    def track(self, path_key: PathKey, listener: PathListener) -> PathState:
        """Start tracking ``path_key`` in the uninitialized state."""
        if path_key in self._paths:
            msg = f"{path_key} is already tracked"
            raise ValueError(msg)
        state = PathState(listener=listener)
        self._paths[path_key] = state
        return state

    def state(self, path_key: PathKey) -> PathState:
        return self._paths[path_key]

    def observe(self, path_key: PathKey, kind: EventKind) -> bool:
        """Account for one delivered event.  Returns True if it was live."""
        state = self._paths[path_key]
        if not state.initialized:
            self.initialization_events += 1
            if kind is EventKind.VALUE:
                state.initialized = True
            return False
        if not self.all_initialized:
            self.interleaved_live_events += 1
        return True

    @property
    def all_initialized(self) -> bool:
        return all(state.initialized for state in self._paths.values())

    @property
    def uninitialized(self) -> list[PathKey]:
        """Paths still replaying, in subscription order."""
        return [key for key, state in self._paths.items() if not state.initialized]

    def take_replay_count(self) -> int:
        """Return the replay counter and reset it to zero."""
        count, self.initialization_events = self.initialization_events, 0
        return count

    def take_interleaved_count(self) -> int:
        """Return the interleaved-live counter and reset it to zero."""
        count, self.interleaved_live_events = self.interleaved_live_events, 0
        return count

    def unlisten_all(self) -> list[PathKey]:
        """Detach every active listener and return the detached path keys."""
        detached: list[PathKey] = []
        for path_key, state in self._paths.items():
            if state.listener.active:
                state.unlisten()
                detached.append(path_key)
        return detached
