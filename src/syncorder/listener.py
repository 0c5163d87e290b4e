"""Path listener — one subscription per event kind on a single reference.

Each callback normalizes its snapshot into an ``EventRecord`` and hands it
to the sink together with ``str(ref)``, the key the resolver tracks the
path under.  Delivery failures belong to the client; the listener only
forwards.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from syncorder.events import LISTEN_ORDER, EventKind, EventRecord

if TYPE_CHECKING:
    from collections.abc import Callable

    from syncorder._types import EventSink, Reference, Snapshot, SnapshotCallback, SyncClient

logger = logging.getLogger(__name__)


class PathListener:
    """Subscribes one reference to all five event kinds.

    Args:
        client: The realtime client to subscribe through.
        ref: Reference to watch.
        sink: Receives ``(path_key, record)`` for every notification.
        root_url: Connection root stripped from record paths.

    """

    __slots__ = ("_callbacks", "_client", "_ref", "_root_url", "_sink", "path_key")

    def __init__(
        self,
        client: SyncClient,
        ref: Reference,
        sink: EventSink,
        *,
        root_url: str = "",
    ) -> None:
        self._client = client
        self._ref = ref
        self._sink = sink
        self._root_url = root_url
        self._callbacks: dict[EventKind, SnapshotCallback] = {}
        self.path_key = str(ref)

    @property
    def ref(self) -> Reference:
        return self._ref

    @property
    def active(self) -> bool:
        """True between ``listen()`` and ``unlisten()``."""
        return bool(self._callbacks)

    def _make_callback(self, kind: EventKind) -> SnapshotCallback:
        def on_event(snapshot: Snapshot) -> None:
            record = EventRecord.from_snapshot(snapshot, kind, self._root_url)
            self._sink(self.path_key, record)

        return on_event

    def listen(self) -> None:
        """Attach one callback per kind.  Calling twice is a no-op."""
        if self._callbacks:
            return
        logger.debug("listening on %s", self.path_key)
        for kind in LISTEN_ORDER:
            callback = self._make_callback(kind)
            # Registered before subscribing: clients may replay synchronously.
            self._callbacks[kind] = callback
            self._client.subscribe(self._ref, kind, callback)

    def unlisten(self) -> None:
        """Detach every callback.  Calling twice is a no-op."""
        if not self._callbacks:
            return
        logger.debug("unlistening on %s", self.path_key)
        callbacks, self._callbacks = self._callbacks, {}
        for kind, callback in callbacks.items():
            self._client.unsubscribe(self._ref, kind, callback)


def listen_on_path(
    client: SyncClient,
    ref: Reference,
    sink: EventSink,
    *,
    root_url: str = "",
) -> Callable[[], None]:
    """Listen on ``ref`` and return the action that detaches it."""
    listener = PathListener(client, ref, sink, root_url=root_url)
    listener.listen()
    return listener.unlisten
