"""Shared test fixtures for syncorder."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

ROOT_URL = "https://sync.test"


class FakeRef:
    """Reference into a FakeSyncClient tree, e.g. ``rooms/a``."""

    def __init__(self, client: FakeSyncClient, path: str) -> None:
        self.client = client
        self.path = path.strip("/")

    @property
    def key(self) -> str | None:
        if not self.path:
            return None
        return self.path.rsplit("/", 1)[-1]

    @property
    def parent(self) -> FakeRef | None:
        if not self.path:
            return None
        head, _, _ = self.path.rpartition("/")
        return FakeRef(self.client, head)

    def child(self, key: str) -> FakeRef:
        return FakeRef(self.client, f"{self.path}/{key}" if self.path else key)

    def __str__(self) -> str:
        return f"{self.client.root_url}/{self.path}"

    def __repr__(self) -> str:
        return f"FakeRef({self.path!r})"


@dataclass(frozen=True)
class FakeSnapshot:
    ref: FakeRef

    @property
    def key(self) -> str | None:
        return self.ref.key


class FakeSyncClient:
    """In-memory stand-in for a realtime-sync client.

    Records every subscribe/unsubscribe in ``calls``.  With ``replay``
    enabled, subscribing ``child_added`` delivers one event per child listed
    in ``children`` and subscribing ``value`` delivers the value, both
    synchronously, the way a client replays cached state.  ``fire`` delivers
    a live event to the callbacks on a path.
    """

    def __init__(
        self,
        children: dict[str, list[str]] | None = None,
        *,
        replay: bool = True,
        root_url: str = ROOT_URL,
    ) -> None:
        self.root_url = root_url
        self.children = children or {}
        self.replay = replay
        self.calls: list[tuple[str, str, str]] = []
        self.callbacks: dict[tuple[str, str], list[Callable[[Any], None]]] = defaultdict(list)

    def ref(self, path: str = "") -> FakeRef:
        return FakeRef(self, path)

    def subscribe(self, ref: FakeRef, kind: str, callback: Callable[[Any], None]) -> None:
        self.calls.append(("subscribe", ref.path, str(kind)))
        self.callbacks[(ref.path, str(kind))].append(callback)
        if not self.replay:
            return
        if kind == "child_added":
            for key in self.children.get(ref.path, []):
                callback(FakeSnapshot(ref.child(key)))
        elif kind == "value":
            callback(FakeSnapshot(ref))

    def unsubscribe(self, ref: FakeRef, kind: str, callback: Callable[[Any], None]) -> None:
        self.calls.append(("unsubscribe", ref.path, str(kind)))
        self.callbacks[(ref.path, str(kind))].remove(callback)

    def fire(self, path: str, kind: str, key: str | None = None) -> None:
        """Deliver a live ``kind`` event on ``path`` (``key`` names the child)."""
        ref = self.ref(path)
        snapshot = FakeSnapshot(ref if kind == "value" else ref.child(key or ""))
        for callback in list(self.callbacks[(ref.path, kind)]):
            callback(snapshot)

    def subscribed_paths(self) -> list[str]:
        """Paths in the order their first subscription was made."""
        paths: list[str] = []
        for action, path, _ in self.calls:
            if action == "subscribe" and path not in paths:
                paths.append(path)
        return paths

    @property
    def listener_count(self) -> int:
        return sum(len(cbs) for cbs in self.callbacks.values())


@pytest.fixture
def client() -> FakeSyncClient:
    return FakeSyncClient()


@pytest.fixture
def quiet_client() -> FakeSyncClient:
    """Client that never replays on subscribe."""
    return FakeSyncClient(replay=False)
