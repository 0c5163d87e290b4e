"""pytest integration — one cleanup sweep per test.

Registered through the ``pytest11`` entry point, so installing syncorder
makes these fixtures available everywhere:

- ``event_registry``: a fresh ``CleanupRegistry``, drained at teardown.
- ``event_helper``: builds ``EventTestHelper`` objects bound to it.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from syncorder.cleanup import CleanupRegistry
from syncorder.harness import EventTestHelper

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from syncorder._types import ExpectedEvent, SyncClient


@pytest.fixture
def event_registry() -> Iterator[CleanupRegistry]:
    registry = CleanupRegistry()
    yield registry
    registry.drain()


@pytest.fixture
def event_helper(
    event_registry: CleanupRegistry,
) -> Callable[..., EventTestHelper]:
    """Factory: ``event_helper(client, entries, label=None, **kwargs)``."""

    def make(
        client: SyncClient,
        path_and_events: Sequence[ExpectedEvent] = (),
        label: str | None = None,
        **kwargs: Any,
    ) -> EventTestHelper:
        kwargs.setdefault("registry", event_registry)
        return EventTestHelper(client, path_and_events, label, **kwargs)

    return make
