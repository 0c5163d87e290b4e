"""Syncorder — event-ordering assertions for realtime-sync clients.

Declare the exact sequence of notifications (value, child_added,
child_removed, child_moved, child_changed) you expect across one or more
watched paths, then poll until it has arrived.  The first out-of-order or
unexpected event fails immediately with the position and both sides.

Quick start::

    from syncorder import EventTestHelper, CleanupRegistry

    registry = CleanupRegistry()
    helper = EventTestHelper(client, [
        (ref, ("child_added", "a")),
        (ref, ("value",)),
    ], "my test", registry=registry)

    wait_until(helper.watches_initialized_waiter)
    ...  # write through the client
    wait_until(helper.waiter)
    registry.drain()

"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from syncorder._errors import EventOrderError
    from syncorder.cleanup import CleanupRegistry, event_cleanup
    from syncorder.config import HarnessConfig
    from syncorder.events import EventKind, EventRecord
    from syncorder.harness import EventTestHelper, event_test_helper

__version__ = "0.1.0"
__all__ = [
    "CleanupRegistry",
    "EventKind",
    "EventOrderError",
    "EventRecord",
    "EventTestHelper",
    "HarnessConfig",
    "__version__",
    "event_cleanup",
    "event_test_helper",
]

_LAZY = {
    "CleanupRegistry": "syncorder.cleanup",
    "event_cleanup": "syncorder.cleanup",
    "EventOrderError": "syncorder._errors",
    "EventKind": "syncorder.events",
    "EventRecord": "syncorder.events",
    "EventTestHelper": "syncorder.harness",
    "event_test_helper": "syncorder.harness",
    "HarnessConfig": "syncorder.config",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import syncorder`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
