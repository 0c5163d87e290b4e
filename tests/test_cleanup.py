"""Tests for syncorder.cleanup — the unregister sweep."""

from __future__ import annotations

import pytest

from syncorder import cleanup
from syncorder.cleanup import CleanupRegistry, event_cleanup


class TestCleanupRegistry:
    """Handlers run in order, once, and the registry empties."""

    def test_drain_runs_in_registration_order(self) -> None:
        calls: list[str] = []
        registry = CleanupRegistry()
        registry.register(lambda: calls.append("first"))
        registry.register(lambda: calls.append("second"))

        assert registry.drain() == 2
        assert calls == ["first", "second"]

    def test_drain_empties(self) -> None:
        calls: list[int] = []
        registry = CleanupRegistry()
        registry.register(lambda: calls.append(1))
        registry.drain()

        assert len(registry) == 0
        assert registry.drain() == 0
        assert calls == [1]

    def test_failing_handler_does_not_stop_sweep(self) -> None:
        calls: list[str] = []

        def boom() -> None:
            raise RuntimeError("boom")

        registry = CleanupRegistry()
        registry.register(boom)
        registry.register(lambda: calls.append("after"))

        with pytest.raises(RuntimeError, match="boom"):
            registry.drain()

        assert calls == ["after"]
        assert len(registry) == 0

    def test_registries_are_independent(self) -> None:
        a, b = CleanupRegistry(), CleanupRegistry()
        a.register(lambda: None)
        assert len(a) == 1
        assert len(b) == 0


class TestEventCleanup:
    def test_drains_default_registry(self, monkeypatch: pytest.MonkeyPatch) -> None:
        registry = CleanupRegistry()
        monkeypatch.setattr(cleanup, "default_registry", registry)
        calls: list[int] = []
        registry.register(lambda: calls.append(1))

        assert event_cleanup() == 1
        assert calls == [1]

    def test_drains_given_registry(self) -> None:
        registry = CleanupRegistry()
        registry.register(lambda: None)
        assert event_cleanup(registry) == 1
        assert len(registry) == 0
