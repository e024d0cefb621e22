from __future__ import annotations

import pytest

from pitchside.core.registry import ServiceRegistry


def test_factories_are_invoked_lazily_and_cached() -> None:
    registry = ServiceRegistry()
    calls: list[int] = []

    def factory() -> object:
        calls.append(1)
        return object()

    registry.register("svc", factory)
    assert calls == []

    first = registry.get("svc")
    second = registry.get("svc")
    assert first is second
    assert calls == [1]


def test_duplicate_registration_rejected_and_register_if_missing_is_noop() -> None:
    registry = ServiceRegistry()
    registry.register("svc", lambda: "a")

    with pytest.raises(ValueError):
        registry.register("svc", lambda: "b")

    registry.register_if_missing("svc", lambda: "b")
    assert registry.get("svc") == "a"


def test_resolver_defers_lookup() -> None:
    registry = ServiceRegistry()
    resolve = registry.resolver("late")

    assert resolve() is None

    registry.set("late", "ready")
    assert resolve() == "ready"


def test_get_unknown_key_raises() -> None:
    with pytest.raises(KeyError):
        ServiceRegistry().get("missing")
