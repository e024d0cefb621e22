from __future__ import annotations

from typing import Any, Callable

ServiceFactory = Callable[[], Any]


class ServiceRegistry:
    """Key/value registry of module services.

    Factories are invoked lazily on first lookup and the instance is cached, so
    modules may register in any order as long as lookups happen after startup.
    """

    def __init__(self) -> None:
        self._factories: dict[str, ServiceFactory] = {}
        self._instances: dict[str, Any] = {}

    def register(self, key: str, factory: ServiceFactory) -> None:
        if key in self._factories or key in self._instances:
            raise ValueError(f"Duplicate service registration: {key}")
        self._factories[key] = factory

    def register_if_missing(self, key: str, factory: ServiceFactory) -> None:
        if not self.has(key):
            self._factories[key] = factory

    def set(self, key: str, instance: Any) -> None:
        self._factories.pop(key, None)
        self._instances[key] = instance

    def has(self, key: str) -> bool:
        return key in self._instances or key in self._factories

    def get(self, key: str) -> Any:
        if key in self._instances:
            return self._instances[key]

        factory = self._factories.get(key)
        if factory is None:
            raise KeyError(f"No service registered for key={key}")

        instance = factory()
        self._instances[key] = instance
        return instance

    def resolver(self, key: str) -> Callable[[], Any | None]:
        """Return a zero-argument callable that looks ``key`` up at call time."""

        def resolve() -> Any | None:
            if self.has(key):
                return self.get(key)
            return None

        return resolve
