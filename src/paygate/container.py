"""Minimal composition root.

Hosts with their own dependency-injection setup can hand the provider any
object with a resolve(type) method; ServiceContainer is the default used by
GatewaySetup.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ServiceResolver(Protocol):
    """Resolves an instance for a registered type."""

    def resolve(self, service_type: type[T]) -> T | None:
        """Return the instance for service_type, None if it cannot be resolved."""
        ...


class ServiceContainer:
    """Singleton factories keyed by type.

    Each factory runs at most once; the instance is cached for the life of
    the container. A factory returning None is treated as unresolvable.
    Factories may resolve their own dependencies from the same container.
    """

    def __init__(self) -> None:
        self._factories: dict[type[Any], Callable[[], Any]] = {}
        self._instances: dict[type[Any], Any] = {}
        self._lock = threading.RLock()

    def register(self, service_type: type[T], factory: Callable[[], T | None]) -> None:
        if service_type is None or factory is None:
            raise ValueError("service_type and factory are required")
        with self._lock:
            self._factories[service_type] = factory
            self._instances.pop(service_type, None)

    def register_instance(self, service_type: type[T], instance: T) -> None:
        self.register(service_type, lambda: instance)

    def is_registered(self, service_type: type[Any]) -> bool:
        return service_type in self._factories

    def resolve(self, service_type: type[T]) -> T | None:
        with self._lock:
            if service_type in self._instances:
                return self._instances[service_type]
            factory = self._factories.get(service_type)
            if factory is None:
                logger.debug("No factory registered for %s", service_type.__name__)
                return None
            instance = factory()
            if instance is not None:
                self._instances[service_type] = instance
            return instance
