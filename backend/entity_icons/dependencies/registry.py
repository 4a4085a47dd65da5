# backend/entity_icons/dependencies/registry.py
"""
Service Registry for managing singleton services.

Services are created lazily from registered factories and cached for the
lifetime of the process.
"""

from threading import Lock
from typing import Any, Callable, Dict


class ServiceRegistry:
    """Thread-safe singleton service registry."""

    def __init__(self) -> None:
        self._services: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._lock = Lock()

    def register_factory(self, service_name: str, factory: Callable[[], Any]) -> None:
        """
        Register a factory function for creating a service.

        Args:
            service_name: Unique name for the service
            factory: Factory function that creates the service
        """
        with self._lock:
            self._factories[service_name] = factory

    def get_service(self, service_name: str) -> Any:
        """
        Get a service instance, creating it if necessary.

        Factories may themselves resolve other services, so the factory runs
        outside the lock.

        Raises:
            KeyError: If no factory is registered for the service
        """
        with self._lock:
            if service_name in self._services:
                return self._services[service_name]
            if service_name not in self._factories:
                raise KeyError(f"No factory registered for service: {service_name}")
            factory = self._factories[service_name]

        instance = factory()

        with self._lock:
            # Another thread may have won the race while the factory ran
            return self._services.setdefault(service_name, instance)


# Global service registry instance
_service_registry = ServiceRegistry()


def register_singleton_factory(service_name: str, factory: Callable[[], Any]) -> None:
    _service_registry.register_factory(service_name, factory)


def get_singleton_service(service_name: str) -> Any:
    return _service_registry.get_service(service_name)
