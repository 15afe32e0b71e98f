"""
Service registry for svnbridge.

Holds the host-provided collaborators (settings, logger, credential store,
prompts) behind dependency-injector providers: eager instances as
providers.Object, lazily built services as providers.ThreadSafeSingleton.
"""

import threading
from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """
    Dependency injection container for svnbridge.

    Maps interface types to dependency-injector providers.
    """

    _instance: Optional["ServiceContainer"] = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        """Initialize the container with an empty registry."""
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.ThreadSafeSingleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def is_registered(self, interface: type) -> bool:
        return interface in self._providers

    def register_if_absent(self, interface: type[T], implementation: T) -> bool:
        """
        Register ``implementation`` unless the host already provided one.

        Returns:
            True if ``implementation`` was registered
        """
        if interface in self._providers:
            return False
        self._providers[interface] = providers.Object(implementation)
        return True

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """
        Try to resolve a service, returning None if not registered.
        """
        if interface not in self._providers:
            return None
        return self._providers[interface]()


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()
