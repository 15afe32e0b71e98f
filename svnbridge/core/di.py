"""
Dependency injection helpers for svnbridge.

Engine services accept their collaborators as constructor arguments and
fall back to whatever the host registered in the container, so a bare
``SvnSession()`` works inside a bootstrapped CLI as well as in tests that
never touch the container.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from .interfaces.logger import ILogger

T = TypeVar("T")


def resolve_or_default(
    interface: type[T],
    default_factory: Callable[[], T],
) -> T:
    """Resolve a service from the container or create a default.

    Args:
        interface: The interface type to resolve
        default_factory: Callable that creates the default implementation

    Returns:
        Resolved service instance or default
    """
    from .container import get_container

    instance = get_container().try_resolve(interface)
    if instance is not None:
        return instance
    return default_factory()


def try_resolve(interface: type[T]) -> T | None:
    """Try to resolve a service from the container.

    Used for optional host collaborators (credential store, prompts):
    None means the host did not provide one.
    """
    from .container import get_container

    return get_container().try_resolve(interface)


def default_logger() -> ILogger:
    """The bootstrapped diagnostic logger, or a NullLogger before bootstrap.

    Example:
        >>> class RootResolver:
        ...     @property
        ...     def logger(self):
        ...         if self._logger is None:
        ...             self._logger = default_logger()
        ...         return self._logger
    """
    from ..services.logging import NullLogger
    from .interfaces.logger import ILogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
