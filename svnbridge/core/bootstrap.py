"""
Application bootstrap for svnbridge.

Initializes the DI container with the core services.
This module should be called once at application startup.
"""

from __future__ import annotations

from pathlib import Path

from .container import ServiceContainer, get_container
from .interfaces.credentials import ICredentialStore
from .interfaces.logger import ILogger
from .settings import SvnBridgeSettings, load_settings

_initialized = False


def bootstrap(start_dir: str | None = None, config_path: Path | None = None) -> ServiceContainer:
    """
    Bootstrap the svnbridge application.

    Registers settings, the logger and the default credential store. Hosts
    register their own IAuthPrompt/IConflictPrompt (the CLI does so in its
    context) or override any of the defaults afterwards.

    Args:
        start_dir: Directory to search for configuration from
        config_path: Explicit configuration file

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, start_dir, config_path)

    _initialized = True
    return container


def _register_core_services(
    container: ServiceContainer,
    start_dir: str | None,
    config_path: Path | None,
) -> None:
    """Register core application services."""
    from ..services.credentials.store import InMemoryCredentialStore
    from ..services.logging import SvnBridgeLogger

    settings = load_settings(config_path=config_path, start_dir=start_dir)
    container.register_singleton(SvnBridgeSettings, implementation=settings)

    def create_logger() -> ILogger:
        return SvnBridgeLogger(
            level=settings.logging.level,
            console_enabled=settings.logging.console,
            file_enabled=settings.logging.file,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]
    container.register_singleton(
        ICredentialStore,  # type: ignore[type-abstract]
        factory=InMemoryCredentialStore,
    )

    if settings.config_error:
        container.resolve(ILogger).warning("Using defaults: %s", settings.config_error)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
