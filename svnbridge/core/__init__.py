"""
Core infrastructure for svnbridge.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Interface definitions for the host collaborators
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container
from .di import default_logger, resolve_or_default, try_resolve
from .exceptions import (
    AuthenticationFailedError,
    AuthenticationRequiredError,
    CommandTimeoutError,
    ConfigFileError,
    ConfigValidationError,
    EncodingRecoveryError,
    ExecutionError,
    InternalContractError,
    PathNotFoundError,
    RootResolutionError,
    StaleWorkingCopyError,
    SvnBridgeAuthError,
    SvnBridgeConfigError,
    SvnBridgeException,
    SvnBridgeExecutionError,
    SvnBridgeResolutionError,
    SvnNotFoundError,
    UserCancelledAuthError,
)

__all__ = [
    "AuthenticationFailedError",
    "AuthenticationRequiredError",
    "CommandTimeoutError",
    "ConfigFileError",
    "ConfigValidationError",
    "EncodingRecoveryError",
    "ExecutionError",
    "InternalContractError",
    "PathNotFoundError",
    "RootResolutionError",
    "ServiceContainer",
    "StaleWorkingCopyError",
    "SvnBridgeAuthError",
    "SvnBridgeConfigError",
    "SvnBridgeException",
    "SvnBridgeExecutionError",
    "SvnBridgeResolutionError",
    "SvnNotFoundError",
    "UserCancelledAuthError",
    "bootstrap",
    "default_logger",
    "get_container",
    "is_initialized",
    "reset",
    "resolve_or_default",
    "try_resolve",
]
