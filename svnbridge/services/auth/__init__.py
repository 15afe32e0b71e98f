"""Authentication recovery for svn commands."""

from .coordinator import AuthAttemptState, AuthenticationCoordinator, AuthState
from .signatures import describe_failure, is_auth_failure

__all__ = [
    "AuthAttemptState",
    "AuthState",
    "AuthenticationCoordinator",
    "describe_failure",
    "is_auth_failure",
]
