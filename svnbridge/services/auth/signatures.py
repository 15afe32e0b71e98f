"""
Error signatures recognized in svn stderr.
"""

from __future__ import annotations

# Codes and phrases svn (and localized servers) use for rejected credentials
AUTH_SIGNATURES = (
    "E170001",
    "E215004",
    "authentication failed",
    "authorization failed",
    "认证失败",
    "用户名或密码",
)

# Ordered (signatures, message) pairs used to explain a failed connection
FRIENDLY_MESSAGES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("E170001", "E215004", "authentication failed"), "Authentication failed: wrong username or password"),
    (("E170013", "unable to connect"), "Cannot connect to the SVN server: check the network and server address"),
    (("E200014", "not found"), "Repository URL does not exist: check the address"),
    (("E155000", "already a working copy"), "The target directory is already a working copy"),
    (("timeout", "timed out"), "Connection timed out: the server took too long to respond"),
    (("certificate",), "SSL certificate error: server certificate verification failed"),
)


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(needle.lower() in lowered for needle in needles)


def is_auth_failure(stderr: str) -> bool:
    """Check whether svn rejected the credentials (or needs some)."""
    return bool(stderr) and _contains_any(stderr, AUTH_SIGNATURES)


def describe_failure(stderr: str) -> str:
    """
    Turn raw svn stderr into a short explanation for the user.

    Falls back to the first non-empty stderr line.
    """
    for needles, message in FRIENDLY_MESSAGES:
        if _contains_any(stderr, needles):
            return message
    for line in stderr.splitlines():
        if line.strip():
            return line.strip()
    return "Unknown error"
