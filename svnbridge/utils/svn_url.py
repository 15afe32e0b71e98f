"""
Subversion repository URL utilities.

Normalizes repository URLs for comparison and decides whether a stored
credential URL is related to the URL of a working copy.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def is_url(value: str) -> bool:
    """
    Check if a command operand is a URL rather than a local path.

    Examples:
        https://svn.example.com/repo   -> True
        svn+ssh://host/repo            -> True
        file:///srv/svn/repo           -> True
        docs/file@2.txt                -> False

    Args:
        value: Command operand

    Returns:
        True if the operand carries a URL scheme
    """
    return bool(_SCHEME_RE.match(value))


def normalize_svn_url(url: str) -> str:
    """
    Normalize a repository URL to a canonical form for comparison.

    Lower-cases scheme and host, drops any ``user@`` part and strips a
    trailing slash from the path.

    Examples:
        HTTPS://SVN.example.com/repo/  -> https://svn.example.com/repo
        svn+ssh://me@host/repo         -> svn+ssh://host/repo

    Args:
        url: Repository URL

    Returns:
        Normalized URL string
    """
    url = url.strip()
    if not is_url(url):
        return url.rstrip("/")

    parts = urlsplit(url)
    host = (parts.hostname or "").lower()
    if parts.port:
        host = f"{host}:{parts.port}"
    path = parts.path.rstrip("/")
    return f"{parts.scheme.lower()}://{host}{path}"


def split_svn_url(url: str) -> tuple[str, str, str] | None:
    """
    Split a repository URL into (scheme, host, path).

    Returns:
        The components of the normalized URL, or None if it is not a URL
    """
    normalized = normalize_svn_url(url)
    if not is_url(normalized):
        return None
    parts = urlsplit(normalized)
    host = parts.netloc
    return parts.scheme, host, parts.path


def urls_match(url1: str, url2: str) -> bool:
    """
    Check if two repository URLs are the same location.

    Args:
        url1: First repository URL
        url2: Second repository URL

    Returns:
        True if both URLs normalize to the same value
    """
    return normalize_svn_url(url1) == normalize_svn_url(url2)


def _path_is_prefix(prefix: str, path: str) -> bool:
    if prefix == path or prefix == "":
        return True
    return path.startswith(prefix + "/")


def is_related_url(target_url: str, stored_url: str) -> bool:
    """
    Check whether a stored credential URL applies to a target URL.

    Scheme and host must agree; the stored path must then be an ancestor
    of the target path (a parent project's credential) or a descendant
    of it (a sub-project's credential). Prefixes are compared by path
    component, so ``/repo/pro`` is unrelated to ``/repo/project``.

    Args:
        target_url: URL of the working copy being accessed
        stored_url: URL a credential was saved under

    Returns:
        True if the URLs match exactly or are path-related
    """
    if urls_match(target_url, stored_url):
        return True

    target = split_svn_url(target_url)
    stored = split_svn_url(stored_url)
    if target is None or stored is None:
        return False

    if target[0] != stored[0] or target[1] != stored[1]:
        return False

    return _path_is_prefix(stored[2], target[2]) or _path_is_prefix(target[2], stored[2])


def url_distance(target_url: str, stored_url: str) -> int:
    """
    Number of path components separating two related URLs.

    Used to prefer the closest stored credential when several match.
    """
    target = split_svn_url(target_url)
    stored = split_svn_url(stored_url)
    if target is None or stored is None:
        return 0
    target_parts = [p for p in target[2].split("/") if p]
    stored_parts = [p for p in stored[2].split("/") if p]
    return abs(len(target_parts) - len(stored_parts))
