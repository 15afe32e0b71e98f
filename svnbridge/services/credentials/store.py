"""
In-process credential store.

Hosts with a real secret store (OS keychain, editor secrets) implement
ICredentialStore themselves; this implementation keeps credentials in
memory for the CLI session and for tests.
"""

from __future__ import annotations

import threading

from ...core.interfaces.credentials import ICredentialStore
from ...core.models.credentials import Credential
from ...utils.svn_url import is_related_url, normalize_svn_url, url_distance


class InMemoryCredentialStore(ICredentialStore):
    """Credential store keyed by the repository URL they were saved under."""

    def __init__(self, credentials: list[Credential] | None = None) -> None:
        self._lock = threading.Lock()
        self._credentials: dict[str, Credential] = {}
        for credential in credentials or []:
            self._credentials[credential.server_url] = credential

    def get(self, url: str) -> Credential | None:
        with self._lock:
            exact = self._credentials.get(url)
            if exact is not None:
                return exact

            normalized = normalize_svn_url(url)
            for stored_url, credential in self._credentials.items():
                if normalize_svn_url(stored_url) == normalized:
                    return credential

            related = [
                (url_distance(url, stored_url), stored_url)
                for stored_url in self._credentials
                if is_related_url(url, stored_url)
            ]
            if not related:
                return None
            related.sort()
            return self._credentials[related[0][1]]

    def save(
        self,
        url: str,
        username: str,
        password: str,
        description: str | None = None,
    ) -> None:
        credential = Credential(
            username=username,
            password=password,
            server_url=url,
            description=description,
        )
        with self._lock:
            self._credentials[url] = credential

    def remove(self, url: str) -> None:
        with self._lock:
            self._credentials.pop(url, None)

    def update_last_used(self, url: str) -> None:
        with self._lock:
            credential = self._credentials.get(url)
            if credential is not None:
                credential.touch()

    def list_urls(self) -> list[str]:
        with self._lock:
            return sorted(self._credentials)

    def clear(self) -> None:
        """Forget every stored credential."""
        with self._lock:
            self._credentials.clear()
