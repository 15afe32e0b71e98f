"""
Credential store interface.

The engine never persists credentials itself; it reads and writes them
through this interface. Storage mechanics (OS keychain, editor secret
storage, ...) belong to the host.
"""

from abc import ABC, abstractmethod

from ..models.credentials import Credential


class ICredentialStore(ABC):
    """
    Interface for repository credential storage.

    Implementations must honour the URL matching policy: an exact URL match
    first, then a stored URL that is an ancestor or descendant of the
    requested one under the same scheme and host.
    """

    @abstractmethod
    def get(self, url: str) -> Credential | None:
        """
        Find the credential for a repository URL.

        Args:
            url: Repository URL of the working copy

        Returns:
            Matching credential, or None
        """
        pass

    @abstractmethod
    def save(
        self,
        url: str,
        username: str,
        password: str,
        description: str | None = None,
    ) -> None:
        """Store (or replace) the credential for ``url``."""
        pass

    @abstractmethod
    def remove(self, url: str) -> None:
        """Forget the credential stored under exactly ``url``."""
        pass

    @abstractmethod
    def update_last_used(self, url: str) -> None:
        """Bump the last-used timestamp of the credential stored under ``url``."""
        pass

    def list_urls(self) -> list[str]:
        """List URLs that have a stored credential."""
        return []
