"""
User interaction interfaces used by the retry coordinators.

The engine never renders UI; it asks these collaborators and reacts to the
answer. The CLI ships click-based implementations, tests use mocks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from ..models.credentials import AuthPromptResult


class ConflictChoice(str, Enum):
    """Resolutions offered when the working copy is out of date."""

    UPDATE_AND_RETRY = "update-and-retry"
    UPDATE_ONLY = "update-only"
    ABORT = "abort"


@dataclass(frozen=True)
class ConflictContext:
    """What the conflict prompt is told about the rejected operation."""

    verb: str
    working_directory: str
    targets: tuple[str, ...] = ()
    stderr: str = ""
    details: dict[str, str] = field(default_factory=dict)


class IAuthPrompt(ABC):
    """Asks the user for repository credentials."""

    @abstractmethod
    def show(self, suggested_url: str) -> AuthPromptResult | None:
        """
        Prompt for credentials.

        Args:
            suggested_url: Best-known repository URL (or path) to display

        Returns:
            The supplied credentials, or None if the user cancelled
        """
        pass


class IConflictPrompt(ABC):
    """Asks the user how to resolve a stale working copy."""

    @abstractmethod
    def show(self, context: ConflictContext) -> ConflictChoice:
        """
        Offer update-and-retry, update-only or abort.

        Args:
            context: Description of the rejected operation

        Returns:
            The chosen resolution
        """
        pass
