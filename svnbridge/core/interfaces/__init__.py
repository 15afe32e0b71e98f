"""
Interface definitions for svnbridge's collaborators.

These define the contracts that host integrations implement, enabling
dependency inversion between the engine and the UI/storage layers.
"""

from .credentials import ICredentialStore
from .logger import ILogger
from .observer import IOutputObserver, Stream
from .prompts import ConflictChoice, ConflictContext, IAuthPrompt, IConflictPrompt

__all__ = [
    "ConflictChoice",
    "ConflictContext",
    "IAuthPrompt",
    "IConflictPrompt",
    "ICredentialStore",
    "ILogger",
    "IOutputObserver",
    "Stream",
]
