"""Credential storage implementations."""

from .store import InMemoryCredentialStore

__all__ = ["InMemoryCredentialStore"]
