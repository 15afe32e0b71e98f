"""
Credential models exchanged with the credential store and auth prompt.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import ConfigDict, Field, SecretStr

from .base import ImmutableModel, SvnBridgeBaseModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Credential(SvnBridgeBaseModel):
    """Username/password pair bound to a repository URL.

    Passwords are held as ``SecretStr`` so they never show up in reprs or
    log lines; call ``password.get_secret_value()`` at the CLI boundary only.
    """

    model_config = ConfigDict(
        strict=False,  # plain str passwords are wrapped into SecretStr
        validate_assignment=True,
        extra="forbid",
    )

    username: str
    password: SecretStr
    server_url: str
    last_used: datetime = Field(default_factory=_utcnow)
    description: str | None = None

    def touch(self) -> None:
        """Record that the credential was just used successfully."""
        self.last_used = _utcnow()


class AuthPromptResult(ImmutableModel):
    """What the user typed into the credential prompt."""

    model_config = ConfigDict(frozen=True, strict=False, extra="forbid")

    username: str
    password: SecretStr
    persist: bool = False
