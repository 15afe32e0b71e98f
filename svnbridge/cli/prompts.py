"""
Terminal implementations of the engine's user prompts.
"""

from __future__ import annotations

import click

from ..core.interfaces.prompts import ConflictChoice, ConflictContext, IAuthPrompt, IConflictPrompt
from ..core.models.credentials import AuthPromptResult


class ClickAuthPrompt(IAuthPrompt):
    """Asks for a username and password on the terminal."""

    def show(self, suggested_url: str) -> AuthPromptResult | None:
        click.echo(f"Authentication required for {suggested_url}", err=True)
        try:
            username = click.prompt("Username", default="", show_default=False, err=True)
            if not username:
                return None
            password = click.prompt("Password", hide_input=True, err=True)
            persist = click.confirm("Save these credentials?", default=False, err=True)
        except click.Abort:
            return None
        return AuthPromptResult(username=username, password=password, persist=persist)


class ClickConflictPrompt(IConflictPrompt):
    """Offers the stale working-copy resolutions on the terminal."""

    def show(self, context: ConflictContext) -> ConflictChoice:
        click.echo(
            f"svn {context.verb} was rejected: the working copy at "
            f"{context.working_directory} is out of date.",
            err=True,
        )
        choices = [choice.value for choice in ConflictChoice]
        try:
            answer = click.prompt(
                "Resolve",
                type=click.Choice(choices),
                default=ConflictChoice.UPDATE_AND_RETRY.value,
                err=True,
            )
        except click.Abort:
            return ConflictChoice.ABORT
        return ConflictChoice(answer)
