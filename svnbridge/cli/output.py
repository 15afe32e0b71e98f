"""
Terminal output helpers shared by CLI commands.
"""

from __future__ import annotations

import click

from ..core.interfaces.observer import IOutputObserver, Stream
from ..core.models.command import CommandResult


class EchoObserver(IOutputObserver):
    """Streams svn output to the terminal as it arrives."""

    def on_output(self, stream: Stream, text: str) -> None:
        click.echo(text, nl=False, err=stream == "stderr")


def echo_result(result: CommandResult) -> None:
    """Print a finished command's output."""
    if result.stdout:
        click.echo(result.stdout, nl=not result.stdout.endswith("\n"))
    if result.stderr:
        click.echo(result.stderr, nl=not result.stderr.endswith("\n"), err=True)


def echo_progress(message: str, percent: int) -> None:
    click.echo(f"[{percent:3d}%] {message}")
