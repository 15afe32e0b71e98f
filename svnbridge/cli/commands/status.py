"""
Native Click implementation of the status command.

Usage: svnbridge status [--short] [path]
"""

from __future__ import annotations

import click

from ..context import SvnBridgeContext
from ..decorators import handle_errors
from ..output import echo_result


@click.command("status")
@click.argument("path", required=False)
@click.option("--short", "short", is_flag=True, help="Print a one-word status for PATH")
@click.pass_obj
@handle_errors
def status(ctx: SvnBridgeContext, path: str | None, short: bool) -> None:
    """Show working-copy changes under PATH (default: cwd)."""
    target = ctx.resolve_path(path)
    if short:
        entry = ctx.session.file_status(target)
        click.echo(entry.label)
        return
    echo_result(ctx.session.status(target))
