"""
Native Click implementations of the commands that change a working copy.

Usage:
    svnbridge add PATHS...
    svnbridge remove [--keep-local] PATHS...
    svnbridge revert PATHS...
    svnbridge update [path]
    svnbridge commit -m MESSAGE PATHS...
"""

from __future__ import annotations

import click

from ..context import SvnBridgeContext
from ..decorators import handle_errors
from ..output import EchoObserver, echo_result


@click.command("add")
@click.argument("paths", nargs=-1, required=True)
@click.pass_obj
@handle_errors
def add(ctx: SvnBridgeContext, paths: tuple[str, ...]) -> None:
    """Schedule PATHS for addition."""
    echo_result(ctx.session.add([ctx.resolve_path(p) for p in paths]))


@click.command("remove")
@click.argument("paths", nargs=-1, required=True)
@click.option("--keep-local", is_flag=True, help="Keep the files on disk")
@click.pass_obj
@handle_errors
def remove(ctx: SvnBridgeContext, paths: tuple[str, ...], keep_local: bool) -> None:
    """Schedule PATHS for deletion."""
    echo_result(ctx.session.remove([ctx.resolve_path(p) for p in paths], keep_local=keep_local))


@click.command("revert")
@click.argument("paths", nargs=-1, required=True)
@click.pass_obj
@handle_errors
def revert(ctx: SvnBridgeContext, paths: tuple[str, ...]) -> None:
    """Undo local changes to PATHS (directories recursively)."""
    echo_result(ctx.session.revert([ctx.resolve_path(p) for p in paths]))


@click.command("update")
@click.argument("path", required=False)
@click.pass_obj
@handle_errors
def update(ctx: SvnBridgeContext, path: str | None) -> None:
    """Bring PATH up to date with the repository."""
    ctx.session.update(ctx.resolve_path(path), observer=EchoObserver())


@click.command("commit")
@click.argument("paths", nargs=-1, required=True)
@click.option("-m", "--message", required=True, help="Commit message")
@click.pass_obj
@handle_errors
def commit(ctx: SvnBridgeContext, paths: tuple[str, ...], message: str) -> None:
    """Commit PATHS with one message.

    If the working copy is out of date you are offered to update and
    retry the same commit once.
    """
    outcome = ctx.session.commit([ctx.resolve_path(p) for p in paths], message, observer=EchoObserver())
    if not outcome.completed:
        click.echo("Working copy updated; nothing was committed.")
    elif outcome.retried:
        click.echo("Committed after updating the working copy.")
