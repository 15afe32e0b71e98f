"""
Native Click implementations of the read-only commands.

Usage:
    svnbridge info [path]
    svnbridge log [-l N] [path]
    svnbridge diff [path]
    svnbridge cat [-r REV] path
"""

from __future__ import annotations

import click

from ..context import SvnBridgeContext
from ..decorators import handle_errors
from ..output import echo_result


@click.command("info")
@click.argument("path", required=False)
@click.pass_obj
@handle_errors
def info(ctx: SvnBridgeContext, path: str | None) -> None:
    """Show working-copy information for PATH."""
    echo_result(ctx.session.info(ctx.resolve_path(path)))


@click.command("log")
@click.argument("path", required=False)
@click.option("-l", "--limit", type=int, default=10, show_default=True, help="Number of log entries")
@click.pass_obj
@handle_errors
def log(ctx: SvnBridgeContext, path: str | None, limit: int) -> None:
    """Show the commit log of PATH."""
    echo_result(ctx.session.log(ctx.resolve_path(path), limit=limit))


@click.command("diff")
@click.argument("path", required=False)
@click.pass_obj
@handle_errors
def diff(ctx: SvnBridgeContext, path: str | None) -> None:
    """Show local modifications of PATH."""
    echo_result(ctx.session.diff(ctx.resolve_path(path)))


@click.command("cat")
@click.argument("path")
@click.option("-r", "--revision", default="BASE", show_default=True, help="Revision to print")
@click.pass_obj
@handle_errors
def cat(ctx: SvnBridgeContext, path: str, revision: str) -> None:
    """Print the content of PATH at a revision."""
    echo_result(ctx.session.cat(ctx.resolve_path(path), revision=revision))
