"""
Native Click implementation of the root command.

Usage: svnbridge root [show|set|clear] [path]
"""

from __future__ import annotations

import click

from ...config import config_set
from ..context import SvnBridgeContext
from ..decorators import handle_errors


@click.group("root", invoke_without_command=True)
@click.pass_context
def root(ctx: click.Context) -> None:
    """Show or override the working-copy root.

    \b
    Examples:
        svnbridge root show src/app.py   # Which root would be used
        svnbridge root set ../checkout   # Always use this working copy
        svnbridge root clear             # Back to detection
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@root.command("show")
@click.argument("path", required=False)
@click.pass_obj
@handle_errors
def root_show(ctx: SvnBridgeContext, path: str | None) -> None:
    """Show the working-copy root resolved for PATH (default: cwd)."""
    resolved = ctx.session.resolve_root(ctx.resolve_path(path))
    click.echo(f"Root:   {resolved.path}")
    click.echo(f"Origin: {resolved.origin.value}")


@root.command("set")
@click.argument("path")
@click.pass_obj
@handle_errors
def root_set(ctx: SvnBridgeContext, path: str) -> None:
    """Use PATH as the working-copy root for every command."""
    custom = ctx.session.set_custom_root(ctx.resolve_path(path))
    config_path, _ = config_set("roots.custom_root", custom.path, start_dir=str(ctx.cwd))
    click.echo(f"Custom root set to {custom.path}")
    click.echo(f"Saved to {config_path}")


@root.command("clear")
@click.pass_obj
@handle_errors
def root_clear(ctx: SvnBridgeContext) -> None:
    """Remove the custom root and go back to detection."""
    ctx.session.clear_custom_root()
    config_set("roots.custom_root", "", start_dir=str(ctx.cwd))
    click.echo("Custom root cleared")
