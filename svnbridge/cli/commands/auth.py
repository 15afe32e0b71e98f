"""
Native Click implementation of the auth command.

Usage: svnbridge auth test URL [--username U]
"""

from __future__ import annotations

import click

from ..context import SvnBridgeContext
from ..decorators import handle_errors


@click.group("auth", invoke_without_command=True)
@click.pass_context
def auth(ctx: click.Context) -> None:
    """Check repository access.

    \b
    Examples:
        svnbridge auth test https://svn.example.com/repo
        svnbridge auth test https://svn.example.com/repo --username alice
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@auth.command("test")
@click.argument("url")
@click.option("--username", help="Username to validate")
@click.option("--password", help="Password (prompted when --username is given)")
@click.pass_obj
@handle_errors
def auth_test(ctx: SvnBridgeContext, url: str, username: str | None, password: str | None) -> None:
    """Test the connection to URL."""
    if username and password is None:
        if not ctx.is_interactive:
            raise click.UsageError("--password is required when not running on a terminal")
        password = click.prompt("Password", hide_input=True)

    click.echo(f"Testing connection to {url}...")
    result = ctx.session.test_connection(url, username, password)
    click.echo(result.message)
    if not result.success:
        raise SystemExit(1)
