"""
Native Click implementation of the checkout command.

Usage: svnbridge checkout [--username U] URL TARGET
"""

from __future__ import annotations

import click

from ..context import SvnBridgeContext
from ..decorators import handle_errors
from ..output import echo_progress


@click.command("checkout")
@click.argument("url")
@click.argument("target")
@click.option("--username", help="Username for the repository")
@click.option("--password", help="Password (prompted when --username is given)")
@click.pass_obj
@handle_errors
def checkout(
    ctx: SvnBridgeContext,
    url: str,
    target: str,
    username: str | None,
    password: str | None,
) -> None:
    """Check out URL into TARGET, reporting progress."""
    if username and password is None and ctx.is_interactive:
        password = click.prompt("Password", hide_input=True)

    ctx.session.checkout(
        url,
        ctx.resolve_path(target),
        username=username,
        password=password,
        progress=echo_progress,
    )
