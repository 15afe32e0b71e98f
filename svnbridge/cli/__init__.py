"""
Click-based CLI for svnbridge.

The group builds one SvnBridgeContext per invocation (bootstrapped container,
terminal prompts when stdin is a TTY) and hands it to the subcommands as
``ctx.obj``. ``--help`` and bare invocations never touch the container.
"""

from __future__ import annotations

import click

from .context import SvnBridgeContext

# Version is loaded from package metadata
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("svnbridge")
except PackageNotFoundError:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="svnbridge")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """svnbridge - run Subversion commands against the right working copy

    Every command resolves the working-copy root of the given path, runs
    svn there and retries once after authentication failures or an
    out-of-date working copy.

    \b
    Working copy:
        svnbridge root show [PATH]      Show the resolved root
        svnbridge status [PATH]         Show changes
        svnbridge commit -m MSG PATHS   Commit a batch of paths

    \b
    Repository:
        svnbridge checkout URL DIR      Check out with progress
        svnbridge auth test URL         Test a repository connection

    \b
    Configuration:
        svnbridge config                View or set configuration
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        ctx.obj = SvnBridgeContext.create()


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import ALL_COMMANDS

    for cmd in ALL_COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "SvnBridgeContext",
    "__version__",
    "cli",
    "register_commands",
]
