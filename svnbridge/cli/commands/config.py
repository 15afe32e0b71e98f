"""
The `svnbridge config` command family.

Values are read from .svnbridge/config.toml (or `[tool.svnbridge]` in
pyproject.toml) and can be overridden per process with
SVNBRIDGE_<SECTION>__<KEY> environment variables.
"""

from __future__ import annotations

from typing import Any

import click

from ...config import config_get, config_list, config_set, get_config_path_for_write
from ...core.exceptions import ConfigValidationError
from ...core.settings import find_config_file


def _display(value: Any) -> str:
    if value is None:
        return "(not set)"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "(empty)"
    return str(value)


@click.group("config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context) -> None:
    """View or change svnbridge settings.

    \b
    Examples:

        svnbridge config list                          # Effective values

        svnbridge config get auth.interactive_prompt   # One value

        svnbridge config set timeouts.checkout 3600    # Persist a value

        svnbridge config path                          # Which file is used
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command("list")
def config_list_cmd() -> None:
    """List every option grouped by section, marking changed values with '*'."""
    section = None
    for key, info in config_list().items():
        key_section, name = key.split(".", 1)
        if key_section != section:
            if section is not None:
                click.echo("")
            click.echo(f"[{key_section}]")
            section = key_section

        marker = "*" if info["value"] != info["default"] else " "
        click.echo(f" {marker} {name} = {_display(info['value'])}")
        click.echo(f"      {info['description']} (default: {_display(info['default'])})")


@config.command("get")
@click.argument("key")
def config_get_cmd(key: str) -> None:
    """Print the effective value of KEY (e.g. auth.interactive_prompt)."""
    click.echo(f"{key}: {_display(config_get(key))}")


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set_cmd(key: str, value: str) -> None:
    """Persist VALUE for KEY.

    An empty VALUE clears optional settings such as roots.custom_root.
    """
    try:
        config_path, typed_value = config_set(key, value)
    except ConfigValidationError as e:
        raise click.ClickException(e.message) from e
    click.echo(f"Set {key} = {_display(typed_value)}")
    click.echo(f"Saved to {config_path}")


@config.command("path")
def config_path_cmd() -> None:
    """Show the config file in effect and where `config set` writes."""
    source = find_config_file()
    click.echo(f"Loaded from: {source if source else '(none, using defaults)'}")
    click.echo(f"Writes to:   {get_config_path_for_write(create=False)}")
