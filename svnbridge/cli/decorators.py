"""
Click decorators for svnbridge CLI commands.

- handle_errors: Turns svnbridge exceptions into CLI errors with the
  exception's exit code
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from ..core.exceptions import ExecutionError, SvnBridgeException

F = TypeVar("F", bound=Callable[..., Any])


class SvnBridgeCLIError(click.ClickException):
    """ClickException carrying the exit code of the underlying error."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def handle_errors(f: F) -> F:
    """Decorator reporting svnbridge exceptions as CLI errors.

    svn's own stderr is included for execution errors so the user sees
    the original diagnostic.

    Usage:
        @cli.command()
        @click.pass_obj
        @handle_errors
        def status(ctx: SvnBridgeContext, path: str):
            ...
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except ExecutionError as e:
            detail = e.stderr.strip() or e.message
            raise SvnBridgeCLIError(
                f"svn failed (exit {e.returncode}): {detail}", exit_code=e.exit_code
            ) from e
        except SvnBridgeException as e:
            raise SvnBridgeCLIError(e.message, exit_code=e.exit_code) from e

    return wrapper  # type: ignore[return-value]
