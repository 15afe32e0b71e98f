"""
Command-line composition for svn invocations.

Turns a CommandRequest into an argv list: peg escaping for path operands,
structured-output and diff flags, and credentials for non-interactive runs.
The redacted rendering used in logs lives with the logger.
"""

from __future__ import annotations

import os
from typing import Protocol

from pydantic import SecretStr

from ...core.models.command import CommandRequest
from ...utils.svn_url import is_url

# Flags appended whenever credentials are passed on the command line
CREDENTIAL_FLAGS = ("--non-interactive", "--trust-server-cert")

DIFF_FLAGS = ("--force", "--internal-diff")


class SupportsCredentials(Protocol):
    """Anything carrying a username and password (stored or just prompted)."""

    username: str
    password: SecretStr


def escape_peg(operand: str, cwd: str | None = None) -> str:
    """
    Protect an operand from svn's peg-revision syntax.

    svn reads ``name@REV`` as a peg revision. A file whose name contains
    ``@`` is passed with an extra trailing ``@`` so the last ``@`` is taken
    as an empty peg: ``file@2.txt`` becomes ``file@2.txt@``.

    URLs, existing directories and operands that already end in ``@`` are
    returned unchanged.

    Args:
        operand: Path-like command operand
        cwd: Directory relative operands are resolved against

    Returns:
        The operand, escaped if needed
    """
    if "@" not in operand or operand.endswith("@") or is_url(operand):
        return operand

    candidate = operand if os.path.isabs(operand) or cwd is None else os.path.join(cwd, operand)
    if os.path.isdir(candidate):
        return operand
    return operand + "@"


def _secret(value: SecretStr | str) -> str:
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return value


def build_argv(
    binary: str,
    request: CommandRequest,
    cwd: str | None = None,
    credentials: SupportsCredentials | None = None,
) -> list[str]:
    """
    Compose the full argv for a request.

    Layout: ``<binary> <verb> [options] [operands] [--xml] [diff flags]
    [credential flags]``.
    """
    argv = [binary, request.verb, *request.options]
    argv.extend(escape_peg(arg, cwd) for arg in request.args)

    if request.wants_structured_output and "--xml" not in argv:
        argv.append("--xml")

    if request.is_diff:
        argv.extend(flag for flag in DIFF_FLAGS if flag not in argv)

    if credentials is not None:
        argv.extend(["--username", credentials.username, "--password", _secret(credentials.password)])
        argv.extend(CREDENTIAL_FLAGS)

    return argv

