"""
Command request/result models.

A CommandRequest describes one svn invocation; a CommandResult is what came
back after the encoding normalizer processed it.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .base import ImmutableModel, Operands

# Verbs that compare content and get the internal diff flags
DIFF_VERBS = frozenset({"diff", "di"})


class CommandRequest(ImmutableModel):
    """A single svn invocation.

    ``args`` holds path-like operands (subject to peg escaping); ``options``
    holds flags and their values, which are passed through verbatim.
    """

    verb: Annotated[str, Field(min_length=1)]
    args: Operands = ()
    options: Operands = ()
    target_path: str | None = None
    wants_structured_output: bool = False

    @property
    def is_diff(self) -> bool:
        return self.verb in DIFF_VERBS


class CommandResult(ImmutableModel):
    """Normalized outcome of an svn process."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0
