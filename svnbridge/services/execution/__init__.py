"""
svn process execution.

Provides the CommandExecutor plus the argv, environment and output-capture
helpers it is built from.
"""

from .args import build_argv, escape_peg
from .environment import build_environment
from .executor import CommandExecutor
from .output import OutputAccumulator

__all__ = [
    "CommandExecutor",
    "OutputAccumulator",
    "build_argv",
    "build_environment",
    "escape_peg",
]
