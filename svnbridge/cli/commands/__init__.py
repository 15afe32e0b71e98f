"""
Click command implementations for svnbridge CLI.

Each module holds one command or a family of closely related commands.
Commands are registered with the main CLI group via the
register_commands() function in svnbridge.cli.
"""

from .auth import auth
from .changes import add, commit, remove, revert, update
from .checkout import checkout
from .config import config
from .read import cat, diff, info, log
from .root import root
from .status import status

# Commands registered with the main group
ALL_COMMANDS = [
    add,
    auth,
    cat,
    checkout,
    commit,
    config,
    diff,
    info,
    log,
    remove,
    revert,
    root,
    status,
    update,
]

__all__ = [
    "ALL_COMMANDS",
    "add",
    "auth",
    "cat",
    "checkout",
    "commit",
    "config",
    "diff",
    "info",
    "log",
    "remove",
    "revert",
    "root",
    "status",
    "update",
]
