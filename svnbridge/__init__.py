"""
svnbridge - Subversion command execution and working-copy resolution.

Resolves the working-copy root for any path, runs the svn CLI under a
pinned UTF-8 locale, repairs mis-decoded output and recovers from
authentication failures and out-of-date working copies.
"""

from .core.exceptions import SvnBridgeException
from .core.models import CommandRequest, CommandResult, RootOrigin, WorkingCopyRoot
from .services.session import ConnectionCheckResult, SvnSession

__all__ = [
    "CommandRequest",
    "CommandResult",
    "ConnectionCheckResult",
    "RootOrigin",
    "SvnBridgeException",
    "SvnSession",
    "WorkingCopyRoot",
]
