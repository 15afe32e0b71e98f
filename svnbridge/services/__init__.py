"""
Services for svnbridge.

The engine components (encoding, roots, execution, auth, conflict) and the
SvnSession that composes them.
"""

from .session import ConnectionCheckResult, SvnSession

__all__ = ["ConnectionCheckResult", "SvnSession"]
