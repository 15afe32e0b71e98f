"""
Working-copy root models.
"""

from __future__ import annotations

import os
from enum import Enum

from .base import AbsolutePath, ImmutableModel


class RootOrigin(str, Enum):
    """How a working-copy root was determined."""

    CUSTOM = "custom"
    CACHED_DETECTED = "cached-detected"
    DYNAMIC_DETECTED = "dynamic-detected"
    WORKSPACE_FALLBACK = "workspace-fallback"
    PARENT_FALLBACK = "parent-fallback"

    @property
    def is_detected(self) -> bool:
        return self in (RootOrigin.CUSTOM, RootOrigin.CACHED_DETECTED, RootOrigin.DYNAMIC_DETECTED)


def is_ancestor_or_self(root: str, path: str) -> bool:
    """Check whether ``root`` is ``path`` or one of its ancestors.

    Both paths are compared in absolute, normalized form; the check is
    component-wise so ``/ws/pro`` is not an ancestor of ``/ws/proj``.
    """
    root_abs = os.path.normcase(os.path.abspath(root))
    path_abs = os.path.normcase(os.path.abspath(path))
    if root_abs == path_abs:
        return True
    try:
        return os.path.commonpath([root_abs, path_abs]) == root_abs
    except ValueError:
        # Different drives on Windows
        return False


class WorkingCopyRoot(ImmutableModel):
    """Top directory of a version-controlled tree."""

    path: AbsolutePath
    origin: RootOrigin

    def contains(self, path: str) -> bool:
        """True if ``path`` lies inside (or is) this root."""
        return is_ancestor_or_self(self.path, path)

    def relative(self, path: str) -> str:
        """Express ``path`` relative to this root ('.' for the root itself)."""
        return os.path.relpath(os.path.abspath(path), self.path)

    def with_origin(self, origin: RootOrigin) -> WorkingCopyRoot:
        return WorkingCopyRoot(path=self.path, origin=origin)
