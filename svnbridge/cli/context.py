"""
Click context extension for svnbridge CLI.

Provides SvnBridgeContext dataclass that holds svnbridge-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..services.session import SvnSession


@dataclass
class SvnBridgeContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory (also the project boundary)
        is_interactive: Whether stdin is a TTY (for prompts)
    """

    cwd: Path
    is_interactive: bool
    _session: SvnSession | None = field(default=None, repr=False)

    @classmethod
    def create(cls, cwd: Path | None = None, is_interactive: bool | None = None) -> SvnBridgeContext:
        """Create a SvnBridgeContext for the current environment.

        Bootstraps the DI container (settings, logger, credential store)
        and, on a terminal, registers the click prompts.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
            is_interactive: Prompting override (defaults to stdin being a TTY)

        Returns:
            Configured SvnBridgeContext instance
        """
        from ..core.bootstrap import bootstrap
        from ..core.interfaces.prompts import IAuthPrompt, IConflictPrompt
        from .prompts import ClickAuthPrompt, ClickConflictPrompt

        if cwd is None:
            cwd = Path.cwd()
        if is_interactive is None:
            is_interactive = sys.stdin.isatty()

        container = bootstrap(start_dir=str(cwd))
        if is_interactive:
            container.register_if_absent(IAuthPrompt, ClickAuthPrompt())  # type: ignore[type-abstract]
            container.register_if_absent(IConflictPrompt, ClickConflictPrompt())  # type: ignore[type-abstract]

        return cls(cwd=cwd, is_interactive=is_interactive)

    @property
    def session(self) -> SvnSession:
        """The engine session, created on first use."""
        if self._session is None:
            from ..services.session import SvnSession

            self._session = SvnSession(project_folders=[str(self.cwd)])
        return self._session

    def resolve_path(self, path: str | None) -> str:
        """Absolute form of a CLI path argument (default: cwd)."""
        if not path:
            return str(self.cwd)
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.cwd / candidate
        return str(candidate)
