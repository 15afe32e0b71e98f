"""
Working-copy root resolution.

Given any path, determine the directory svn commands should run in:
a user override, a cached detection, a live ``svn info`` probe, or a
fallback directory, in that order.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterable

from ...core.exceptions import PathNotFoundError, RootResolutionError, SvnBridgeExecutionError
from ...core.interfaces.logger import ILogger
from ...core.models.command import CommandRequest
from ...core.models.roots import RootOrigin, WorkingCopyRoot, is_ancestor_or_self
from ..execution.executor import CommandExecutor
from .cache import RootCache

ADMIN_DIR = ".svn"
ROOT_FIELD = "Working Copy Root Path:"


def containing_directory(path: str) -> str:
    """The directory itself for directories, the parent for anything else."""
    path = os.path.abspath(path)
    if os.path.isdir(path):
        return path
    return os.path.dirname(path)


def has_admin_dir(directory: str) -> bool:
    return os.path.isdir(os.path.join(directory, ADMIN_DIR))


def parse_root_path(info_output: str) -> str | None:
    """Extract the ``Working Copy Root Path`` field from ``svn info`` output."""
    for line in info_output.splitlines():
        if line.startswith(ROOT_FIELD):
            value = line[len(ROOT_FIELD) :].strip()
            return value or None
    return None


class RootResolver:
    """
    Resolves paths to their working-copy root.

    Holds the session's custom root, the open project folders and the
    RootCache. Every returned root is an ancestor of (or equal to) the
    resolved path.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        custom_root: str | None = None,
        project_folders: Iterable[str] = (),
        cache: RootCache | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._executor = executor
        self._cache = cache if cache is not None else RootCache()
        self._logger = logger
        self._lock = threading.RLock()
        self._project_folders: tuple[str, ...] = tuple(os.path.abspath(f) for f in project_folders)
        self._custom_root: WorkingCopyRoot | None = None
        if custom_root:
            self._custom_root = WorkingCopyRoot(path=custom_root, origin=RootOrigin.CUSTOM)

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import default_logger

            self._logger = default_logger()
        return self._logger

    @property
    def cache(self) -> RootCache:
        return self._cache

    @property
    def custom_root(self) -> WorkingCopyRoot | None:
        with self._lock:
            return self._custom_root

    @property
    def project_folders(self) -> tuple[str, ...]:
        with self._lock:
            return self._project_folders

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def initialize(self, project_folders: Iterable[str]) -> None:
        """
        Record the open project folders and detect their roots.

        Folders that are not inside a working copy are skipped; they still
        act as fallback boundaries.
        """
        folders = tuple(os.path.abspath(f) for f in project_folders)
        with self._lock:
            self._project_folders = folders
        self._cache.clear()

        for folder in folders:
            if not os.path.isdir(folder):
                self.logger.debug("Skipping missing project folder: %s", folder)
                continue
            root_path = self._probe(folder)
            if root_path is None:
                self.logger.debug("Project folder is not a working copy: %s", folder)
                continue
            root = WorkingCopyRoot(path=root_path, origin=RootOrigin.DYNAMIC_DETECTED)
            self._cache.put(folder, root)
            self.logger.info("Detected working copy %s for %s", root.path, folder)

    def on_project_folders_changed(self, project_folders: Iterable[str]) -> None:
        """Invalidate every cached root and recompute for the new folders."""
        self.logger.debug("Project folders changed, recomputing roots")
        self.initialize(project_folders)

    def set_custom_root(self, path: str) -> WorkingCopyRoot:
        """
        Pin resolution to a user-chosen working copy.

        Raises:
            RootResolutionError: ``path`` is not a working-copy directory
        """
        path = os.path.abspath(path)
        if not os.path.isdir(path) or not has_admin_dir(path):
            raise RootResolutionError(
                f"Not an SVN working copy root: {path}",
                path=path,
            )
        root = WorkingCopyRoot(path=path, origin=RootOrigin.CUSTOM)
        with self._lock:
            self._custom_root = root
        self.logger.info("Custom root set: %s", path)
        return root

    def clear_custom_root(self) -> None:
        with self._lock:
            self._custom_root = None
        self.logger.info("Custom root cleared")

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> WorkingCopyRoot:
        """
        Determine the working-copy root for ``path``.

        Raises:
            PathNotFoundError: ``path`` does not exist
            RootResolutionError: No directory could be determined at all
        """
        path = os.path.abspath(path)
        if not os.path.exists(path):
            raise PathNotFoundError(f"Path does not exist: {path}", path=path)

        directory = containing_directory(path)
        if not os.path.isdir(directory):
            raise RootResolutionError(f"No directory found for {path}", path=path)

        custom = self.custom_root
        if custom is not None and custom.contains(path):
            self.logger.debug("Using custom root %s for %s", custom.path, path)
            return custom

        cached = self._from_cache(path, directory)
        if cached is not None:
            return cached

        detected = self._detect(directory)
        if detected is not None and detected.contains(path):
            return detected
        if detected is not None:
            self.logger.warning("Ignoring probed root %s: does not contain %s", detected.path, path)

        return self._fallback(path, directory)

    def require_working_copy(self, path: str) -> WorkingCopyRoot:
        """
        Like ``resolve`` but only accepts a detected (or custom) root.

        Raises:
            RootResolutionError: ``path`` is not inside a working copy
        """
        root = self.resolve(path)
        if not root.origin.is_detected:
            raise RootResolutionError(
                f"Not inside an SVN working copy: {os.path.abspath(path)}",
                path=os.path.abspath(path),
                context={"fallback": root.path},
            )
        return root

    def is_in_working_copy(self, path: str) -> bool:
        try:
            return self.resolve(path).origin.is_detected
        except (PathNotFoundError, RootResolutionError):
            return False

    def _from_cache(self, path: str, directory: str) -> WorkingCopyRoot | None:
        for root in self._cache.candidates_for(path):
            if not os.path.isdir(root.path):
                self.logger.debug("Dropping vanished cached root %s", root.path)
                self._cache.discard_root(root.path)
                continue
            if self._nested_admin_dir(root.path, directory):
                self.logger.debug(
                    "Cached root %s is ambiguous for %s, probing", root.path, path
                )
                return None
            self.logger.debug("Using cached root %s for %s", root.path, path)
            return root.with_origin(RootOrigin.CACHED_DETECTED)
        return None

    def _nested_admin_dir(self, root_path: str, directory: str) -> bool:
        """True if a directory below ``root_path`` down to ``directory`` holds ``.svn``."""
        root_path = os.path.abspath(root_path)
        current = os.path.abspath(directory)
        while is_ancestor_or_self(root_path, current) and os.path.normcase(current) != os.path.normcase(root_path):
            if has_admin_dir(current):
                return True
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        return False

    def _detect(self, directory: str) -> WorkingCopyRoot | None:
        root_path = self._probe(directory)
        if root_path is None:
            return None

        root = WorkingCopyRoot(path=root_path, origin=RootOrigin.DYNAMIC_DETECTED)
        boundary = self._project_boundary(directory)
        if boundary is not None and self._cache.put_if_absent(boundary, root):
            self.logger.debug("Cached root %s under project %s", root.path, boundary)
        else:
            self._cache.put(root.path, root)
            self.logger.debug("Cached root %s under its own path", root.path)
        return root

    def _probe(self, directory: str) -> str | None:
        """Ask ``svn info`` for the root of the working copy containing ``directory``."""
        request = CommandRequest(verb="info", target_path=directory)
        try:
            result = self._executor.execute(request, directory, check=False)
        except SvnBridgeExecutionError as e:
            self.logger.debug("Root probe failed in %s: %s", directory, e)
            return None

        if result.exit_code != 0:
            self.logger.debug("Root probe in %s exited %d", directory, result.exit_code)
            return None
        return parse_root_path(result.stdout)

    def _project_boundary(self, path: str) -> str | None:
        """Nearest open project folder containing ``path``."""
        containing = [f for f in self.project_folders if is_ancestor_or_self(f, path)]
        if not containing:
            return None
        return max(containing, key=len)

    def _fallback(self, path: str, directory: str) -> WorkingCopyRoot:
        boundary = self._project_boundary(path)
        if boundary is not None and os.path.isdir(boundary):
            self.logger.debug("No working copy found, falling back to project %s", boundary)
            return WorkingCopyRoot(path=boundary, origin=RootOrigin.WORKSPACE_FALLBACK)

        self.logger.debug("No working copy found, falling back to %s", directory)
        return WorkingCopyRoot(path=directory, origin=RootOrigin.PARENT_FALLBACK)
