"""
Engine session.

One SvnSession owns the state of a logical session (custom root, detected
roots, open project folders) and exposes the svn operations the host needs.
Every operation resolves its working-copy root, runs through authentication
recovery and, for commits, through stale working-copy recovery.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from ..core.exceptions import (
    CommandTimeoutError,
    ExecutionError,
    RootResolutionError,
    SvnBridgeAuthError,
)
from ..core.interfaces.credentials import ICredentialStore
from ..core.interfaces.logger import ILogger
from ..core.interfaces.observer import IOutputObserver
from ..core.interfaces.prompts import IAuthPrompt, IConflictPrompt
from ..core.models.command import CommandRequest, CommandResult
from ..core.models.config import SvnBridgeConfig
from ..core.models.credentials import Credential
from ..core.models.roots import WorkingCopyRoot
from .auth.coordinator import AuthAttemptState, AuthenticationCoordinator
from .auth.signatures import describe_failure
from .conflict.coordinator import ConflictRecoveryCoordinator, RecoveryOutcome
from .encoding import EncodingNormalizer
from .execution.executor import CommandExecutor
from .parsing import StatusEntry, count_listed_files, parse_status_xml, summarize_info
from .progress import CheckoutProgress, ProgressCallback
from .roots.resolver import RootResolver

CONNECTION_TEST_TIMEOUT = 30
DEFAULT_LOG_LIMIT = 10


@dataclass
class ConnectionCheckResult:
    """Result of a repository connection or credential check."""

    success: bool
    message: str


class SvnSession:
    """
    Entry point for hosts (CLI, editor integrations).

    Collaborators left as None are resolved from the DI container, falling
    back to defaults: an in-memory credential store and no prompts.
    """

    def __init__(
        self,
        config: SvnBridgeConfig | None = None,
        *,
        executor: CommandExecutor | None = None,
        credential_store: ICredentialStore | None = None,
        auth_prompt: IAuthPrompt | None = None,
        conflict_prompt: IConflictPrompt | None = None,
        project_folders: Iterable[str] = (),
        logger: ILogger | None = None,
    ) -> None:
        from ..core.di import try_resolve

        self._config = config or self._default_config()
        self._logger = logger

        if credential_store is None:
            credential_store = try_resolve(ICredentialStore)  # type: ignore[type-abstract]
        if credential_store is None:
            from .credentials.store import InMemoryCredentialStore

            credential_store = InMemoryCredentialStore()
        if auth_prompt is None:
            auth_prompt = try_resolve(IAuthPrompt)  # type: ignore[type-abstract]
        if conflict_prompt is None:
            conflict_prompt = try_resolve(IConflictPrompt)  # type: ignore[type-abstract]

        self._normalizer = EncodingNormalizer(
            fallbacks=self._config.encoding.fallbacks,
            repair=self._config.encoding.repair,
            logger=logger,
        )
        self._executor = executor or CommandExecutor(
            self._config.execution, normalizer=self._normalizer, logger=logger
        )
        self._store = credential_store
        self._resolver = RootResolver(
            self._executor,
            custom_root=self._config.roots.custom_root,
            project_folders=project_folders,
            logger=logger,
        )
        self._auth = AuthenticationCoordinator(
            self._executor,
            credential_store,
            auth_prompt,
            config=self._config.auth,
            logger=logger,
        )
        self._conflicts = ConflictRecoveryCoordinator(conflict_prompt, logger=logger)

    @staticmethod
    def _default_config() -> SvnBridgeConfig:
        from ..core.di import try_resolve
        from ..core.settings import SvnBridgeSettings

        settings = try_resolve(SvnBridgeSettings)
        if settings is not None:
            return settings.to_config()
        return SvnBridgeConfig()

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ..core.di import default_logger

            self._logger = default_logger()
        return self._logger

    @property
    def config(self) -> SvnBridgeConfig:
        return self._config

    @property
    def resolver(self) -> RootResolver:
        return self._resolver

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    @property
    def normalizer(self) -> EncodingNormalizer:
        return self._normalizer

    @property
    def credential_store(self) -> ICredentialStore:
        return self._store

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    def initialize(self, project_folders: Iterable[str]) -> None:
        """Detect working-copy roots for the open project folders."""
        self._resolver.initialize(project_folders)

    def on_project_folders_changed(self, project_folders: Iterable[str]) -> None:
        self._resolver.on_project_folders_changed(project_folders)

    def set_custom_root(self, path: str) -> WorkingCopyRoot:
        return self._resolver.set_custom_root(path)

    def clear_custom_root(self) -> None:
        self._resolver.clear_custom_root()

    @property
    def custom_root(self) -> WorkingCopyRoot | None:
        return self._resolver.custom_root

    def resolve_root(self, path: str) -> WorkingCopyRoot:
        return self._resolver.resolve(path)

    def is_in_working_copy(self, path: str) -> bool:
        return self._resolver.is_in_working_copy(path)

    def is_installed(self) -> bool:
        """Check whether the svn binary can be run."""
        return self._executor.is_available()

    # ------------------------------------------------------------------
    # Generic execution
    # ------------------------------------------------------------------

    def run(
        self,
        request: CommandRequest,
        *,
        path: str | None = None,
        timeout: float | None = None,
        observer: IOutputObserver | None = None,
        attempt: AuthAttemptState | None = None,
    ) -> CommandResult:
        """
        Run an arbitrary request in the root resolved for ``path``.

        ``path`` defaults to the request's target path, then the current
        directory. Operands are passed through unchanged.
        """
        root = self._resolver.resolve(path or request.target_path or os.getcwd())
        return self._auth.run(
            request,
            root.path,
            attempt=attempt,
            timeout=self._timeout(timeout),
            observer=observer,
        )

    def run_many(
        self,
        requests: Sequence[CommandRequest],
        max_workers: int | None = None,
    ) -> list[CommandResult]:
        """
        Run independent requests concurrently.

        Results come back in request order; the first failure is re-raised.
        """
        if not requests:
            return []
        with ThreadPoolExecutor(max_workers=max_workers or min(8, len(requests))) as pool:
            return list(pool.map(self.run, requests))

    def run_recovering(
        self,
        request: CommandRequest,
        *,
        path: str | None = None,
        timeout: float | None = None,
        observer: IOutputObserver | None = None,
    ) -> RecoveryOutcome:
        """
        Run a write request with stale working-copy recovery.

        The update and the retry share the original's authentication state,
        so the user is prompted at most once for the whole sequence.
        """
        root = self._resolver.resolve(path or request.target_path or os.getcwd())
        attempt = self._auth.new_attempt()

        def execute(req: CommandRequest) -> CommandResult:
            return self._auth.run(
                req,
                root.path,
                attempt=attempt,
                timeout=self._timeout(timeout),
                observer=observer,
            )

        return self._conflicts.run(request, root.path, execute)

    def _timeout(self, timeout: float | None) -> float | None:
        return timeout if timeout is not None else self._config.timeouts.default

    def _operands(self, paths: Sequence[str]) -> tuple[WorkingCopyRoot, tuple[str, ...]]:
        """Resolve one root for ``paths`` and express them relative to it."""
        if not paths:
            raise RootResolutionError("No paths given")
        absolute = [os.path.abspath(p) for p in paths]
        if len(absolute) == 1:
            anchor = absolute[0]
        else:
            directories = [p if os.path.isdir(p) else os.path.dirname(p) for p in absolute]
            anchor = os.path.commonpath(directories)
            if not os.path.exists(anchor):
                anchor = absolute[0]

        root = self._resolver.resolve(anchor)
        for p in absolute:
            if not root.contains(p):
                raise RootResolutionError(
                    f"{p} is outside the working copy {root.path}",
                    path=p,
                )
        return root, tuple(root.relative(p) for p in absolute)

    def _run_in(
        self,
        root: WorkingCopyRoot,
        request: CommandRequest,
        timeout: float | None = None,
        observer: IOutputObserver | None = None,
    ) -> CommandResult:
        return self._auth.run(request, root.path, timeout=self._timeout(timeout), observer=observer)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def status(self, path: str, observer: IOutputObserver | None = None) -> CommandResult:
        root, operands = self._operands([path])
        request = CommandRequest(verb="status", args=operands, target_path=path)
        return self._run_in(root, request, observer=observer)

    def file_status(self, path: str) -> StatusEntry:
        """Status of one file or directory, parsed from `svn status --xml`."""
        root, operands = self._operands([path])
        request = CommandRequest(
            verb="status",
            args=operands,
            target_path=path,
            wants_structured_output=True,
        )
        result = self._run_in(root, request)
        entries = parse_status_xml(result.stdout)
        wanted = os.path.normcase(os.path.normpath(operands[0]))
        for entry in entries:
            if os.path.normcase(os.path.normpath(entry.path)) == wanted:
                return entry
        # svn lists nothing for unmodified items; entries for children of a
        # directory say nothing about the directory itself
        return StatusEntry(path=operands[0], item="normal")

    def info(self, path: str) -> CommandResult:
        root, operands = self._operands([path])
        return self._run_in(root, CommandRequest(verb="info", args=operands, target_path=path))

    def log(self, path: str, limit: int | None = DEFAULT_LOG_LIMIT) -> CommandResult:
        root, operands = self._operands([path])
        options = ("-l", str(limit)) if limit else ()
        request = CommandRequest(verb="log", args=operands, options=options, target_path=path)
        return self._run_in(root, request)

    def diff(self, path: str) -> CommandResult:
        root, operands = self._operands([path])
        return self._run_in(root, CommandRequest(verb="diff", args=operands, target_path=path))

    def cat(self, path: str, revision: str = "BASE") -> CommandResult:
        root, operands = self._operands([path])
        request = CommandRequest(
            verb="cat",
            args=operands,
            options=("-r", revision),
            target_path=path,
        )
        return self._run_in(root, request)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def add(self, paths: Sequence[str]) -> CommandResult:
        root, operands = self._operands(paths)
        request = CommandRequest(verb="add", args=operands, options=("--parents",), target_path=root.path)
        return self._run_in(root, request)

    def remove(self, paths: Sequence[str], keep_local: bool = False) -> CommandResult:
        root, operands = self._operands(paths)
        options = ("--keep-local",) if keep_local else ()
        request = CommandRequest(verb="remove", args=operands, options=options, target_path=root.path)
        return self._run_in(root, request)

    def revert(self, paths: Sequence[str]) -> CommandResult:
        """Revert files; directories are reverted recursively."""
        root, operands = self._operands(paths)
        recursive = any(os.path.isdir(p) for p in paths)
        options = ("-R",) if recursive else ()
        request = CommandRequest(verb="revert", args=operands, options=options, target_path=root.path)
        return self._run_in(root, request)

    def update(self, path: str, observer: IOutputObserver | None = None) -> CommandResult:
        root, operands = self._operands([path])
        args = () if operands == (".",) else operands
        request = CommandRequest(verb="update", args=args, target_path=path)
        return self._run_in(root, request, observer=observer)

    def commit(
        self,
        paths: Sequence[str],
        message: str,
        observer: IOutputObserver | None = None,
    ) -> RecoveryOutcome:
        """
        Commit a batch of paths with one message.

        An out-of-date working copy is offered update-and-retry once; the
        retry commits the same batch.
        """
        root, operands = self._operands(paths)
        request = CommandRequest(
            verb="commit",
            args=operands,
            options=("-m", message),
            target_path=root.path,
        )
        self.logger.info("Committing %d path(s) in %s", len(operands), root.path)
        return self.run_recovering(request, path=root.path, observer=observer)

    # ------------------------------------------------------------------
    # Repository operations
    # ------------------------------------------------------------------

    @staticmethod
    def _credential(url: str, username: str | None, password: str | None) -> Credential | None:
        if username and password:
            return Credential(username=username, password=password, server_url=url)
        return None

    @staticmethod
    def _neutral_directory() -> str:
        cwd = os.getcwd()
        return cwd if os.path.isdir(cwd) else os.path.expanduser("~")

    def repository_file_count(
        self,
        url: str,
        username: str | None = None,
        password: str | None = None,
    ) -> int | None:
        """
        Number of files in the repository at ``url`` (via `svn list -R`).

        Returns None when the listing fails or times out.
        """
        request = CommandRequest(verb="list", args=(url,), options=("-R",))
        try:
            result = self._executor.execute(
                request,
                self._neutral_directory(),
                self._credential(url, username, password),
                timeout=self._config.timeouts.file_count,
                check=False,
            )
        except CommandTimeoutError:
            self.logger.warning("Counting files in %s timed out", url)
            return None

        if result.exit_code != 0:
            self.logger.info("Could not count files in %s: %s", url, describe_failure(result.stderr))
            return None
        return count_listed_files(result.stdout)

    def checkout(
        self,
        url: str,
        target: str,
        *,
        username: str | None = None,
        password: str | None = None,
        progress: ProgressCallback | None = None,
        observer: IOutputObserver | None = None,
    ) -> CommandResult:
        """
        Check out ``url`` into ``target``, creating the directory if needed.

        Raises:
            ExecutionError: svn rejected the checkout
            CommandTimeoutError: The checkout outlived ``timeouts.checkout``
        """
        target = os.path.abspath(target)
        os.makedirs(target, exist_ok=True)
        leftovers = [name for name in os.listdir(target) if name != ".svn"]
        if leftovers:
            self.logger.warning("Checkout target %s is not empty (%d entries)", target, len(leftovers))

        credential = self._credential(url, username, password)
        if progress is not None:
            progress("Connecting to the SVN server...", 5)
            progress("Fetching repository file list...", 10)
            total = self.repository_file_count(url, username, password)
            if total:
                progress(f"Found {total} files, starting checkout...", 15)
            else:
                progress("Starting checkout...", 15)
            observer = CheckoutProgress(progress, total, forward=observer)

        attempt = self._auth.new_attempt(repository_url=url)
        attempt.credential = credential
        request = CommandRequest(verb="checkout", args=(url, target), target_path=target)

        try:
            result = self._auth.run(
                request,
                os.path.dirname(target) or target,
                attempt=attempt,
                timeout=self._config.timeouts.checkout,
                observer=observer,
            )
        except (ExecutionError, CommandTimeoutError, SvnBridgeAuthError):
            if progress is not None:
                progress("Checkout failed", 0)
            raise

        if progress is not None:
            progress("Checkout complete", 100)
        return result

    def test_connection(
        self,
        url: str,
        username: str | None = None,
        password: str | None = None,
    ) -> ConnectionCheckResult:
        """
        Check that ``url`` is reachable, returning a friendly message.

        Without explicit credentials, saved credentials (and the prompt, if
        enabled) are used.
        """
        request = CommandRequest(verb="info", args=(url,))
        directory = self._neutral_directory()
        try:
            credential = self._credential(url, username, password)
            if credential is not None:
                result = self._executor.execute(
                    request, directory, credential, timeout=CONNECTION_TEST_TIMEOUT
                )
            else:
                result = self._auth.run(
                    request,
                    directory,
                    attempt=self._auth.new_attempt(repository_url=url),
                    timeout=CONNECTION_TEST_TIMEOUT,
                )
        except ExecutionError as e:
            return ConnectionCheckResult(False, describe_failure(e.stderr or e.message))
        except CommandTimeoutError:
            return ConnectionCheckResult(False, describe_failure("timeout"))
        except SvnBridgeAuthError as e:
            return ConnectionCheckResult(False, e.message)

        return ConnectionCheckResult(True, summarize_info(result.stdout) or "Connected, repository is accessible")

    def validate_credential(self, url: str, username: str, password: str) -> ConnectionCheckResult:
        """Check a username/password pair against ``url`` without prompting."""
        request = CommandRequest(verb="info", args=(url,))
        credential = Credential(username=username, password=password, server_url=url)
        try:
            self._executor.execute(
                request,
                self._neutral_directory(),
                credential,
                timeout=self._config.timeouts.credential_validation,
            )
        except ExecutionError as e:
            return ConnectionCheckResult(False, describe_failure(e.stderr or e.message))
        except CommandTimeoutError:
            return ConnectionCheckResult(False, describe_failure("timeout"))
        return ConnectionCheckResult(True, "Credentials accepted")
