"""
Authentication retry coordinator.

Runs a command anonymously first and, on an authentication failure, walks
an explicit state machine: saved credential, then interactive prompt. Each
logical operation carries one AuthAttemptState, which caps it at one saved
lookup and one prompt no matter how often the operation is retried.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ...core.exceptions import (
    AuthenticationFailedError,
    AuthenticationRequiredError,
    ExecutionError,
    SvnBridgeAuthError,
    UserCancelledAuthError,
)
from ...core.interfaces.credentials import ICredentialStore
from ...core.interfaces.logger import ILogger
from ...core.interfaces.observer import IOutputObserver
from ...core.interfaces.prompts import IAuthPrompt
from ...core.models.command import CommandRequest, CommandResult
from ...core.models.config import AuthConfig
from ..execution.args import SupportsCredentials
from ..execution.executor import CommandExecutor
from .signatures import is_auth_failure


class AuthState(str, Enum):
    """States of one authentication sequence."""

    ANONYMOUS_ATTEMPT = "anonymous-attempt"
    SAVED_CREDENTIAL_ATTEMPT = "saved-credential-attempt"
    INTERACTIVE_PROMPT = "interactive-prompt"
    AUTHENTICATED = "authenticated"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self in (AuthState.AUTHENTICATED, AuthState.ABANDONED)


@dataclass
class AuthAttemptState:
    """Transient bookkeeping for one logical operation."""

    state: AuthState = AuthState.ANONYMOUS_ATTEMPT
    repository_url: str | None = None
    credential: SupportsCredentials | None = None
    saved_lookup_done: bool = False
    prompt_shown: bool = False
    last_error: ExecutionError | None = None
    failure: SvnBridgeAuthError | None = None
    result: CommandResult | None = None

    def abandon(self, failure: SvnBridgeAuthError) -> None:
        self.state = AuthState.ABANDONED
        self.failure = failure


Runner = Callable[[SupportsCredentials | None], CommandResult]


class AuthenticationCoordinator:
    """
    Wraps command execution with credential recovery.

    Collaborators:
        executor: Runs the actual svn commands
        credential_store: Saved credentials (host-owned)
        auth_prompt: Asks the user; None behaves like a disabled prompt
    """

    def __init__(
        self,
        executor: CommandExecutor,
        credential_store: ICredentialStore,
        auth_prompt: IAuthPrompt | None = None,
        config: AuthConfig | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._executor = executor
        self._store = credential_store
        self._prompt = auth_prompt
        self._config = config or AuthConfig()
        self._logger = logger
        self._handlers: dict[AuthState, Callable[[AuthAttemptState, Runner, str], None]] = {
            AuthState.ANONYMOUS_ATTEMPT: self._attempt_anonymous,
            AuthState.SAVED_CREDENTIAL_ATTEMPT: self._attempt_saved_credential,
            AuthState.INTERACTIVE_PROMPT: self._attempt_interactive,
        }

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import default_logger

            self._logger = default_logger()
        return self._logger

    def new_attempt(self, repository_url: str | None = None) -> AuthAttemptState:
        """
        Start bookkeeping for a logical operation.

        Args:
            repository_url: Known repository URL (e.g. a checkout source),
                which skips the ``svn info`` lookup
        """
        return AuthAttemptState(repository_url=repository_url)

    def run(
        self,
        request: CommandRequest,
        working_directory: str,
        *,
        attempt: AuthAttemptState | None = None,
        timeout: float | None = None,
        observer: IOutputObserver | None = None,
    ) -> CommandResult:
        """
        Execute ``request``, recovering from authentication failures.

        Passing the same ``attempt`` for a retry of the same operation reuses
        the credential established earlier and never repeats a lookup or
        prompt that already happened.

        Raises:
            AuthenticationRequiredError: Credentials needed, prompting disabled
            UserCancelledAuthError: The user dismissed the prompt
            AuthenticationFailedError: Prompted credentials were rejected too
            ExecutionError: Any non-authentication failure
        """
        attempt = attempt or self.new_attempt()

        def runner(credentials: SupportsCredentials | None) -> CommandResult:
            return self._executor.execute(
                request,
                working_directory,
                credentials,
                timeout=timeout,
                observer=observer,
            )

        return self.drive(attempt, runner, working_directory)

    def drive(self, attempt: AuthAttemptState, runner: Runner, working_directory: str) -> CommandResult:
        """Run the state machine until it authenticates or gives up."""
        attempt.state = AuthState.ANONYMOUS_ATTEMPT
        attempt.result = None
        attempt.failure = None

        while not attempt.state.is_terminal:
            self.logger.debug("Auth state: %s", attempt.state.value)
            self._handlers[attempt.state](attempt, runner, working_directory)

        if attempt.state is AuthState.ABANDONED:
            assert attempt.failure is not None
            self.logger.info("Authentication abandoned: %s", attempt.failure.message)
            raise attempt.failure

        assert attempt.result is not None
        return attempt.result

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _attempt_anonymous(self, attempt: AuthAttemptState, runner: Runner, working_directory: str) -> None:
        try:
            attempt.result = runner(attempt.credential)
        except ExecutionError as e:
            if not is_auth_failure(e.stderr):
                raise
            self.logger.debug("Authentication required: %s", e.message)
            attempt.last_error = e
            attempt.state = AuthState.SAVED_CREDENTIAL_ATTEMPT
            return
        attempt.state = AuthState.AUTHENTICATED

    def _attempt_saved_credential(
        self, attempt: AuthAttemptState, runner: Runner, working_directory: str
    ) -> None:
        if attempt.saved_lookup_done:
            attempt.state = AuthState.INTERACTIVE_PROMPT
            return
        attempt.saved_lookup_done = True

        if attempt.repository_url is None:
            attempt.repository_url = self.repository_url(working_directory)

        credential = self._store.get(attempt.repository_url) if attempt.repository_url else None
        if credential is None:
            self.logger.debug("No saved credential for %s", attempt.repository_url)
            attempt.state = AuthState.INTERACTIVE_PROMPT
            return

        self.logger.debug("Trying saved credential stored for %s", credential.server_url)
        try:
            attempt.result = runner(credential)
        except ExecutionError as e:
            if not is_auth_failure(e.stderr):
                # Got past authentication; keep the credential for retries
                attempt.credential = credential
                raise
            self.logger.info("Saved credential for %s was rejected, removing it", credential.server_url)
            self._store.remove(credential.server_url)
            attempt.last_error = e
            attempt.state = AuthState.INTERACTIVE_PROMPT
            return

        self._store.update_last_used(credential.server_url)
        attempt.credential = credential
        attempt.state = AuthState.AUTHENTICATED

    def _attempt_interactive(self, attempt: AuthAttemptState, runner: Runner, working_directory: str) -> None:
        url = attempt.repository_url

        if attempt.prompt_shown:
            attempt.abandon(
                AuthenticationFailedError(
                    "Authentication failed",
                    repository_url=url,
                    cause=attempt.last_error,
                )
            )
            return

        if not self._config.interactive_prompt or self._prompt is None:
            attempt.abandon(
                AuthenticationRequiredError(
                    "Authentication required but interactive prompting is disabled",
                    repository_url=url,
                    cause=attempt.last_error,
                )
            )
            return

        attempt.prompt_shown = True
        answer = self._prompt.show(url or working_directory)
        if answer is None:
            attempt.abandon(UserCancelledAuthError(repository_url=url))
            return

        try:
            attempt.result = runner(answer)
        except ExecutionError as e:
            if not is_auth_failure(e.stderr):
                attempt.credential = answer
                raise
            attempt.last_error = e
            attempt.abandon(
                AuthenticationFailedError(
                    "Authentication failed with the supplied credentials",
                    repository_url=url,
                    cause=e,
                )
            )
            return

        attempt.credential = answer
        attempt.state = AuthState.AUTHENTICATED
        if answer.persist and self._config.auto_save_credentials and url:
            self._store.save(url, answer.username, answer.password.get_secret_value())
            self.logger.info("Saved credential for %s", url)

    # ------------------------------------------------------------------
    # Repository URL lookup
    # ------------------------------------------------------------------

    def repository_url(self, working_directory: str) -> str | None:
        """
        URL of the working copy at ``working_directory``.

        Asks for the node URL first and falls back to the repository root.
        """
        for item in ("url", "repos-root-url"):
            request = CommandRequest(verb="info", options=("--show-item", item))
            result = self._executor.execute(request, working_directory, check=False)
            value = result.stdout.strip()
            if result.exit_code == 0 and value:
                return value
            self.logger.debug("svn info --show-item %s failed in %s", item, working_directory)
        return None
