"""
Stale working-copy recovery.

When svn rejects a write because the working copy is out of date, ask the
user whether to update and retry, only update, or abort. The original
request is re-issued at most once.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ...core.exceptions import ExecutionError, StaleWorkingCopyError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.prompts import ConflictChoice, ConflictContext, IConflictPrompt
from ...core.models.command import CommandRequest, CommandResult

STALE_SIGNATURES = ("out of date", "E155011", "E170004", "E160024")


def is_stale_conflict(stderr: str) -> bool:
    """Check whether svn rejected a write because the working copy is stale."""
    lowered = stderr.lower()
    return any(signature.lower() in lowered for signature in STALE_SIGNATURES)


@dataclass(frozen=True)
class RecoveryOutcome:
    """
    What happened to a request run under conflict recovery.

    ``choice`` is None when no conflict occurred. ``result`` is None when the
    user chose update-only.
    """

    result: CommandResult | None
    choice: ConflictChoice | None = None
    update_result: CommandResult | None = None
    retried: bool = False

    @property
    def completed(self) -> bool:
        return self.result is not None


Execute = Callable[[CommandRequest], CommandResult]


class ConflictRecoveryCoordinator:
    """Applies the update-then-retry policy around a single request."""

    def __init__(
        self,
        conflict_prompt: IConflictPrompt | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._prompt = conflict_prompt
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import default_logger

            self._logger = default_logger()
        return self._logger

    def run(
        self,
        request: CommandRequest,
        working_directory: str,
        execute: Execute,
    ) -> RecoveryOutcome:
        """
        Run ``request`` via ``execute``, recovering once from a stale working copy.

        Args:
            request: The write to perform (all of its operands are kept on retry)
            working_directory: Resolved root; the update runs here too
            execute: Runs a request in ``working_directory`` (auth already applied)

        Raises:
            StaleWorkingCopyError: The user aborted, no prompt is available,
                or the retry hit another conflict
        """
        try:
            return RecoveryOutcome(result=execute(request))
        except ExecutionError as e:
            if not is_stale_conflict(e.stderr):
                raise
            conflict = e

        self.logger.info("Working copy out of date for svn %s in %s", request.verb, working_directory)
        if self._prompt is None:
            raise StaleWorkingCopyError(
                "Working copy is out of date; run update first",
                working_directory=working_directory,
                cause=conflict,
            )

        context = ConflictContext(
            verb=request.verb,
            working_directory=working_directory,
            targets=request.args,
            stderr=conflict.stderr,
        )
        choice = self._prompt.show(context)
        self.logger.debug("Conflict resolution chosen: %s", choice.value)

        if choice is ConflictChoice.ABORT:
            raise StaleWorkingCopyError(
                "Operation aborted: working copy is out of date",
                working_directory=working_directory,
                cause=conflict,
            )

        update_result = execute(CommandRequest(verb="update", target_path=working_directory))

        if choice is ConflictChoice.UPDATE_ONLY:
            return RecoveryOutcome(result=None, choice=choice, update_result=update_result)

        try:
            result = execute(request)
        except ExecutionError as e:
            if not is_stale_conflict(e.stderr):
                raise
            raise StaleWorkingCopyError(
                "Working copy is still out of date after update",
                working_directory=working_directory,
                retried=True,
                cause=e,
            ) from e

        return RecoveryOutcome(
            result=result,
            choice=choice,
            update_result=update_result,
            retried=True,
        )
