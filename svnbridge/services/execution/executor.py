"""
Command executor for the svn CLI.

Spawns svn with a pinned locale, captures output incrementally, enforces
timeouts and turns failures into typed exceptions.
"""

from __future__ import annotations

import os
import signal
import subprocess
import time

from ...core.exceptions import (
    CommandTimeoutError,
    ExecutionError,
    InternalContractError,
    SvnNotFoundError,
)
from ...core.interfaces.logger import ILogger
from ...core.interfaces.observer import IOutputObserver
from ...core.models.command import CommandRequest, CommandResult
from ...core.models.config import ExecutionConfig
from ..encoding import EncodingNormalizer
from .args import SupportsCredentials, build_argv
from .environment import build_environment
from .output import OutputAccumulator, start_reader

# How long reader threads may take to drain after the process is gone
READER_JOIN_TIMEOUT = 5.0


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


class CommandExecutor:
    """
    Runs svn invocations described by CommandRequest.

    One executor can be shared between threads; every call owns its own
    process, pipes and accumulator.
    """

    def __init__(
        self,
        config: ExecutionConfig | None = None,
        normalizer: EncodingNormalizer | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._config = config or ExecutionConfig()
        self._normalizer = normalizer or EncodingNormalizer(logger=logger)
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import default_logger

            self._logger = default_logger()
        return self._logger

    @property
    def binary(self) -> str:
        return self._config.svn_binary

    @property
    def normalizer(self) -> EncodingNormalizer:
        return self._normalizer

    def is_available(self) -> bool:
        """Check whether ``svn --version`` can be run."""
        try:
            result = subprocess.run(
                [self.binary, "--version", "--quiet"],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=10,
                env=build_environment(self._config),
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self.logger.debug("svn not available: %s", e)
            return False
        return result.returncode == 0

    def execute(
        self,
        request: CommandRequest,
        working_directory: str,
        credentials: SupportsCredentials | None = None,
        *,
        timeout: float | None = None,
        observer: IOutputObserver | None = None,
        check: bool = True,
    ) -> CommandResult:
        """
        Run one svn command.

        Args:
            request: What to run
            working_directory: Existing directory the command runs in
            credentials: Optional username/password passed on the command line
            timeout: Seconds before the process is killed (None waits forever)
            observer: Receives output chunks while the process runs
            check: Raise ExecutionError on a non-zero exit code

        Returns:
            CommandResult with normalized output

        Raises:
            InternalContractError: working_directory is not a directory
            SvnNotFoundError: The svn binary could not be started
            CommandTimeoutError: The process outlived ``timeout``
            ExecutionError: svn exited non-zero and ``check`` is set
        """
        if not os.path.isdir(working_directory):
            raise InternalContractError(
                "Working directory must be an existing directory",
                context={"working_directory": working_directory},
            )

        argv = build_argv(self.binary, request, cwd=working_directory, credentials=credentials)
        command = self.logger.command(argv, working_directory)

        accumulator = OutputAccumulator(observer=observer, normalize=self._normalizer.normalize)
        start_time = time.monotonic()

        try:
            proc = subprocess.Popen(
                argv,
                cwd=working_directory,
                env=build_environment(self._config),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=os.name == "posix",
            )
        except FileNotFoundError as e:
            raise SvnNotFoundError(
                f"svn executable not found: {self.binary}",
                binary=self.binary,
                cause=e,
            ) from e

        assert proc.stdout is not None and proc.stderr is not None
        readers = [
            start_reader("stdout", proc.stdout, accumulator),
            start_reader("stderr", proc.stderr, accumulator),
        ]

        try:
            exit_code = proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            self._kill(proc)
            for reader in readers:
                reader.join(READER_JOIN_TIMEOUT)
            accumulator.discard()
            self.logger.warning(
                "Timed out after %ss, killed pid %d: %s", timeout, proc.pid, command
            )
            raise CommandTimeoutError(
                f"svn {request.verb} timed out after {timeout}s",
                timeout=timeout,
                command=command,
                pid=proc.pid,
                cause=e,
            ) from e

        for reader in readers:
            reader.join()
        duration = time.monotonic() - start_time

        stdout = self._normalizer.decode(accumulator.getvalue("stdout"))
        stderr = self._normalizer.decode(accumulator.getvalue("stderr"))
        self.logger.debug("Exited %d in %.2fs: %s", exit_code, duration, command)

        if exit_code != 0 and check:
            reason = _first_line(stderr) or f"svn {request.verb} exited with code {exit_code}"
            raise ExecutionError(
                reason,
                exit_code=exit_code,
                stderr=stderr,
                stdout=stdout,
                command=command,
            )

        return CommandResult(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            command=command,
            duration=duration,
        )

    def _kill(self, proc: subprocess.Popen) -> None:
        """Kill the process (and its process group on POSIX) and reap it."""
        try:
            if os.name == "posix":
                os.killpg(proc.pid, signal.SIGKILL)
            else:
                proc.kill()
        except ProcessLookupError:
            self.logger.debug("Process %d already gone", proc.pid)
        except PermissionError as e:
            self.logger.debug("killpg failed for %d (%s), killing process only", proc.pid, e)
            proc.kill()
        proc.wait()
