"""
Custom exception hierarchy for svnbridge.

Every failure the engine surfaces is a typed exception carrying enough
structured context (exit code, stderr, redacted command line) to be shown to
an end user or written to the log.
"""

from __future__ import annotations


class SvnBridgeException(Exception):
    """
    Base exception for all svnbridge errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (paths, URLs, commands)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class SvnBridgeConfigError(SvnBridgeException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(SvnBridgeConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(SvnBridgeConfigError, ValueError):
    """
    Invalid or missing configuration value.

    Inherits from ValueError so callers validating input can catch either.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Working Copy Resolution Errors
# =============================================================================


class SvnBridgeResolutionError(SvnBridgeException):
    """Base class for path and working-copy resolution errors."""

    pass


class PathNotFoundError(SvnBridgeResolutionError):
    """
    The path handed to the engine does not exist on disk.

    Raised before any detection is attempted.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


class RootResolutionError(SvnBridgeResolutionError):
    """
    No working-copy root could be determined for a path.

    Raised when no plausible directory exists at all, or when a caller
    demands a detected root and only fallbacks were available.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Execution Errors
# =============================================================================


class SvnBridgeExecutionError(SvnBridgeException):
    """Base class for errors raised while running the svn CLI."""

    pass


class SvnNotFoundError(SvnBridgeExecutionError):
    """
    The svn binary could not be started.

    Raised when the configured executable is missing from PATH.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        binary: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if binary:
            ctx["binary"] = binary
        super().__init__(message, context=ctx, cause=cause)


class ExecutionError(SvnBridgeExecutionError):
    """
    The svn CLI exited with a non-zero status.

    The command line stored here is always redacted.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        stderr: str = "",
        stdout: str = "",
        command: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        if command:
            ctx["command"] = command
        super().__init__(message, context=ctx, cause=cause)
        self.returncode = exit_code
        self.stderr = stderr
        self.stdout = stdout
        self.command = command


class CommandTimeoutError(SvnBridgeExecutionError):
    """
    The svn process exceeded its timeout and was killed.

    Partially buffered output is discarded.
    """

    def __init__(
        self,
        message: str,
        *,
        timeout: float | None = None,
        command: str | None = None,
        pid: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if timeout is not None:
            ctx["timeout"] = timeout
        if command:
            ctx["command"] = command
        super().__init__(message, context=ctx, cause=cause)
        self.timeout = timeout
        self.command = command
        self.pid = pid


# =============================================================================
# Programming Errors
# =============================================================================


class InternalContractError(SvnBridgeException, RuntimeError):
    """
    A caller broke an internal contract (e.g. a file passed as working directory).

    This is a programming error, never a user-facing CLI failure, so it sits
    outside SvnBridgeExecutionError and passes through handlers for svn failures.
    """

    exit_code: int = 70
    recoverable: bool = False


# =============================================================================
# Authentication Errors
# =============================================================================


class SvnBridgeAuthError(SvnBridgeException):
    """Base class for authentication errors."""

    recoverable: bool = False


class AuthenticationFailedError(SvnBridgeAuthError):
    """
    Every authentication attempt for an operation was rejected.

    Raised when interactively supplied credentials still fail.
    """

    def __init__(
        self,
        message: str,
        *,
        repository_url: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if repository_url:
            ctx["repository_url"] = repository_url
        super().__init__(message, context=ctx, cause=cause)
        self.repository_url = repository_url


class AuthenticationRequiredError(AuthenticationFailedError):
    """
    Authentication is needed but interactive prompting is disabled.

    Set ``auth.interactive_prompt = true`` or store a credential first.
    """

    pass


class UserCancelledAuthError(SvnBridgeAuthError):
    """The user dismissed the credential prompt."""

    def __init__(
        self,
        message: str = "Authentication cancelled by user",
        *,
        repository_url: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if repository_url:
            ctx["repository_url"] = repository_url
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Working Copy State Errors
# =============================================================================


class StaleWorkingCopyError(SvnBridgeException):
    """
    The working copy is behind the repository and the write was rejected.

    Recoverable once via update-then-retry; a second conflict is surfaced
    with ``retried=True``.
    """

    def __init__(
        self,
        message: str,
        *,
        working_directory: str | None = None,
        retried: bool = False,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if working_directory:
            ctx["working_directory"] = working_directory
        if retried:
            ctx["retried"] = True
        super().__init__(message, context=ctx, cause=cause)
        self.retried = retried


# =============================================================================
# Encoding Errors
# =============================================================================


class EncodingRecoveryError(SvnBridgeException):
    """
    Garbled output could not be re-decoded under any fallback encoding.

    Non-fatal: the normalizer logs it and returns the raw text.
    """

    def __init__(
        self,
        message: str,
        *,
        encodings: list[str] | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if encodings:
            ctx["encodings"] = encodings
        super().__init__(message, context=ctx, cause=cause)
