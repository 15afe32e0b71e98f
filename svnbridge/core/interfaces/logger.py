"""
Logger interface for internal diagnostic output.

Use ILogger for debug/diagnostic messages about svn invocations, root
detection and retry decisions. Command output meant for the user goes
through IOutputObserver instead.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class ILogger(ABC):
    """
    Interface for internal logging.

    Implementations must never write a password: svn argv is only ever
    logged through ``command``, which returns the redacted rendering.
    """

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a debug-level message."""
        pass

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an info-level message."""
        pass

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a warning-level message."""
        pass

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an error-level message."""
        pass

    @abstractmethod
    def command(self, argv: Sequence[str], working_directory: str) -> str:
        """
        Record an svn invocation about to be spawned.

        Args:
            argv: Full argument vector, credentials included
            working_directory: Directory svn runs in

        Returns:
            Shell-quoted command line with secrets masked, suitable for
            error messages
        """
        pass

    @abstractmethod
    def set_level(self, level: str) -> None:
        """
        Set the logging level.

        Args:
            level: One of 'debug', 'info', 'warning', 'error'
        """
        pass
