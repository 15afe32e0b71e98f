"""
Logger implementation for svnbridge internal diagnostics.

Every record passes through a redaction filter before it reaches stderr or
~/.svnbridge/svnbridge.log: svn command lines carry ``--password`` and
repository URLs may embed ``user:password@``, neither of which may be
written out.
"""

from __future__ import annotations

import logging
import re
import shlex
import sys
from collections.abc import Sequence
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from ..core.interfaces.logger import ILogger

REDACTED = "***"

_PASSWORD_FLAG_RE = re.compile(r"(--password(?:=|\s+))(?:'[^']*'|\"[^\"]*\"|\S+)")
_URL_USERINFO_RE = re.compile(r"(\b[a-z][a-z0-9+.-]*://[^/\s:@]+:)[^@\s/]+@", re.IGNORECASE)


def redact_argv(argv: Sequence[str]) -> str:
    """
    Render argv as a shell-quoted string with the password masked.

    Handles both ``--password VALUE`` and ``--password=VALUE``.
    """
    redacted: list[str] = []
    mask_next = False
    for arg in argv:
        if mask_next:
            redacted.append(REDACTED)
            mask_next = False
        elif arg == "--password":
            redacted.append(arg)
            mask_next = True
        elif arg.startswith("--password="):
            redacted.append(f"--password={REDACTED}")
        else:
            redacted.append(_URL_USERINFO_RE.sub(rf"\g<1>{REDACTED}@", arg))
    return shlex.join(redacted)


def redact_text(text: str) -> str:
    """Mask password flags and URL-embedded passwords in free text."""
    text = _PASSWORD_FLAG_RE.sub(rf"\g<1>{REDACTED}", text)
    return _URL_USERINFO_RE.sub(rf"\g<1>{REDACTED}@", text)


class RedactingFilter(logging.Filter):
    """Rewrites each record's message with secrets masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact_text(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


class SvnBridgeLogger(ILogger):
    """
    Logger implementation using stdlib logging.

    Supports dual output to stderr and a rotating log file, both behind
    RedactingFilter.
    """

    LOG_FILE_PATH = Path.home() / ".svnbridge" / "svnbridge.log"
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 3

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "svnbridge",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = True,
        log_file: Path | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Initial log level (debug, info, warning, error)
            console_enabled: Enable stderr output
            file_enabled: Enable file output
            log_file: Rotating log file location (defaults to LOG_FILE_PATH)
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)  # Let handlers filter
        self._logger.handlers.clear()
        self._logger.propagate = False

        self._handlers: list[logging.Handler] = []
        self._log_file = log_file or self.LOG_FILE_PATH
        self._formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        log_level = self.LEVEL_MAP.get(level.lower(), logging.WARNING)
        if console_enabled:
            self._add_handler(logging.StreamHandler(sys.stderr), log_level)
        if file_enabled:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                self._log_file,
                maxBytes=self.MAX_FILE_SIZE,
                backupCount=self.BACKUP_COUNT,
                encoding="utf-8",
            )
            self._add_handler(handler, log_level)

    def _add_handler(self, handler: logging.Handler, level: int) -> None:
        handler.setLevel(level)
        handler.setFormatter(self._formatter)
        handler.addFilter(RedactingFilter())
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def command(self, argv: Sequence[str], working_directory: str) -> str:
        rendered = redact_argv(argv)
        self._logger.debug("Running: %s (cwd=%s)", rendered, working_directory)
        return rendered

    def set_level(self, level: str) -> None:
        """Set log level for all handlers."""
        lvl = self.LEVEL_MAP.get(level.lower(), logging.WARNING)
        for handler in self._handlers:
            handler.setLevel(lvl)


class NullLogger(ILogger):
    """No-op logger for testing or when logging is disabled."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def command(self, argv: Sequence[str], working_directory: str) -> str:
        return redact_argv(argv)

    def set_level(self, level: str) -> None:
        pass
