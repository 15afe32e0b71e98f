"""
Shared pytest fixtures for svnbridge tests.

This module provides:
- reset_container: Isolates the DI container between tests
- fake_svn: Writes an executable stand-in for the svn binary
- svn_calls: Reads the invocations recorded by fake_svn
- working_copy: Builds a directory tree with .svn markers
"""

from __future__ import annotations

import json
import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from svnbridge.core.bootstrap import reset

_PREAMBLE = """\
#!{python}
import json
import os
import sys

with open({log!r}, "a", encoding="utf-8") as _log:
    _log.write(json.dumps({{
        "argv": sys.argv[1:],
        "cwd": os.getcwd(),
        "env": {{k: os.environ.get(k) for k in ("LANG", "LC_ALL", "LC_MESSAGES", "LANGUAGE", "SVN_EDITOR")}},
    }}) + "\\n")
"""


@pytest.fixture(autouse=True)
def reset_container():
    """Give every test a fresh, empty service container."""
    reset()
    yield
    reset()


@pytest.fixture
def svn_log(tmp_path: Path) -> Path:
    return tmp_path / "svn-calls.jsonl"


@pytest.fixture
def fake_svn(tmp_path: Path, svn_log: Path) -> Callable[[str], str]:
    """
    Factory for a fake svn executable.

    The body is Python source run after the invocation has been recorded;
    ``sys.argv[1:]`` holds the svn arguments.

    Returns:
        Callable taking the script body and returning the executable path
    """

    def _make(body: str, name: str = "svn") -> str:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        script = bin_dir / name
        script.write_text(
            _PREAMBLE.format(python=sys.executable, log=str(svn_log)) + textwrap.dedent(body),
            encoding="utf-8",
        )
        script.chmod(0o755)
        return str(script)

    return _make


@pytest.fixture
def svn_calls(svn_log: Path) -> Callable[[], list[dict]]:
    """Read back the invocations recorded by fake_svn."""

    def _read() -> list[dict]:
        if not svn_log.exists():
            return []
        return [json.loads(line) for line in svn_log.read_text(encoding="utf-8").splitlines()]

    return _read


@pytest.fixture
def working_copy(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory for directory trees that look like working copies.

    Example:
        root = working_copy("ws/proj", nested=["sub"], files=["sub/file.txt"])
    """

    def _make(root: str, nested: list[str] | None = None, files: list[str] | None = None) -> Path:
        base = tmp_path / root
        (base / ".svn").mkdir(parents=True, exist_ok=True)
        for sub in nested or []:
            (base / sub / ".svn").mkdir(parents=True, exist_ok=True)
        for name in files or []:
            path = base / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("content\n", encoding="utf-8")
        return base

    return _make
