"""
Child-process environment for svn.

svn localizes its messages; error signatures are only reliable in English,
and output decoding is only reliable in UTF-8, so the locale is pinned.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping

from ...core.models.config import ExecutionConfig

LOCALE_VARIABLES = ("LANG", "LC_ALL", "LC_CTYPE", "LC_MESSAGES", "LANGUAGE")

DARWIN_LOCALE_VARIABLES = ("LC_COLLATE", "LC_MONETARY", "LC_NUMERIC", "LC_TIME")

# Accepts the commit message template unchanged, so svn never waits on an editor
NOOP_EDITOR = "echo"


def build_environment(
    config: ExecutionConfig,
    base: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> dict[str, str]:
    """
    Build the environment for an svn child process.

    Args:
        config: Execution settings (locale forcing)
        base: Environment to start from (default: os.environ)
        platform: Platform name (default: sys.platform)

    Returns:
        A new environment mapping
    """
    env = dict(os.environ if base is None else base)
    platform = platform or sys.platform

    if config.force_utf8_locale:
        for name in LOCALE_VARIABLES:
            env[name] = config.locale
        if platform == "darwin":
            for name in DARWIN_LOCALE_VARIABLES:
                env[name] = config.locale
        if platform == "win32":
            env["PYTHONIOENCODING"] = "utf-8"

    env["SVN_EDITOR"] = NOOP_EDITOR
    return env
