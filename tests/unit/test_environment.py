"""
Unit tests for the svn child-process environment.
"""

from svnbridge.core.models.config import ExecutionConfig
from svnbridge.services.execution.environment import (
    DARWIN_LOCALE_VARIABLES,
    LOCALE_VARIABLES,
    build_environment,
)


class TestBuildEnvironment:
    """Tests for build_environment function."""

    def test_locale_forced(self):
        env = build_environment(ExecutionConfig(), base={"LANG": "zh_CN.GBK"}, platform="linux")

        for name in LOCALE_VARIABLES:
            assert env[name] == "en_US.UTF-8"

    def test_custom_locale(self):
        env = build_environment(ExecutionConfig(locale="C.UTF-8"), base={}, platform="linux")

        assert env["LC_ALL"] == "C.UTF-8"

    def test_darwin_extras(self):
        env = build_environment(ExecutionConfig(), base={}, platform="darwin")

        for name in DARWIN_LOCALE_VARIABLES:
            assert env[name] == "en_US.UTF-8"

    def test_linux_has_no_darwin_extras(self):
        env = build_environment(ExecutionConfig(), base={}, platform="linux")

        assert "LC_TIME" not in env

    def test_windows_sets_python_io_encoding(self):
        env = build_environment(ExecutionConfig(), base={}, platform="win32")

        assert env["PYTHONIOENCODING"] == "utf-8"

    def test_editor_always_neutralized(self):
        env = build_environment(
            ExecutionConfig(force_utf8_locale=False),
            base={"SVN_EDITOR": "vim", "LANG": "de_DE.UTF-8"},
            platform="linux",
        )

        assert env["SVN_EDITOR"] == "echo"
        assert env["LANG"] == "de_DE.UTF-8"

    def test_base_not_mutated(self):
        base = {"PATH": "/usr/bin"}
        env = build_environment(ExecutionConfig(), base=base, platform="linux")

        assert "LANG" not in base
        assert env["PATH"] == "/usr/bin"
