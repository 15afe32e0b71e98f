"""
Unit tests for AuthenticationCoordinator.

A scripted server stands in for svn: it accepts one username/password pair
and rejects everything else with an authentication error.
"""

from unittest.mock import MagicMock

import pytest

from svnbridge.core.exceptions import (
    AuthenticationFailedError,
    AuthenticationRequiredError,
    ExecutionError,
    UserCancelledAuthError,
)
from svnbridge.core.interfaces.prompts import IAuthPrompt
from svnbridge.core.models.command import CommandRequest, CommandResult
from svnbridge.core.models.config import AuthConfig
from svnbridge.core.models.credentials import AuthPromptResult, Credential
from svnbridge.services.auth.coordinator import AuthenticationCoordinator, AuthState
from svnbridge.services.auth.signatures import describe_failure, is_auth_failure
from svnbridge.services.credentials import InMemoryCredentialStore

REPO_URL = "https://svn.example.com/repo/trunk"
AUTH_STDERR = "svn: E170001: Authentication required for '<https://svn.example.com:443> Repo'\n"
WD = "/ws/proj"


class ScriptedServer:
    """Accepts exactly one credential pair; records every command attempt."""

    def __init__(self, accepted=("alice", "s3cret"), urls=None):
        self.accepted = accepted
        self.urls = {"url": REPO_URL} if urls is None else urls
        self.attempts = []

    def execute(self, request, working_directory, credentials=None, **kwargs):
        if request.verb == "info" and "--show-item" in request.options:
            item = request.options[-1]
            if item in self.urls:
                return CommandResult(exit_code=0, stdout=self.urls[item] + "\n")
            return CommandResult(exit_code=1, stderr="svn: E155007: not a working copy")

        self.attempts.append(credentials)
        if self.accepted is None:
            return CommandResult(exit_code=0, stdout="anonymous ok")
        if credentials is not None:
            pair = (credentials.username, credentials.password.get_secret_value())
            if pair == self.accepted:
                return CommandResult(exit_code=0, stdout=f"ok as {pair[0]}")
        raise ExecutionError("Authentication required", exit_code=1, stderr=AUTH_STDERR)


def make_coordinator(server, store=None, prompt=None, config=None):
    executor = MagicMock()
    executor.execute.side_effect = server.execute
    store = store if store is not None else MagicMock(wraps=InMemoryCredentialStore())
    coordinator = AuthenticationCoordinator(executor, store, prompt, config)
    return coordinator, executor, store


def prompt_answering(username="alice", password="s3cret", persist=False):
    prompt = MagicMock(spec=IAuthPrompt)
    prompt.show.return_value = AuthPromptResult(username=username, password=password, persist=persist)
    return prompt


def saved_store(username="alice", password="s3cret", url="https://svn.example.com/repo"):
    credential = Credential(username=username, password=password, server_url=url)
    return MagicMock(wraps=InMemoryCredentialStore([credential]))


REQUEST = CommandRequest(verb="update")


class TestSignatures:
    """Tests for stderr classification."""

    @pytest.mark.parametrize(
        "stderr",
        [
            AUTH_STDERR,
            "svn: E215004: No more credentials or we tried too many times.",
            "svn: Authorization failed",
            "svn: 认证失败",
        ],
    )
    def test_auth_failures(self, stderr):
        assert is_auth_failure(stderr) is True

    def test_conflict_is_not_auth(self):
        assert is_auth_failure("svn: E155011: File '/ws/a.txt' is out of date") is False

    def test_empty_is_not_auth(self):
        assert is_auth_failure("") is False

    def test_describe_known_failure(self):
        assert describe_failure("svn: E170013: Unable to connect").startswith("Cannot connect")

    def test_describe_unknown_failure(self):
        assert describe_failure("\nsvn: E999999: odd\n") == "svn: E999999: odd"


class TestAnonymous:
    """Tests for the anonymous first attempt."""

    def test_success_needs_no_credentials(self):
        server = ScriptedServer(accepted=None)
        prompt = prompt_answering()
        coordinator, _, store = make_coordinator(server, prompt=prompt)

        result = coordinator.run(REQUEST, WD)

        assert result.stdout == "anonymous ok"
        assert server.attempts == [None]
        store.get.assert_not_called()
        prompt.show.assert_not_called()

    def test_non_auth_failure_propagates(self):
        server = MagicMock()
        server.execute.side_effect = ExecutionError(
            "out of date", exit_code=1, stderr="svn: E155011: File is out of date"
        )
        store = MagicMock(wraps=InMemoryCredentialStore())
        coordinator = AuthenticationCoordinator(server, store, prompt_answering())

        with pytest.raises(ExecutionError):
            coordinator.run(REQUEST, WD)

        store.get.assert_not_called()


class TestSavedCredential:
    """Tests for the saved credential step."""

    def test_saved_credential_accepted(self):
        server = ScriptedServer()
        store = saved_store()
        prompt = prompt_answering()
        coordinator, _, _ = make_coordinator(server, store=store, prompt=prompt)

        result = coordinator.run(REQUEST, WD)

        assert result.stdout == "ok as alice"
        store.get.assert_called_once_with(REPO_URL)
        store.update_last_used.assert_called_once_with("https://svn.example.com/repo")
        prompt.show.assert_not_called()

    def test_rejected_credential_removed_then_prompted(self):
        server = ScriptedServer()
        store = saved_store(password="old")
        prompt = prompt_answering()
        coordinator, _, _ = make_coordinator(server, store=store, prompt=prompt)

        result = coordinator.run(REQUEST, WD)

        assert result.stdout == "ok as alice"
        store.remove.assert_called_once_with("https://svn.example.com/repo")
        prompt.show.assert_called_once_with(REPO_URL)

    def test_exactly_one_lookup_before_prompt(self):
        server = ScriptedServer()
        store = MagicMock(wraps=InMemoryCredentialStore())
        prompt = prompt_answering()
        coordinator, _, _ = make_coordinator(server, store=store, prompt=prompt)

        coordinator.run(REQUEST, WD)

        assert store.get.call_count == 1
        assert prompt.show.call_count == 1

    def test_repository_url_falls_back_to_root(self):
        server = ScriptedServer(urls={"repos-root-url": "https://svn.example.com/repo"})
        store = saved_store()
        coordinator, _, _ = make_coordinator(server, store=store)

        coordinator.run(REQUEST, WD)

        store.get.assert_called_once_with("https://svn.example.com/repo")

    def test_unknown_repository_url_skips_lookup(self):
        server = ScriptedServer(urls={})
        store = saved_store()
        prompt = prompt_answering()
        coordinator, _, _ = make_coordinator(server, store=store, prompt=prompt)

        coordinator.run(REQUEST, WD)

        store.get.assert_not_called()
        prompt.show.assert_called_once_with(WD)

    def test_known_repository_url_skips_info(self):
        server = ScriptedServer()
        store = saved_store()
        coordinator, executor, _ = make_coordinator(server, store=store)
        attempt = coordinator.new_attempt("https://svn.example.com/repo/branches/x")

        coordinator.run(REQUEST, WD, attempt=attempt)

        store.get.assert_called_once_with("https://svn.example.com/repo/branches/x")
        verbs = [call.args[0].verb for call in executor.execute.call_args_list]
        assert "info" not in verbs


class TestInteractivePrompt:
    """Tests for the interactive prompt step."""

    def test_prompting_disabled(self):
        server = ScriptedServer()
        prompt = prompt_answering()
        coordinator, _, _ = make_coordinator(
            server, prompt=prompt, config=AuthConfig(interactive_prompt=False)
        )

        with pytest.raises(AuthenticationRequiredError):
            coordinator.run(REQUEST, WD)

        prompt.show.assert_not_called()

    def test_no_prompt_configured(self):
        coordinator, _, _ = make_coordinator(ScriptedServer())

        with pytest.raises(AuthenticationRequiredError):
            coordinator.run(REQUEST, WD)

    def test_user_cancels(self):
        prompt = MagicMock(spec=IAuthPrompt)
        prompt.show.return_value = None
        coordinator, _, _ = make_coordinator(ScriptedServer(), prompt=prompt)

        with pytest.raises(UserCancelledAuthError):
            coordinator.run(REQUEST, WD)

    def test_prompted_credential_rejected(self):
        server = ScriptedServer()
        prompt = prompt_answering(password="wrong")
        coordinator, _, _ = make_coordinator(server, prompt=prompt)

        with pytest.raises(AuthenticationFailedError) as exc_info:
            coordinator.run(REQUEST, WD)

        assert not isinstance(exc_info.value, AuthenticationRequiredError)
        assert exc_info.value.repository_url == REPO_URL
        assert prompt.show.call_count == 1

    def test_persist_saves_credential(self):
        store = MagicMock(wraps=InMemoryCredentialStore())
        coordinator, _, _ = make_coordinator(
            ScriptedServer(), store=store, prompt=prompt_answering(persist=True)
        )

        coordinator.run(REQUEST, WD)

        store.save.assert_called_once_with(REPO_URL, "alice", "s3cret")

    def test_no_persist_does_not_save(self):
        store = MagicMock(wraps=InMemoryCredentialStore())
        coordinator, _, _ = make_coordinator(ScriptedServer(), store=store, prompt=prompt_answering())

        coordinator.run(REQUEST, WD)

        store.save.assert_not_called()

    def test_auto_save_disabled(self):
        store = MagicMock(wraps=InMemoryCredentialStore())
        coordinator, _, _ = make_coordinator(
            ScriptedServer(),
            store=store,
            prompt=prompt_answering(persist=True),
            config=AuthConfig(auto_save_credentials=False),
        )

        coordinator.run(REQUEST, WD)

        store.save.assert_not_called()


class TestSharedAttempt:
    """Tests for reusing one attempt across retries of an operation."""

    def test_retry_reuses_established_credential(self):
        server = ScriptedServer()
        store = MagicMock(wraps=InMemoryCredentialStore())
        prompt = prompt_answering()
        coordinator, _, _ = make_coordinator(server, store=store, prompt=prompt)
        attempt = coordinator.new_attempt()

        coordinator.run(CommandRequest(verb="update"), WD, attempt=attempt)
        coordinator.run(CommandRequest(verb="commit", options=("-m", "x")), WD, attempt=attempt)

        assert attempt.state is AuthState.AUTHENTICATED
        assert store.get.call_count == 1
        assert prompt.show.call_count == 1
        assert server.attempts[-1].username == "alice"

    def test_never_prompts_twice(self):
        server = ScriptedServer()
        prompt = prompt_answering()
        coordinator, _, _ = make_coordinator(server, prompt=prompt)
        attempt = coordinator.new_attempt()
        coordinator.run(REQUEST, WD, attempt=attempt)
        server.accepted = ("alice", "rotated")

        with pytest.raises(AuthenticationFailedError):
            coordinator.run(REQUEST, WD, attempt=attempt)

        assert prompt.show.call_count == 1
        assert attempt.state is AuthState.ABANDONED
