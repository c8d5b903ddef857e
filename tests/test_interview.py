"""
Tests for the interview — question order, branching and the resulting config.
"""

import pytest

from rollbar_wizard.core.config.loader import VercelDefaults, WizardDefaults
from rollbar_wizard.core.errors import ValidationError, WizardCancelled
from rollbar_wizard.core.services.project_probes import inspect_project
from rollbar_wizard.ui.cli.interview import gather_configuration

SERVER = "1a" * 16
CLIENT = "2b" * 16


class ScriptedPrompter:
    """Answers prompts from a list; ``None`` accepts the default."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.asked: list[tuple[str, str]] = []
        self.notes: list[str] = []

    def _next(self, kind, message):
        self.asked.append((kind, message))
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {message}")
        return self.answers.pop(0)

    def text(self, message, *, default=None, validate=None):
        answer = self._next("text", message)
        value = default if answer is None else answer
        return validate(value) if validate else value

    def confirm(self, message, *, default=True):
        answer = self._next("confirm", message)
        return default if answer is None else answer

    def select(self, message, choices, *, default=None):
        answer = self._next("select", message)
        value = default if answer is None else answer
        assert value in [v for v, _ in choices]
        return value

    def note(self, message):
        self.notes.append(message)


class TestTokenFlow:
    def test_full_answers(self, make_project):
        fp = inspect_project(make_project(dirs=["app"]))
        prompter = ScriptedPrompter(
            [False, SERVER, CLIENT, "staging", True, "v1.2.3", True, False, True]
        )
        cfg = gather_configuration(prompter, fp)

        assert cfg.server_access_token == SERVER
        assert cfg.client_access_token == CLIENT
        assert cfg.environment == "staging"
        assert cfg.enable_deployment
        assert cfg.code_version == "v1.2.3"
        assert cfg.enable_sourcemaps
        assert not cfg.enable_replay
        assert cfg.router_type == "app"
        assert cfg.create_example_page
        assert not cfg.is_vercel
        assert prompter.answers == []
        assert "Detected App Router" in prompter.notes

    def test_deployment_off_skips_code_version(self, make_project):
        fp = inspect_project(make_project(dirs=["pages"]))
        prompter = ScriptedPrompter([False, SERVER, CLIENT, None, False, None, None, None])
        cfg = gather_configuration(prompter, fp)
        assert not cfg.enable_deployment
        assert cfg.code_version is None
        assert cfg.environment == "production"
        assert cfg.router_type == "pages"
        assert not any("Code version" in m for _, m in prompter.asked)

    def test_invalid_token_raises(self, make_project):
        fp = inspect_project(make_project(dirs=["app"]))
        with pytest.raises(ValidationError):
            gather_configuration(ScriptedPrompter([False, "short"]), fp)

    def test_exit_cancels(self, make_project):
        fp = inspect_project(make_project(dirs=["app"]))
        with pytest.raises(WizardCancelled) as exc:
            gather_configuration(ScriptedPrompter([False, "exit"]), fp)
        assert exc.value.exit_code == 0


class TestVercelFlow:
    def test_no_tokens_and_no_deployment_question(self, make_project):
        fp = inspect_project(make_project(dirs=["app"]))
        prompter = ScriptedPrompter([True, None, "MY_SERVER_TOKEN", None, None, None, None])
        cfg = gather_configuration(prompter, fp)

        assert cfg.is_vercel
        assert cfg.vercel_client_token_env_var == "VERCEL_ROLLBAR_CLIENT_TOKEN"
        assert cfg.vercel_server_token_env_var == "MY_SERVER_TOKEN"
        assert cfg.server_access_token == ""
        assert not cfg.enable_deployment
        assert not any("deployment" in m for _, m in prompter.asked)

    def test_defaults_file_seeds_answers(self, make_project):
        fp = inspect_project(make_project(dirs=["app"]))
        defaults = WizardDefaults(
            enable_replay=False,
            vercel=VercelDefaults(client_token_env_var="VC", server_token_env_var="VS"),
        )
        prompter = ScriptedPrompter([None, None, None, None, None, None, None])
        cfg = gather_configuration(prompter, fp, environment_default="preview", defaults=defaults)

        assert cfg.is_vercel
        assert cfg.vercel_client_token_env_var == "VC"
        assert cfg.vercel_server_token_env_var == "VS"
        assert cfg.environment == "preview"
        assert not cfg.enable_replay


class TestRouterQuestion:
    def test_both_routers_asks(self, make_project):
        fp = inspect_project(make_project(dirs=["app", "pages"]))
        prompter = ScriptedPrompter([False, SERVER, CLIENT, None, False, None, None, "both", None])
        cfg = gather_configuration(prompter, fp)
        assert cfg.router_type == "both"
        assert prompter.asked[-2][0] == "select"

    def test_no_router_asks_with_app_default(self, make_project):
        fp = inspect_project(make_project())
        prompter = ScriptedPrompter([False, SERVER, CLIENT, None, False, None, None, None, None])
        cfg = gather_configuration(prompter, fp)
        assert cfg.router_type == "app"
        assert ("select", "Which Next.js router are you using?") in prompter.asked
