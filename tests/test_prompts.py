"""
Tests for the click-backed prompter and the exit handlers.
"""

import signal

import click
import pytest
from click.testing import CliRunner

from rollbar_wizard.core.errors import WizardCancelled
from rollbar_wizard.core.services.wizard_validate import validate_access_token
from rollbar_wizard.ui.cli import signals
from rollbar_wizard.ui.cli.prompts import ClickPrompter

TOKEN = "3c" * 16


def _command(ask):
    """Wrap one prompt in a click command; cancellations become exit codes."""

    @click.command()
    def cmd():
        try:
            click.echo(f"ANSWER={ask(ClickPrompter())}")
        except WizardCancelled as e:
            click.echo(f"CANCELLED={e.exit_code}")

    return cmd


class TestClickPrompter:
    def test_text_reprompts_until_valid(self):
        cmd = _command(lambda p: p.text("Token:", validate=validate_access_token))
        result = CliRunner().invoke(cmd, input=f"nope\n{TOKEN}\n")
        assert result.exit_code == 0
        assert "32-128 hexadecimal" in result.output
        assert f"ANSWER={TOKEN}" in result.output

    def test_text_default(self):
        cmd = _command(lambda p: p.text("Env:", default="production"))
        result = CliRunner().invoke(cmd, input="\n")
        assert "ANSWER=production" in result.output

    def test_eof_cancels_with_failure_code(self):
        cmd = _command(lambda p: p.text("Token:"))
        result = CliRunner().invoke(cmd, input="")
        assert "CANCELLED=1" in result.output

    def test_confirm(self):
        cmd = _command(lambda p: p.confirm("Replay?", default=True))
        assert "ANSWER=False" in CliRunner().invoke(cmd, input="n\n").output

    def test_select_by_number_and_value(self):
        choices = [("app", "App Router"), ("pages", "Pages Router")]
        cmd = _command(lambda p: p.select("Router?", choices, default="app"))
        assert "ANSWER=pages" in CliRunner().invoke(cmd, input="2\n").output
        assert "ANSWER=pages" in CliRunner().invoke(cmd, input="pages\n").output
        assert "ANSWER=app" in CliRunner().invoke(cmd, input="\n").output

    def test_select_rejects_unknown(self):
        choices = [("app", "App Router"), ("pages", "Pages Router")]
        cmd = _command(lambda p: p.select("Router?", choices))
        result = CliRunner().invoke(cmd, input="9\napp\n")
        assert "Choose one of: app, pages" in result.output
        assert "ANSWER=app" in result.output

    def test_select_exit(self):
        cmd = _command(lambda p: p.select("Router?", [("app", "App Router")]))
        assert "CANCELLED=0" in CliRunner().invoke(cmd, input="exit\n").output


class TestExitHandlers:
    def test_installed_once(self):
        assert signals.install_exit_handlers() is True
        assert signals.install_exit_handlers() is False
        assert signal.getsignal(signal.SIGINT) is signals._handle_exit
        assert signal.getsignal(signal.SIGTERM) is signals._handle_exit

    def test_reset_allows_reinstall(self):
        signals.install_exit_handlers()
        signals.reset_exit_handlers()
        assert signal.getsignal(signal.SIGINT) is signal.default_int_handler
        assert signals.install_exit_handlers() is True

    def test_handler_exits_cleanly(self):
        with pytest.raises(SystemExit) as exc:
            signals._handle_exit(signal.SIGINT, None)
        assert exc.value.code == 0
