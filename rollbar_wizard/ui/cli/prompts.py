"""
Prompt primitives backed by click.

The interview talks to a ``Prompter`` so it can be driven by a scripted
fake in tests.  ``ClickPrompter`` is the terminal implementation: a
validator raising ``ValidationError`` is turned into
``click.BadParameter`` so click reports the message and asks again.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

import click

from rollbar_wizard.core.errors import ValidationError, WizardCancelled

Validator = Callable[[str], str]


class Prompter(Protocol):
    def text(self, message: str, *, default: str | None = None, validate: Validator | None = None) -> str: ...

    def confirm(self, message: str, *, default: bool = True) -> bool: ...

    def select(self, message: str, choices: Sequence[tuple[str, str]], *, default: str | None = None) -> str: ...

    def note(self, message: str) -> None: ...


def _value_proc(validate: Validator | None) -> Callable[[str], str]:
    def proc(value: str) -> str:
        if validate is None:
            return value
        try:
            return validate(value)
        except ValidationError as e:
            raise click.BadParameter(str(e)) from e

    return proc


class ClickPrompter:
    """Terminal prompts.  EOF or an aborted prompt cancels with exit 1."""

    def text(self, message: str, *, default: str | None = None, validate: Validator | None = None) -> str:
        try:
            return click.prompt(
                click.style(f"◆ {message}", bold=True),
                default=default,
                value_proc=_value_proc(validate),
            )
        except (click.Abort, EOFError) as e:
            raise WizardCancelled() from e

    def confirm(self, message: str, *, default: bool = True) -> bool:
        try:
            return click.confirm(click.style(f"◆ {message}", bold=True), default=default)
        except (click.Abort, EOFError) as e:
            raise WizardCancelled() from e

    def select(self, message: str, choices: Sequence[tuple[str, str]], *, default: str | None = None) -> str:
        """Pick one of ``choices`` (value, label) by value or by number."""
        click.secho(f"◆ {message}", bold=True)
        values = [value for value, _ in choices]
        for i, (value, label) in enumerate(choices, 1):
            click.echo(f"   {i}. {label} [{value}]")

        def pick(raw: str) -> str:
            raw = raw.strip()
            if raw.lower() == "exit":
                raise WizardCancelled("Exiting wizard.", exit_code=0)
            if raw.isdigit() and 1 <= int(raw) <= len(values):
                return values[int(raw) - 1]
            if raw in values:
                return raw
            raise click.BadParameter(f"Choose one of: {', '.join(values)}")

        try:
            return click.prompt("  Choice", default=default or values[0], value_proc=pick)
        except (click.Abort, EOFError) as e:
            raise WizardCancelled() from e

    def note(self, message: str) -> None:
        click.secho(f"│ {message}", dim=True)
