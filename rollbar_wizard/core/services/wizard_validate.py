"""
Interview input validation.

Each validator takes the raw string typed by the user and returns the
cleaned value, or raises ``ValidationError`` with the message to show
before re-prompting.  The literal answer ``exit`` cancels the wizard
cleanly from any text prompt.
"""

from __future__ import annotations

import re

from rollbar_wizard.core.errors import ValidationError, WizardCancelled

EXIT_WORD = "exit"

_TOKEN_PREFIXES = ("post_server_item_", "post_client_item_")
_HEX_TOKEN_RE = re.compile(r"^[a-fA-F0-9]{32,128}$")
_ENV_VAR_RE = re.compile(r"^[A-Z_][A-Z0-9_]*$")


def check_exit(value: str) -> None:
    """Raise ``WizardCancelled(exit_code=0)`` if the user typed ``exit``."""
    if value.strip().lower() == EXIT_WORD:
        raise WizardCancelled("Exiting wizard.", exit_code=0)


def is_valid_access_token(token: str) -> bool:
    if token.startswith(_TOKEN_PREFIXES):
        return True
    return bool(_HEX_TOKEN_RE.match(token))


def validate_access_token(value: str) -> str:
    check_exit(value)
    token = value.strip()
    if not token:
        raise ValidationError("Access token is required")
    if not is_valid_access_token(token):
        raise ValidationError(
            "Invalid access token format. Tokens should be 32-128 hexadecimal characters."
        )
    return token


def validate_env_var_name(value: str) -> str:
    check_exit(value)
    name = value.strip()
    if not name:
        raise ValidationError("Environment variable name is required")
    if not _ENV_VAR_RE.match(name):
        raise ValidationError(
            "Invalid environment variable name. Use uppercase letters, numbers, "
            "and underscores only."
        )
    return name


def validate_environment(value: str) -> str:
    check_exit(value)
    env = value.strip()
    if not env:
        raise ValidationError("Environment name is required")
    return env


def validate_code_version(value: str) -> str:
    check_exit(value)
    version = value.strip()
    if not version:
        raise ValidationError("Code version is required")
    return version
