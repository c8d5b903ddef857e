"""
Interview — asks the setup questions and returns a complete WizardConfig.

Questions, in order:

    1. Vercel?           → Vercel token env var names, or the two tokens
    2. environment name
    3. deployment tracking (not asked in Vercel mode) → code version
    4. source maps
    5. session replay
    6. router type       (only asked when the layout is ambiguous)
    7. example page

Nothing is returned until every answer is in; cancelling at any point
raises ``WizardCancelled``.
"""

from __future__ import annotations

import logging

from rollbar_wizard.core.config.loader import WizardDefaults
from rollbar_wizard.core.models.config import WizardConfig
from rollbar_wizard.core.models.fingerprint import ProjectFingerprint, RouterType
from rollbar_wizard.core.services import wizard_validate as v
from rollbar_wizard.ui.cli.prompts import Prompter

logger = logging.getLogger(__name__)

_ROUTER_CHOICES_BOTH: list[tuple[str, str]] = [
    ("app", "App Router"),
    ("pages", "Pages Router"),
    ("both", "Both"),
]
_ROUTER_CHOICES_NONE: list[tuple[str, str]] = [
    ("app", "App Router (recommended)"),
    ("pages", "Pages Router"),
]


def _ask_router_type(prompter: Prompter, fingerprint: ProjectFingerprint) -> RouterType:
    hint = fingerprint.router_type_hint()
    if hint == "both":
        return prompter.select(
            "Both App Router and Pages Router detected. Which are you using?",
            _ROUTER_CHOICES_BOTH,
            default="app",
        )  # type: ignore[return-value]
    if hint is not None:
        prompter.note(f"Detected {'App' if hint == 'app' else 'Pages'} Router")
        return hint
    return prompter.select(
        "Which Next.js router are you using?",
        _ROUTER_CHOICES_NONE,
        default="app",
    )  # type: ignore[return-value]


def gather_configuration(
    prompter: Prompter,
    fingerprint: ProjectFingerprint,
    *,
    environment_default: str = "production",
    defaults: WizardDefaults | None = None,
) -> WizardConfig:
    defaults = defaults or WizardDefaults()

    server_token = ""
    client_token = ""
    vercel_client_var: str | None = None
    vercel_server_var: str | None = None

    is_vercel = prompter.confirm(
        "Are you deploying with Vercel?",
        default=bool(defaults.vercel.client_token_env_var),
    )
    if is_vercel:
        prompter.note("Tokens will be read from the environment variables Vercel provides.")
        vercel_client_var = prompter.text(
            "Vercel client token environment variable name:",
            default=defaults.vercel.client_token_env_var or "VERCEL_ROLLBAR_CLIENT_TOKEN",
            validate=v.validate_env_var_name,
        )
        vercel_server_var = prompter.text(
            "Vercel server token environment variable name:",
            default=defaults.vercel.server_token_env_var or "VERCEL_ROLLBAR_SERVER_TOKEN",
            validate=v.validate_env_var_name,
        )
    else:
        server_token = prompter.text(
            "Enter your Rollbar project server access token (post_server_item):",
            validate=v.validate_access_token,
        )
        client_token = prompter.text(
            "Enter your Rollbar project client access token (post_client_item):",
            validate=v.validate_access_token,
        )

    environment = prompter.text(
        "Environment name:",
        default=environment_default or defaults.environment,
        validate=v.validate_environment,
    )

    enable_deployment = False
    code_version: str | None = None
    if not is_vercel:
        enable_deployment = prompter.confirm(
            "Enable deployment tracking?",
            default=defaults.enable_deployment,
        )
        if enable_deployment:
            code_version = prompter.text(
                "Code version (e.g. git SHA, semver, or build number):",
                validate=v.validate_code_version,
            )

    enable_sourcemaps = prompter.confirm(
        "Enable source map uploads for readable stack traces?",
        default=defaults.enable_sourcemaps,
    )
    enable_replay = prompter.confirm(
        "Enable Session Replay?",
        default=defaults.enable_replay,
    )

    router_type = _ask_router_type(prompter, fingerprint)

    create_example_page = prompter.confirm(
        "Create an example page to test your Rollbar setup?",
        default=defaults.create_example_page,
    )

    config = WizardConfig(
        server_access_token=server_token,
        client_access_token=client_token,
        environment=environment,
        enable_deployment=enable_deployment,
        code_version=code_version,
        enable_sourcemaps=enable_sourcemaps,
        enable_replay=enable_replay,
        router_type=router_type,
        create_example_page=create_example_page,
        is_vercel=is_vercel,
        vercel_client_token_env_var=vercel_client_var,
        vercel_server_token_env_var=vercel_server_var,
    )
    logger.debug("Interview complete: features=%s router=%s", config.features(), router_type)
    return config
