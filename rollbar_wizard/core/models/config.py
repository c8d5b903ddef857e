"""
Wizard config — the resolved set of user choices.

Built by the interview (or from flags/env in non-interactive mode) and
handed to the mutation engine read-only.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from rollbar_wizard.core.models.fingerprint import RouterType

SERVER_TOKEN_ENV_VAR = "ROLLBAR_PROJECT_ACCESS_SERVER_TOKEN"
CLIENT_TOKEN_ENV_VAR = "NEXT_PUBLIC_ROLLBAR_PROJECT_ACCESS_CLIENT_TOKEN"
CODE_VERSION_ENV_VAR = "ROLLBAR_CODE_VERSION"


class WizardConfig(BaseModel):
    """Immutable answers to the wizard interview."""

    model_config = ConfigDict(frozen=True)

    server_access_token: str = ""
    client_access_token: str = ""
    environment: str = "production"

    enable_deployment: bool = True
    code_version: str | None = None
    enable_sourcemaps: bool = True
    enable_replay: bool = True

    router_type: RouterType = "app"
    create_example_page: bool = False

    # Managed-platform mode: tokens live in Vercel's env, not on disk
    is_vercel: bool = False
    vercel_client_token_env_var: str | None = None
    vercel_server_token_env_var: str | None = None

    @property
    def server_token_env_var(self) -> str:
        if self.is_vercel and self.vercel_server_token_env_var:
            return self.vercel_server_token_env_var
        return SERVER_TOKEN_ENV_VAR

    @property
    def client_token_env_var(self) -> str:
        if self.is_vercel and self.vercel_client_token_env_var:
            return self.vercel_client_token_env_var
        return CLIENT_TOKEN_ENV_VAR

    def features(self) -> list[str]:
        """Human-readable list of enabled features for the summary."""
        out: list[str] = []
        if self.enable_deployment:
            out.append("Deployment Tracking")
        if self.enable_sourcemaps:
            out.append("Source Maps")
        if self.enable_replay:
            out.append("Session Replay")
        return out
