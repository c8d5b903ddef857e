"""
Configuration loader — reads .rollbar-wizard.yml into WizardDefaults.

The defaults file is optional.  When present at the project root it
seeds the interview's initial answers (and the non-interactive run's
choices); it never holds secrets.  Example::

    environment: staging
    enable_sourcemaps: true
    enable_replay: false
    vercel:
      client_token_env_var: VERCEL_ROLLBAR_CLIENT_TOKEN
      server_token_env_var: VERCEL_ROLLBAR_SERVER_TOKEN
    package_manager: pnpm
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from rollbar_wizard.core.models.fingerprint import PackageManager

logger = logging.getLogger(__name__)

DEFAULTS_FILE = ".rollbar-wizard.yml"


class ConfigError(Exception):
    """Raised when the defaults file is invalid."""


class VercelDefaults(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_token_env_var: str | None = None
    server_token_env_var: str | None = None


class WizardDefaults(BaseModel):
    """Project-level defaults for wizard answers."""

    model_config = ConfigDict(extra="forbid")

    environment: str = "production"
    enable_deployment: bool = True
    enable_sourcemaps: bool = True
    enable_replay: bool = True
    create_example_page: bool = False
    package_manager: PackageManager | None = None
    vercel: VercelDefaults = Field(default_factory=VercelDefaults)


def find_defaults_file(project_root: Path) -> Path | None:
    """Return the defaults file path if it exists at the project root."""
    candidate = project_root / DEFAULTS_FILE
    return candidate if candidate.is_file() else None


def load_defaults(project_root: Path) -> WizardDefaults:
    """Load wizard defaults for a project.

    Returns built-in defaults when no file exists.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or fails the schema.
    """
    path = find_defaults_file(project_root)
    if path is None:
        logger.debug("No %s in %s — using built-in defaults", DEFAULTS_FILE, project_root)
        return WizardDefaults()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return WizardDefaults()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        defaults = WizardDefaults.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid wizard defaults in {path}: {e}") from e

    logger.info("Loaded wizard defaults from %s", path)
    return defaults
