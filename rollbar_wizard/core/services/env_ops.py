"""
Environment file operations — ``.env.local`` and ``.gitignore``.

Both files are user-owned: lines are only ever appended, never reordered
or rewritten, and the file is only written when the content changed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rollbar_wizard.core.errors import FilesystemError
from rollbar_wizard.core.models.action import Outcome
from rollbar_wizard.core.models.config import (
    CLIENT_TOKEN_ENV_VAR,
    CODE_VERSION_ENV_VAR,
    SERVER_TOKEN_ENV_VAR,
    WizardConfig,
)

logger = logging.getLogger(__name__)

ENV_FILE = ".env.local"
GITIGNORE_FILE = ".gitignore"
ROLLBAR_HEADER = "# Rollbar Configuration"


# ── Parsing ─────────────────────────────────────────────────────────


def parse_env_text(content: str) -> dict[str, str]:
    """Parse .env text into a key/value dict.

    Handles:
    - KEY=value
    - KEY="value"
    - KEY='value'
    - export KEY=value
    - Comments (#)
    - Empty lines
    """
    result: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("export "):
            line = line[7:].strip()

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip()

        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]

        result[key] = value

    return result


def _read_text(path: Path, phase: str) -> str:
    if not path.exists():
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise FilesystemError(phase, path, e) from e


def _write_text(path: Path, content: str, phase: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise FilesystemError(phase, path, e) from e


def _with_trailing_newline(content: str) -> str:
    if content and not content.endswith("\n"):
        return content + "\n"
    return content


# ═══════════════════════════════════════════════════════════════════
#  .env.local
# ═══════════════════════════════════════════════════════════════════


def render_env_additions(existing: str, config: WizardConfig) -> str:
    """The text to append to ``existing`` (empty string when nothing)."""
    keys = parse_env_text(existing)
    additions = ""

    if config.is_vercel:
        if ROLLBAR_HEADER not in existing:
            client = config.vercel_client_token_env_var or "VERCEL_ROLLBAR_CLIENT_TOKEN"
            server = config.vercel_server_token_env_var or "VERCEL_ROLLBAR_SERVER_TOKEN"
            additions += (
                f"\n{ROLLBAR_HEADER} (Vercel)\n"
                "# These environment variables are set by Vercel's Rollbar integration\n"
                f"# Client Token: {client}\n"
                f"# Server Token: {server}\n"
            )
    elif SERVER_TOKEN_ENV_VAR not in keys:
        additions += (
            f"\n{ROLLBAR_HEADER}\n"
            f"{SERVER_TOKEN_ENV_VAR}={config.server_access_token}\n"
            f"{CLIENT_TOKEN_ENV_VAR}={config.client_access_token}\n"
        )

    # A commented placeholder also counts as present
    if config.enable_deployment and CODE_VERSION_ENV_VAR not in existing:
        if config.code_version:
            additions += f"{CODE_VERSION_ENV_VAR}={config.code_version}\n"
        else:
            additions += (
                f"# Set {CODE_VERSION_ENV_VAR} to track deployments "
                "(e.g., git commit SHA, semver, build number)\n"
                f"# {CODE_VERSION_ENV_VAR}=your-version-here\n"
            )

    return additions


def update_env_file(root: Path, config: WizardConfig, *, phase: str = "env") -> Outcome:
    """Append the Rollbar variables to ``.env.local`` where missing."""
    path = root / ENV_FILE
    existing = _read_text(path, phase)
    additions = render_env_additions(existing, config)
    if not additions:
        return Outcome.skipped(phase, ENV_FILE, f"{ENV_FILE} already has the Rollbar settings")

    base = _with_trailing_newline(existing)
    if not existing:
        additions = additions.lstrip("\n")
    _write_text(path, base + additions, phase)
    logger.info("Updated %s", path)
    if existing:
        return Outcome.patched(phase, ENV_FILE, f"Updated {ENV_FILE} with Rollbar configuration")
    return Outcome.created(phase, ENV_FILE, f"Created {ENV_FILE} with Rollbar configuration")


# ═══════════════════════════════════════════════════════════════════
#  .gitignore
# ═══════════════════════════════════════════════════════════════════


def ensure_gitignore_entry(root: Path, entry: str = ENV_FILE, *, phase: str = "env") -> Outcome:
    """Make sure ``entry`` is ignored; creates .gitignore when absent."""
    path = root / GITIGNORE_FILE
    existing = _read_text(path, phase)
    if entry in (line.strip() for line in existing.splitlines()):
        return Outcome.skipped(phase, GITIGNORE_FILE, f"{entry} already in {GITIGNORE_FILE}")

    block = f"# Environment variables\n{entry}\n"
    if existing:
        content = _with_trailing_newline(existing) + "\n" + block
        _write_text(path, content, phase)
        return Outcome.patched(phase, GITIGNORE_FILE, f"Added {entry} to {GITIGNORE_FILE}")

    _write_text(path, block, phase)
    return Outcome.created(phase, GITIGNORE_FILE, f"Created {GITIGNORE_FILE} ignoring {entry}")
