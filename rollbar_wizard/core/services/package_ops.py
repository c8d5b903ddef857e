"""
Package installation — channel-independent service.

Drives npm, yarn or pnpm to add dependencies to the target project.
Commands run synchronously with the terminal's stdio so the user sees
the package manager's own progress output; there is no timeout.

Failures never raise: a non-zero exit or a missing executable becomes a
``warned`` Outcome carrying the command to run by hand.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable

from rollbar_wizard.core.models.action import Outcome
from rollbar_wizard.core.models.fingerprint import PackageManager

logger = logging.getLogger(__name__)


# ── Package manager definitions ─────────────────────────────────


_PACKAGE_MANAGERS: dict[str, dict] = {
    "npm": {
        "name": "npm",
        "add": ["npm", "install"],
        "add_dev": ["npm", "install", "--save-dev"],
        "sync": ["npm", "install"],
    },
    "yarn": {
        "name": "Yarn",
        "add": ["yarn", "add"],
        "add_dev": ["yarn", "add", "--dev"],
        "sync": ["yarn", "install", "--frozen-lockfile=false"],
    },
    "pnpm": {
        "name": "pnpm",
        "add": ["pnpm", "add"],
        "add_dev": ["pnpm", "add", "--save-dev"],
        "sync": ["pnpm", "install", "--no-frozen-lockfile"],
    },
}

# Runtime packages the Rollbar integration needs
ROLLBAR_PACKAGES = ("rollbar@^3.0.0-rc.1", "@rollbar/react")

Runner = Callable[[list[str], Path], int]


def run_command(args: list[str], cwd: Path) -> int:
    """Run a command with inherited stdio and return its exit code."""
    logger.debug("Running %s in %s", " ".join(args), cwd)
    return subprocess.run(args, cwd=str(cwd), check=False).returncode


def _spec(manager: str) -> dict:
    return _PACKAGE_MANAGERS.get(manager, _PACKAGE_MANAGERS["npm"])


def install_command(packages: list[str], manager: PackageManager, *, dev: bool = False) -> list[str]:
    """The full command line that adds ``packages``."""
    spec = _spec(manager)
    return [*(spec["add_dev"] if dev else spec["add"]), *packages]


def sync_command(manager: PackageManager) -> list[str]:
    return list(_spec(manager)["sync"])


def package_name(spec: str) -> str:
    """Strip a version range from an install spec (scoped names included).

    ``rollbar@^3.0.0`` → ``rollbar``, ``@rollbar/react`` → ``@rollbar/react``.
    """
    head, sep, _ = spec[1:].partition("@")
    return spec[0] + head if sep else spec


def _run_step(
    phase: str,
    args: list[str],
    root: Path,
    runner: Runner,
    success: str,
) -> Outcome:
    manual = " ".join(args)
    try:
        code = runner(args, root)
    except FileNotFoundError:
        logger.warning("%s not found on PATH", args[0])
        return Outcome.warned(
            phase,
            message=f"{args[0]} is not installed. Run manually: {manual}",
            snippet=manual,
        )
    except OSError as e:
        logger.warning("Failed to run %s: %s", manual, e)
        return Outcome.warned(phase, message=f"Could not run {args[0]}: {e}", snippet=manual)

    if code != 0:
        logger.warning("%s exited with %d", manual, code)
        return Outcome.warned(
            phase,
            message=f"{args[0]} exited with code {code}. Run manually: {manual}",
            snippet=manual,
        )
    return Outcome.patched(phase, "package.json", message=success)


# ═══════════════════════════════════════════════════════════════════
#  Act
# ═══════════════════════════════════════════════════════════════════


def install_packages(
    root: Path,
    packages: list[str],
    manager: PackageManager,
    *,
    dev: bool = False,
    runner: Runner = run_command,
    phase: str = "install",
) -> Outcome:
    """Add ``packages`` with the project's package manager."""
    if not packages:
        return Outcome.skipped(phase, message="No packages to install")
    args = install_command(packages, manager, dev=dev)
    return _run_step(
        phase,
        args,
        root,
        runner,
        success=f"Installed {', '.join(packages)} with {_spec(manager)['name']}",
    )


def sync_lockfile(
    root: Path,
    manager: PackageManager,
    *,
    runner: Runner = run_command,
    phase: str = "install",
) -> Outcome:
    """Re-resolve the lockfile after package.json was edited directly."""
    return _run_step(
        phase,
        sync_command(manager),
        root,
        runner,
        success=f"Lockfile updated with {_spec(manager)['name']}",
    )
