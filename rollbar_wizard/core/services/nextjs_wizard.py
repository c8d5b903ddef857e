"""
Next.js wizard — runs the setup phases in order and reports what happened.

Channel-independent: no prompts, no click.  The CLI gathers a
``WizardConfig`` (interactively or from flags) and hands it here together
with the project fingerprint.

Phases (fixed order):

    1. install          rollbar + @rollbar/react
    2. config           rollbar.{server,edge,client}.config
    3. instrumentation  instrumentation hook
    4. error-pages      _error / global-error
    5. env              .env.local, .gitignore
    6. next-config      productionBrowserSourceMaps      (source maps only)
    7. sourcemaps       upload script + package.json     (source maps only)
    8. example          example page and API route       (optional)

A ``FilesystemError`` stops the run at the failing phase; the report
records which phase failed.  Everything else degrades to warned outcomes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping

from rollbar_wizard.core.config.loader import WizardDefaults
from rollbar_wizard.core.engine.executor import PhaseResult, SetupReport, apply_actions
from rollbar_wizard.core.errors import FilesystemError, PrerequisiteError
from rollbar_wizard.core.models.action import Outcome
from rollbar_wizard.core.models.config import (
    CLIENT_TOKEN_ENV_VAR,
    CODE_VERSION_ENV_VAR,
    SERVER_TOKEN_ENV_VAR,
    WizardConfig,
)
from rollbar_wizard.core.models.fingerprint import PackageManager, ProjectFingerprint
from rollbar_wizard.core.services import env_ops, manifest_ops, nextjs_setup, package_ops
from rollbar_wizard.core.services.project_probes import has_dependency, read_package_json
from rollbar_wizard.core.services.wizard_validate import is_valid_access_token

logger = logging.getLogger(__name__)

PHASES = (
    "install",
    "config",
    "instrumentation",
    "error-pages",
    "env",
    "next-config",
    "sourcemaps",
    "example",
)

PhaseCallback = Callable[[PhaseResult], None]


# ── Non-interactive config ──────────────────────────────────────────


def build_default_config(
    options: Mapping[str, object],
    fingerprint: ProjectFingerprint,
    environ: Mapping[str, str],
    defaults: WizardDefaults | None = None,
) -> WizardConfig:
    """Config for ``--yes`` runs, from flags, environment and defaults file.

    Raises:
        PrerequisiteError: no usable access token outside Vercel mode.
    """
    defaults = defaults or WizardDefaults()
    vercel = defaults.vercel
    is_vercel = bool(vercel.client_token_env_var and vercel.server_token_env_var)

    server = str(options.get("access_token") or environ.get(SERVER_TOKEN_ENV_VAR, "")).strip()
    client = environ.get(CLIENT_TOKEN_ENV_VAR, "").strip() or server

    if not is_vercel:
        if not server:
            raise PrerequisiteError(
                f"No access token. Pass --access-token or set {SERVER_TOKEN_ENV_VAR}."
            )
        for label, token in (("server", server), ("client", client)):
            if not is_valid_access_token(token):
                raise PrerequisiteError(f"Invalid {label} access token format.")

    environment = str(options.get("environment") or defaults.environment)
    router = fingerprint.router_type_hint() or "app"

    return WizardConfig(
        server_access_token="" if is_vercel else server,
        client_access_token="" if is_vercel else client,
        environment=environment,
        enable_deployment=not is_vercel,
        code_version=environ.get(CODE_VERSION_ENV_VAR) or None,
        enable_sourcemaps=True,
        enable_replay=True,
        router_type=router,
        create_example_page=defaults.create_example_page,
        is_vercel=is_vercel,
        vercel_client_token_env_var=vercel.client_token_env_var if is_vercel else None,
        vercel_server_token_env_var=vercel.server_token_env_var if is_vercel else None,
    )


# ═══════════════════════════════════════════════════════════════════
#  Phases
# ═══════════════════════════════════════════════════════════════════


def _install_phase(
    root: Path,
    manager: PackageManager,
    result: PhaseResult,
    *,
    skip_install: bool,
    runner: package_ops.Runner,
) -> None:
    pkg = read_package_json(root)
    missing = [
        spec
        for spec in package_ops.ROLLBAR_PACKAGES
        if not has_dependency(pkg, package_ops.package_name(spec))
    ]
    if not missing:
        result.add(Outcome.skipped(result.name, "package.json", "Rollbar packages already installed"))
        return
    if skip_install:
        manual = " ".join(package_ops.install_command(missing, manager))
        result.add(
            Outcome.skipped(
                result.name,
                "package.json",
                f"Skipping package installation (--skip-install). Install later with: {manual}",
            )
        )
        return
    result.add(package_ops.install_packages(root, missing, manager, runner=runner, phase=result.name))


def _env_phase(root: Path, config: WizardConfig, result: PhaseResult) -> None:
    result.add(env_ops.update_env_file(root, config, phase=result.name))
    result.add(env_ops.ensure_gitignore_entry(root, phase=result.name))


def _sourcemaps_phase(
    root: Path,
    fp: ProjectFingerprint,
    config: WizardConfig,
    manager: PackageManager,
    result: PhaseResult,
    *,
    skip_install: bool,
    runner: package_ops.Runner,
) -> None:
    apply_actions(root, [nextjs_setup.plan_sourcemap_script(fp, config)], result)

    manifest = result.add(
        manifest_ops.apply_manifest_patch(
            root, nextjs_setup.sourcemap_manifest_patch(fp), phase=result.name
        )
    )
    if manifest.mutated:
        if skip_install:
            manual = " ".join(package_ops.sync_command(manager))
            result.add(
                Outcome.skipped(
                    result.name,
                    message=f"Skipping lockfile update (--skip-install). Run later: {manual}",
                )
            )
        else:
            result.add(package_ops.sync_lockfile(root, manager, runner=runner, phase=result.name))

    if fp.has_typescript:
        result.add(
            manifest_ops.exclude_from_tsconfig(
                root, nextjs_setup.sourcemap_tsconfig_exclude(), phase=result.name
            )
        )


def run_nextjs_setup(
    root: Path,
    fingerprint: ProjectFingerprint,
    config: WizardConfig,
    *,
    skip_install: bool = False,
    package_manager: PackageManager | None = None,
    runner: package_ops.Runner = package_ops.run_command,
    on_phase: PhaseCallback | None = None,
) -> SetupReport:
    """Apply every phase to the project at ``root``.

    Args:
        root: Target project root.
        fingerprint: Snapshot from ``inspect_project``.
        config: Resolved wizard answers.
        skip_install: Do not run the package manager.
        package_manager: Override for the lockfile-detected manager.
        runner: Subprocess runner (replaced in tests).
        on_phase: Called after each completed phase (progress output).
    """
    fp = fingerprint
    manager = package_manager or fp.package_manager
    report = SetupReport()

    def step(name: str, body: Callable[[PhaseResult], None]) -> bool:
        result = report.phase(name)
        logger.debug("Phase %s", name)
        try:
            body(result)
        except FilesystemError as e:
            result.add(Outcome.failure(name, e.path, str(e)))
            report.failed_phase = name
            report.error = str(e)
            logger.error("Phase %s failed: %s", name, e)
            if on_phase:
                on_phase(result)
            return False
        if on_phase:
            on_phase(result)
        return True

    phases: list[tuple[str, Callable[[PhaseResult], None]]] = [
        (
            "install",
            lambda r: _install_phase(root, manager, r, skip_install=skip_install, runner=runner),
        ),
        ("config", lambda r: apply_actions(root, nextjs_setup.plan_config_files(fp, config), r)),
        (
            "instrumentation",
            lambda r: apply_actions(root, [nextjs_setup.plan_instrumentation(root, fp, config)], r),
        ),
        ("error-pages", lambda r: apply_actions(root, nextjs_setup.plan_error_pages(root, fp, config), r)),
        ("env", lambda r: _env_phase(root, config, r)),
    ]

    if config.enable_sourcemaps:
        phases.append(
            (
                "next-config",
                lambda r: apply_actions(root, [nextjs_setup.plan_next_config(root, fp, config)], r),
            )
        )
        phases.append(
            (
                "sourcemaps",
                lambda r: _sourcemaps_phase(
                    root, fp, config, manager, r, skip_install=skip_install, runner=runner
                ),
            )
        )

    if config.create_example_page:
        phases.append(("example", lambda r: apply_actions(root, nextjs_setup.plan_example(root, fp, config), r)))

    for name, body in phases:
        if not step(name, body):
            break

    logger.info(
        "Setup finished: %d created, %d patched, %d skipped, %d warned",
        report.created,
        report.patched,
        report.skipped,
        report.warned,
    )
    return report
