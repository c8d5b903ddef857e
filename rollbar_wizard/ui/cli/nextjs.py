"""
CLI command for the Next.js wizard.

Thin wrapper over ``rollbar_wizard.core.services.nextjs_wizard``: resolves
the project, gathers answers (interactively or via ``--yes``), runs the
phases and prints the report.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from rollbar_wizard.core.context import require_project_root
from rollbar_wizard.core.engine.executor import PhaseResult, SetupReport

_STATUS_ICONS = {
    "created": ("✅", "green"),
    "patched": ("✏️ ", "green"),
    "skipped": ("⏭️ ", None),
    "warned": ("⚠️ ", "yellow"),
    "failed": ("❌", "red"),
}


# ── Output ──────────────────────────────────────────────────────────


def _print_phase(result: PhaseResult, *, quiet: bool = False) -> None:
    for outcome in result.outcomes:
        if quiet and outcome.status == "skipped":
            continue
        icon, color = _STATUS_ICONS[outcome.status]
        text = outcome.message or outcome.path
        click.secho(f"   {icon} {text}", fg=color)
        if outcome.snippet:
            click.echo()
            for line in outcome.snippet.splitlines():
                click.secho(f"      {line}", fg="cyan")
            click.echo()


def _print_summary(report: SetupReport) -> None:
    click.echo()
    if report.failed_phase:
        click.secho(f"❌ Setup failed during '{report.failed_phase}'", fg="red", bold=True)
        click.echo(f"   {report.error}")
        click.echo("   Files written before this phase were kept.")
        return

    click.secho("🎉 Rollbar is set up for Next.js!", fg="green", bold=True)
    click.echo(
        f"   {report.created} created, {report.patched} updated, "
        f"{report.skipped} unchanged, {report.warned} need attention"
    )
    if report.warned:
        click.secho("   Review the ⚠️  items above and apply the suggested code.", fg="yellow")
    click.echo("   Rollbar config files and the upload script are regenerated on every run.")
    click.echo()


def _print_intro(config, quiet: bool) -> None:
    if quiet:
        return
    features = config.features()
    click.secho("\n📋 Configuration", fg="cyan", bold=True)
    click.echo(f"   Environment: {config.environment}")
    click.echo(f"   Router:      {config.router_type}")
    click.echo(f"   Features:    {', '.join(features) if features else 'none'}")
    if config.is_vercel:
        click.echo("   Tokens:      from Vercel environment variables")
    click.echo()


# ── Command ─────────────────────────────────────────────────────────


@click.command()
@click.option("--access-token", default=None, help="Rollbar server access token (with --yes).")
@click.option("--environment", default=None, help="Environment name (default: production).")
@click.option("--skip-install", is_flag=True, help="Do not run the package manager.")
@click.option("--typescript", is_flag=True, help="Treat the project as TypeScript.")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Non-interactive: accept defaults.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.pass_context
def nextjs(
    ctx: click.Context,
    access_token: str | None,
    environment: str | None,
    skip_install: bool,
    typescript: bool,
    assume_yes: bool,
    as_json: bool,
) -> None:
    """Set up Rollbar in a Next.js project."""
    from rollbar_wizard.core.config.loader import ConfigError, load_defaults
    from rollbar_wizard.core.errors import PrerequisiteError, WizardCancelled
    from rollbar_wizard.core.services.nextjs_wizard import build_default_config, run_nextjs_setup
    from rollbar_wizard.core.services.project_probes import inspect_project, is_nextjs_project

    obj = ctx.obj or {}
    quiet = obj.get("quiet", False) or as_json
    root: Path = require_project_root()

    if not is_nextjs_project(root):
        click.secho("❌ This doesn't appear to be a Next.js project.", fg="red", err=True)
        click.echo("   Run the wizard from the project root, or pass --cwd.", err=True)
        sys.exit(1)

    try:
        defaults = load_defaults(root)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    fingerprint = inspect_project(root, force_typescript=typescript)

    if not quiet:
        click.secho("🚀 Rollbar Next.js Wizard", fg="cyan", bold=True)
        click.echo(f"   Project: {root}")
        click.echo(f"   Next.js: {fingerprint.next_version} ({fingerprint.next_version_bucket})")
        click.echo(f"   Package manager: {defaults.package_manager or fingerprint.package_manager}")

    try:
        if assume_yes:
            config = build_default_config(
                {"access_token": access_token, "environment": environment},
                fingerprint,
                os.environ,
                defaults,
            )
        else:
            from rollbar_wizard.ui.cli.interview import gather_configuration
            from rollbar_wizard.ui.cli.prompts import ClickPrompter
            from rollbar_wizard.ui.cli.signals import install_exit_handlers

            install_exit_handlers()
            config = gather_configuration(
                ClickPrompter(),
                fingerprint,
                environment_default=environment or defaults.environment,
                defaults=defaults,
            )
    except PrerequisiteError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    except WizardCancelled as e:
        click.secho(str(e), fg="yellow")
        sys.exit(e.exit_code)

    _print_intro(config, quiet)

    def on_phase(result: PhaseResult) -> None:
        if quiet:
            return
        click.secho(f"▸ {result.name}", bold=True)
        _print_phase(result, quiet=obj.get("quiet", False))

    report = run_nextjs_setup(
        root,
        fingerprint,
        config,
        skip_install=skip_install,
        package_manager=defaults.package_manager,
        on_phase=on_phase,
    )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_summary(report)

    if report.failed_phase:
        sys.exit(1)
