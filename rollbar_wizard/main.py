"""
Rollbar Wizard — CLI entrypoint.

Usage:
    rollbar-wizard                 auto-detect the framework and run its wizard
    rollbar-wizard nextjs          set up Rollbar in a Next.js project
    rollbar-wizard --cwd ../app nextjs --yes --access-token <token>
    python -m rollbar_wizard.main --help
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from rollbar_wizard import __version__
from rollbar_wizard.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="rollbar-wizard")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--cwd",
    "cwd",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Project directory (default: current directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    cwd: str | None,
) -> None:
    """Rollbar Wizard — add Rollbar error monitoring to your project."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # Register the target project in core context (used by every command)
    from rollbar_wizard.core.context import set_project_root

    root = Path(cwd).resolve() if cwd else Path.cwd()
    set_project_root(root)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet, environ=os.environ),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )

    if ctx.invoked_subcommand is None:
        _auto_detect(ctx, root)


def _auto_detect(ctx: click.Context, root: Path) -> None:
    """Run the wizard for whichever supported framework the project uses."""
    from rollbar_wizard.core.services.project_probes import (
        is_nextjs_project,
        is_nuxtjs_project,
        is_svelte_project,
    )
    from rollbar_wizard.ui.cli.frameworks import (
        PLANNED_FRAMEWORKS,
        SUPPORTED_FRAMEWORKS,
        not_implemented,
    )

    if is_nextjs_project(root):
        click.secho("🔍 Next.js project detected", fg="cyan")
        ctx.invoke(nextjs)
        return
    if is_nuxtjs_project(root):
        not_implemented("Nuxt.js", detected=True)
    if is_svelte_project(root):
        not_implemented("Svelte", detected=True)

    click.secho("No supported framework detected in this directory.", fg="yellow")
    click.echo(f"   Supported: {', '.join(SUPPORTED_FRAMEWORKS)}")
    click.echo(f"   Coming soon: {', '.join(PLANNED_FRAMEWORKS)}")
    click.echo("   Run 'rollbar-wizard nextjs' from your Next.js project root.")


# ── Register command groups ─────────────────────────────────────────

from rollbar_wizard.ui.cli.frameworks import nuxtjs, svelte  # noqa: E402
from rollbar_wizard.ui.cli.nextjs import nextjs  # noqa: E402

cli.add_command(nextjs)
cli.add_command(nuxtjs)
cli.add_command(svelte)


if __name__ == "__main__":
    cli()
