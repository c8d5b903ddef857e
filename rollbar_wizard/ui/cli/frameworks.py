"""
CLI commands for frameworks the wizard recognises but cannot set up yet.
"""

from __future__ import annotations

import sys

import click

SUPPORTED_FRAMEWORKS = ("Next.js",)
PLANNED_FRAMEWORKS = ("Nuxt.js", "Svelte")


def not_implemented(framework: str, *, detected: bool = False) -> None:
    """Report an unsupported framework and exit 1."""
    prefix = f"{framework} project detected, but the" if detected else "The"
    click.secho(f"⚠️  {prefix} {framework} wizard is not yet implemented.", fg="yellow", err=True)
    sys.exit(1)


@click.command()
def nuxtjs() -> None:
    """Set up Rollbar in a Nuxt.js project (not yet available)."""
    not_implemented("Nuxt.js")


@click.command()
def svelte() -> None:
    """Set up Rollbar in a Svelte project (not yet available)."""
    not_implemented("Svelte")
