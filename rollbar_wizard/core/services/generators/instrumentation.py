"""
Instrumentation hook generator — Next.js ``register()`` entry point.
"""

from __future__ import annotations

from typing import Literal

HookLocation = Literal["root", "src"]


def _import_base(location: HookLocation) -> str:
    return "." if location == "root" else ".."


def instrumentation_hook_contents(location: HookLocation) -> str:
    base = _import_base(location)
    return (
        f"import rollbarServer from '{base}/rollbar.server.config';\n"
        f"import rollbarEdge from '{base}/rollbar.edge.config';\n"
        "\n"
        "export async function register() {\n"
        "  if (process.env.NEXT_RUNTIME === 'nodejs') {\n"
        "    // Server-side Rollbar is initialized via the config file import\n"
        f"    await import('{base}/rollbar.server.config');\n"
        "  }\n"
        "\n"
        "  if (process.env.NEXT_RUNTIME === 'edge') {\n"
        "    // Edge runtime Rollbar is initialized via the config file import\n"
        f"    await import('{base}/rollbar.edge.config');\n"
        "  }\n"
        "}\n"
    )


def instrumentation_hook_snippet(location: HookLocation) -> str:
    """The code a user must merge into an existing instrumentation file."""
    base = _import_base(location)
    return (
        f"import rollbarServer from '{base}/rollbar.server.config';\n"
        f"import rollbarEdge from '{base}/rollbar.edge.config';\n"
        "\n"
        "export async function register() {\n"
        "  if (process.env.NEXT_RUNTIME === 'nodejs') {\n"
        f"    await import('{base}/rollbar.server.config');\n"
        "  }\n"
        "\n"
        "  if (process.env.NEXT_RUNTIME === 'edge') {\n"
        f"    await import('{base}/rollbar.edge.config');\n"
        "  }\n"
        "}"
    )
