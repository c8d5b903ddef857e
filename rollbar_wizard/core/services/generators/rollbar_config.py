"""
Rollbar config generator — server, edge and client initialisation files.

These three files are wizard-owned: they hold nothing but wizard-managed
settings and are regenerated on every run.
"""

from __future__ import annotations

from rollbar_wizard.core.models.config import CODE_VERSION_ENV_VAR, WizardConfig
from rollbar_wizard.core.models.template import GeneratedFile
from rollbar_wizard.core.services.generators.common import js_string

_DOCS_URL = "https://docs.rollbar.com/docs/rollbarjs-configuration-reference"


def _token_guard(env_var: str) -> str:
    return (
        f"if (!process.env.{env_var}) {{\n"
        f"  throw new Error({js_string(env_var + ' environment variable is required')});\n"
        "}\n"
    )


def _code_version_line(config: WizardConfig, key: str, indent: str) -> str:
    if config.code_version:
        return (
            f"{indent}{key}: process.env.{CODE_VERSION_ENV_VAR} || "
            f"{js_string(config.code_version)},\n"
        )
    return f"{indent}{key}: process.env.{CODE_VERSION_ENV_VAR},\n"


def _common_config_lines(config: WizardConfig, env_var: str) -> str:
    return (
        f"  accessToken: process.env.{env_var},\n"
        f"  environment: process.env.NODE_ENV || {js_string(config.environment)},\n"
        "  captureUncaught: true,\n"
        "  captureUnhandledRejections: true,\n"
    )


def server_config_contents(config: WizardConfig) -> str:
    env_var = config.server_token_env_var
    return (
        "// This file configures the initialization of Rollbar on the server.\n"
        "// The config you add here will be used whenever the server handles a request.\n"
        f"// {_DOCS_URL}\n"
        "\n"
        "import Rollbar from 'rollbar';\n"
        "\n"
        f"{_token_guard(env_var)}"
        "\n"
        "const rollbarConfig = {\n"
        f"{_common_config_lines(config, env_var)}"
        f"{_code_version_line(config, 'codeVersion', '  ')}"
        "  payload: {\n"
        "    server: {\n"
        "      root: process.cwd(),\n"
        "    },\n"
        "  },\n"
        "};\n"
        "\n"
        "const rollbar = new Rollbar(rollbarConfig);\n"
        "\n"
        "export default rollbar;\n"
    )


def edge_config_contents(config: WizardConfig) -> str:
    env_var = config.server_token_env_var
    return (
        "// This file configures the initialization of Rollbar for edge features "
        "(middleware, edge routes, etc.).\n"
        "// The config you add here will be used whenever one of the edge features is loaded.\n"
        f"// {_DOCS_URL}\n"
        "\n"
        "import Rollbar from 'rollbar';\n"
        "\n"
        f"{_token_guard(env_var)}"
        "\n"
        "const rollbarConfig = {\n"
        f"{_common_config_lines(config, env_var)}"
        f"{_code_version_line(config, 'codeVersion', '  ')}"
        "  // Edge Runtime has no process.cwd(), so payload.server.root is omitted\n"
        "};\n"
        "\n"
        "const rollbar = new Rollbar(rollbarConfig);\n"
        "\n"
        "export default rollbar;\n"
    )


def client_config_contents(config: WizardConfig, typescript: bool = True) -> str:
    env_var = config.client_token_env_var
    cast = " as any" if typescript else ""
    rollbar_import = "rollbar/replay" if config.enable_replay else "rollbar"

    replay = ""
    if config.enable_replay:
        replay = (
            "  replay: {\n"
            "    enabled: true,\n"
            "    triggers: [\n"
            "      {\n"
            "        type: 'occurrence',\n"
            "        level: ['error', 'critical'],\n"
            "      },\n"
            "    ],\n"
            "  },\n"
        )

    javascript = ""
    if config.enable_sourcemaps:
        javascript = (
            "      javascript: {\n"
            "        source_map_enabled: true,\n"
            f"{_code_version_line(config, 'code_version', '        ')}"
            "      },\n"
        )
    elif config.code_version:
        javascript = (
            "      javascript: {\n"
            f"{_code_version_line(config, 'code_version', '        ')}"
            "      },\n"
        )

    return (
        "// This file configures the initialization of Rollbar on the client.\n"
        "// The config you add here will be used whenever a user loads a page in their browser.\n"
        f"// {_DOCS_URL}\n"
        "\n"
        "'use client';\n"
        "\n"
        f"import Rollbar from '{rollbar_import}';\n"
        "\n"
        f"{_token_guard(env_var)}"
        "\n"
        "const rollbarConfig = {\n"
        f"{_common_config_lines(config, env_var)}"
        f"{replay}"
        "  payload: {\n"
        "    client: {\n"
        f"{javascript}"
        "    },\n"
        "  },\n"
        "};\n"
        "\n"
        f"const rollbar = new Rollbar(rollbarConfig{cast});\n"
        "\n"
        "export default rollbar;\n"
    )


def generate_config_files(config: WizardConfig, ext: str) -> list[GeneratedFile]:
    """The three service config files in the project's language variant."""
    return [
        GeneratedFile(
            path=f"rollbar.server.config.{ext}",
            content=server_config_contents(config),
            overwrite=True,
            reason="Rollbar server-side initialisation",
        ),
        GeneratedFile(
            path=f"rollbar.edge.config.{ext}",
            content=edge_config_contents(config),
            overwrite=True,
            reason="Rollbar edge-runtime initialisation",
        ),
        GeneratedFile(
            path=f"rollbar.client.config.{ext}",
            content=client_config_contents(config, typescript=ext == "ts"),
            overwrite=True,
            reason="Rollbar browser initialisation",
        ),
    ]
