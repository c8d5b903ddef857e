"""
Tests for the file generators and the ``render`` dispatch.
"""

import pytest

from rollbar_wizard.core.models.config import WizardConfig
from rollbar_wizard.core.services.generators import TEMPLATE_IDS, render
from rollbar_wizard.core.services.generators.common import js_string, up_to_root
from rollbar_wizard.core.services.generators.rollbar_config import generate_config_files
from rollbar_wizard.core.services.generators.sourcemap_script import (
    generate_sourcemap_script,
    required_packages,
    script_runner,
)

TOKEN = "c3" * 16


def _config(**overrides) -> WizardConfig:
    base = dict(
        server_access_token=TOKEN,
        client_access_token=TOKEN,
        code_version="2.0.0",
    )
    base.update(overrides)
    return WizardConfig(**base)


# ═══════════════════════════════════════════════════════════════════
#  render
# ═══════════════════════════════════════════════════════════════════


_CONTEXTS = {
    "instrumentation": {"location": "src"},
    "instrumentation-snippet": {"location": "root"},
    "next-config": {"flavor": "ts"},
    "sourcemap-script": {"typescript": False},
    "underscore-error": {"pages_location": ("src", "pages")},
    "global-error": {"typescript": True, "app_location": ("app",)},
    "example-page": {"typescript": True, "app_location": ("src", "app")},
    "example-app-api-route": {"typescript": False, "app_location": ("app",)},
    "example-pages-api-route": {"typescript": True, "pages_location": ("pages",)},
    "root-layout": {"typescript": False},
}


class TestRender:
    @pytest.mark.parametrize("template_id", TEMPLATE_IDS)
    def test_deterministic(self, template_id):
        ctx = _CONTEXTS.get(template_id, {})
        first = render(template_id, _config(), **ctx)
        second = render(template_id, _config(), **ctx)
        assert first == second
        assert first.strip()

    def test_unknown_id(self):
        with pytest.raises(KeyError):
            render("sentry-config", _config())


# ═══════════════════════════════════════════════════════════════════
#  Rollbar config files
# ═══════════════════════════════════════════════════════════════════


class TestRollbarConfigs:
    def test_server_reads_server_token(self):
        out = render("server-config", _config())
        assert "accessToken: process.env.ROLLBAR_PROJECT_ACCESS_SERVER_TOKEN," in out
        assert "root: process.cwd()" in out

    def test_edge_has_no_server_root(self):
        out = render("edge-config", _config())
        assert "root: process.cwd()" not in out
        assert "payload:" not in out
        assert "ROLLBAR_PROJECT_ACCESS_SERVER_TOKEN" in out

    def test_client_reads_client_token(self):
        out = render("client-config", _config())
        assert "accessToken: process.env.NEXT_PUBLIC_ROLLBAR_PROJECT_ACCESS_CLIENT_TOKEN," in out
        assert "'use client';" in out

    def test_vercel_vars(self):
        cfg = _config(
            is_vercel=True,
            vercel_client_token_env_var="VERCEL_CLIENT",
            vercel_server_token_env_var="VERCEL_SERVER",
        )
        assert "process.env.VERCEL_SERVER" in render("server-config", cfg)
        assert "process.env.VERCEL_CLIENT" in render("client-config", cfg)

    def test_code_version_literal_fallback(self):
        out = render("server-config", _config(code_version="2.0.0"))
        assert "codeVersion: process.env.ROLLBAR_CODE_VERSION || '2.0.0'," in out

    def test_code_version_from_env_only(self):
        out = render("server-config", _config(code_version=None))
        assert "codeVersion: process.env.ROLLBAR_CODE_VERSION,\n" in out

    def test_code_version_is_escaped(self):
        out = render("server-config", _config(code_version="it's"))
        assert "'it\\'s'" in out

    def test_replay(self):
        out = render("client-config", _config(enable_replay=True))
        assert "import Rollbar from 'rollbar/replay';" in out
        assert "replay: {" in out
        assert "level: ['error', 'critical']" in out

    def test_no_replay(self):
        out = render("client-config", _config(enable_replay=False))
        assert "import Rollbar from 'rollbar';" in out
        assert "replay" not in out

    def test_sourcemaps(self):
        out = render("client-config", _config(enable_sourcemaps=True))
        assert "source_map_enabled: true" in out

    def test_no_javascript_block_without_sourcemaps_or_version(self):
        out = render("client-config", _config(enable_sourcemaps=False, code_version=None))
        assert "javascript:" not in out

    def test_type_cast_only_for_typescript(self):
        assert "new Rollbar(rollbarConfig as any)" in render("client-config", _config(), typescript=True)
        assert "as any" not in render("client-config", _config(), typescript=False)

    def test_generate_config_files(self):
        files = generate_config_files(_config(), "js")
        assert [f.path for f in files] == [
            "rollbar.server.config.js",
            "rollbar.edge.config.js",
            "rollbar.client.config.js",
        ]
        assert all(f.overwrite for f in files)
        assert "as any" not in files[2].content


# ═══════════════════════════════════════════════════════════════════
#  Instrumentation & next.config
# ═══════════════════════════════════════════════════════════════════


class TestInstrumentation:
    def test_root_imports(self):
        out = render("instrumentation", _config(), location="root")
        assert "import rollbarServer from './rollbar.server.config';" in out
        assert "await import('./rollbar.edge.config');" in out
        assert "export async function register()" in out

    def test_src_imports_climb_one_level(self):
        out = render("instrumentation", _config(), location="src")
        assert "'../rollbar.server.config'" in out

    def test_snippet(self):
        out = render("instrumentation-snippet", _config(), location="src")
        assert "'../rollbar.edge.config'" in out
        assert not out.endswith("\n")


class TestNextConfig:
    def test_ts(self):
        out = render("next-config", _config(), flavor="ts")
        assert 'import type { NextConfig } from "next";' in out
        assert "export default nextConfig;" in out
        assert "productionBrowserSourceMaps: true," in out
        assert "turbopack: {}," in out

    def test_mjs(self):
        out = render("next-config", _config(), flavor="mjs")
        assert "export default nextConfig;" in out
        assert "module.exports" not in out

    def test_cjs(self):
        out = render("next-config", _config(), flavor="cjs")
        assert "module.exports = nextConfig;" in out

    def test_without_sourcemaps(self):
        out = render("next-config", _config(enable_sourcemaps=False), flavor="cjs")
        assert "productionBrowserSourceMaps" not in out


# ═══════════════════════════════════════════════════════════════════
#  Source map upload script
# ═══════════════════════════════════════════════════════════════════


class TestSourcemapScript:
    def test_typescript_flavour(self):
        out = render("sourcemap-script", _config(), typescript=True)
        assert "import FormData from 'form-data';" in out
        assert "require(" not in out

    def test_commonjs_flavour(self):
        out = render("sourcemap-script", _config(), typescript=False)
        assert "const FormData = require('form-data');" in out

    def test_upload_endpoint_and_limit(self):
        out = render("sourcemap-script", _config(), typescript=True)
        assert "https://api.rollbar.com/api/1/sourcemap" in out
        assert "5 * 1024 * 1024" in out
        assert "'**/*.map'" in out

    def test_vercel_token_checked_first(self):
        cfg = _config(
            is_vercel=True,
            vercel_client_token_env_var="VC",
            vercel_server_token_env_var="VS",
        )
        out = render("sourcemap-script", cfg, typescript=False)
        first = out.index("process.env.VS")
        assert first < out.index("process.env.ROLLBAR_PROJECT_ACCESS_SERVER_TOKEN")

    def test_generated_file(self):
        file = generate_sourcemap_script(_config(), typescript=True)
        assert file.path == "scripts/upload-sourcemaps.ts"
        assert file.overwrite

    def test_runner_and_packages(self):
        assert script_runner(True) == "tsx scripts/upload-sourcemaps.ts"
        assert script_runner(False) == "node scripts/upload-sourcemaps.js"
        assert set(required_packages(False)) == {"form-data", "node-fetch", "glob"}
        assert required_packages(True)["tsx"] == "^4.20.6"
        assert required_packages(True)["@types/glob"] == "^8.0.0"


# ═══════════════════════════════════════════════════════════════════
#  Error pages & example scaffold
# ═══════════════════════════════════════════════════════════════════


class TestErrorPages:
    def test_underscore_error_root_pages(self):
        out = render("underscore-error", _config(), pages_location=("pages",))
        assert "import rollbar from '../rollbar.server.config';" in out
        assert "Error.getInitialProps(contextData)" in out

    def test_underscore_error_src_pages(self):
        out = render("underscore-error", _config(), pages_location=("src", "pages"))
        assert "'../../rollbar.server.config'" in out

    def test_global_error_typescript(self):
        out = render("global-error", _config(), typescript=True, app_location=("app",))
        assert "{ error: Error & { digest?: string } }" in out
        assert "'../rollbar.client.config'" in out

    def test_global_error_javascript(self):
        out = render("global-error", _config(), typescript=False, app_location=("src", "app"))
        assert "GlobalError({ error })" in out
        assert "'../../rollbar.client.config'" in out


class TestExampleScaffold:
    def test_app_page(self):
        out = render("example-page", _config(), typescript=True, app_location=("app",))
        assert out.startswith('"use client";')
        assert "'../../rollbar.client.config'" in out
        assert "useState<string | null>(null)" in out

    def test_src_app_page(self):
        out = render("example-page", _config(), typescript=True, app_location=("src", "app"))
        assert "'../../../rollbar.client.config'" in out

    def test_pages_page_is_not_client_component(self):
        out = render("example-page", _config(), typescript=False, pages_location=("pages",))
        assert '"use client"' not in out
        assert "'../rollbar.client.config'" in out
        assert "useState<" not in out
        assert "constructor(message)" in out

    def test_app_api_route(self):
        out = render("example-app-api-route", _config(), typescript=True, app_location=("app",))
        assert "'../../../rollbar.server.config'" in out
        assert "export const dynamic = 'force-dynamic';" in out
        assert "constructor(message: string | undefined)" in out

    def test_pages_api_route(self):
        out = render("example-pages-api-route", _config(), typescript=False, pages_location=("src", "pages"))
        assert "'../../../rollbar.server.config'" in out
        assert "export default function handler" in out

    def test_root_layout(self):
        assert "children: React.ReactNode" in render("root-layout", _config(), typescript=True)
        assert "React.ReactNode" not in render("root-layout", _config(), typescript=False)


class TestCommon:
    def test_js_string(self):
        assert js_string("a'b\\c\nd") == "'a\\'b\\\\c\\nd'"

    def test_up_to_root(self):
        assert up_to_root(0) == "."
        assert up_to_root(1) == ".."
        assert up_to_root(3) == "../../.."
