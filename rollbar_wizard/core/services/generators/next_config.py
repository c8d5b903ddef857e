"""
next.config generator — CommonJS, ESM and TypeScript flavours.
"""

from __future__ import annotations

from typing import Literal

NextConfigFlavor = Literal["cjs", "mjs", "ts"]

SOURCEMAP_SETTING = "productionBrowserSourceMaps"

_FLAVOR_BY_FILENAME: dict[str, NextConfigFlavor] = {
    "next.config.js": "cjs",
    "next.config.mjs": "mjs",
    "next.config.ts": "ts",
}


def flavor_for(filename: str) -> NextConfigFlavor:
    return _FLAVOR_BY_FILENAME.get(filename, "cjs")


def _sourcemap_lines(enable_sourcemaps: bool) -> str:
    if not enable_sourcemaps:
        return ""
    return (
        "  // Enable source map generation for production builds\n"
        "  // Source maps will be uploaded to Rollbar automatically after build\n"
        f"  {SOURCEMAP_SETTING}: true,\n"
        "  // Next.js 16+ uses Turbopack by default - add empty config to avoid webpack conflicts\n"
        "  turbopack: {},\n"
    )


def next_config_contents(flavor: NextConfigFlavor, enable_sourcemaps: bool) -> str:
    body = _sourcemap_lines(enable_sourcemaps)
    if flavor == "ts":
        return (
            'import type { NextConfig } from "next";\n'
            "\n"
            "const nextConfig: NextConfig = {\n"
            f"{body}"
            "};\n"
            "\n"
            "export default nextConfig;\n"
        )
    export = "export default nextConfig;" if flavor == "mjs" else "module.exports = nextConfig;"
    return (
        "/** @type {import('next').NextConfig} */\n"
        "const nextConfig = {\n"
        f"{body}"
        "};\n"
        "\n"
        f"{export}\n"
    )


def next_config_snippet() -> str:
    return f"{SOURCEMAP_SETTING}: true,"
