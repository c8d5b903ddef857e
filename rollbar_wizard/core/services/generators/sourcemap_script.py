"""
Source map upload script generator — ``scripts/upload-sourcemaps.{ts,js}``.

The script runs as the project's ``postbuild`` step and posts every
``.next/static/chunks/**/*.map`` to the Rollbar sourcemap API, skipping
files over the 5MB upload limit.  Upload failures never fail the build.
"""

from __future__ import annotations

from rollbar_wizard.core.models.config import SERVER_TOKEN_ENV_VAR, WizardConfig
from rollbar_wizard.core.models.template import GeneratedFile
from rollbar_wizard.core.services.generators.common import js_string

SCRIPT_DIR = "scripts"
SCRIPT_STEM = "upload-sourcemaps"

# Dev dependencies the script needs, with the ranges written to package.json
SCRIPT_PACKAGES: dict[str, str] = {
    "form-data": "^4.0.0",
    "node-fetch": "^3.3.2",
    "glob": "^13.0.0",
}
SCRIPT_TS_PACKAGES: dict[str, str] = {
    "tsx": "^4.20.6",
    "@types/glob": "^8.0.0",
}

_TS_IMPORTS = """\
import * as fs from 'fs';
import * as path from 'path';
import { glob } from 'glob';
import FormData from 'form-data';
import fetch from 'node-fetch';
"""

_JS_IMPORTS = """\
const fs = require('fs');
const path = require('path');
const { glob } = require('glob');
const FormData = require('form-data');
const fetch = require('node-fetch');
"""

_BODY_AFTER_TOKEN_CHECK = """\
  if (!baseUrl) {
    console.warn('⚠️  NEXT_PUBLIC_BASE_URL, BASE_URL, or VERCEL_URL not set. Using relative URLs.');
  }

  const distDir = path.join(process.cwd(), '.next');
  if (!fs.existsSync(distDir)) {
    console.error('❌ .next directory not found. Run "next build" first.');
    process.exit(1);
  }

  const chunksDir = path.join(distDir, 'static', 'chunks');
  if (!fs.existsSync(chunksDir)) {
    console.warn('⚠️  No chunks directory found. Source maps may not have been generated.');
    return;
  }

  const mapFiles = await glob('**/*.map', {
    cwd: chunksDir,
    absolute: true,
  });

  if (mapFiles.length === 0) {
    console.warn('⚠️  No source map files found. Make sure productionBrowserSourceMaps is enabled in next.config.');
    return;
  }

  console.log(`📦 Found ${mapFiles.length} source map file(s) to upload...`);

  const baseUrlWithProtocol = baseUrl
    ? (baseUrl.startsWith('http') ? baseUrl : `https://${baseUrl}`)
    : '';

  // Rollbar rejects source maps over 5MB
  const MAX_FILE_SIZE = 5 * 1024 * 1024;

  let successCount = 0;
  let skippedCount = 0;
  let errorCount = 0;

  for (const mapFile of mapFiles) {
    try {
      const fileName = path.basename(mapFile);
      const jsFileName = fileName.replace('.map', '');

      const stats = fs.statSync(mapFile);
      const fileSizeMB = (stats.size / (1024 * 1024)).toFixed(2);

      if (stats.size > MAX_FILE_SIZE) {
        console.warn(`⚠️  Skipping ${fileName} (too large: ${fileSizeMB}MB, limit: 5MB)`);
        skippedCount++;
        continue;
      }

      const minifiedUrl = baseUrlWithProtocol
        ? `${baseUrlWithProtocol}/_next/static/chunks/${jsFileName}`
        : `/_next/static/chunks/${jsFileName}`;

      const formData = new FormData();
      formData.append('access_token', accessToken);
      formData.append('version', codeVersion);
      formData.append('minified_url', minifiedUrl);
      formData.append('source_map', fs.createReadStream(mapFile), {
        filename: fileName,
        contentType: 'application/json',
      });

      const response = await fetch('https://api.rollbar.com/api/1/sourcemap', {
        method: 'POST',
        body: formData,
      });

      if (response.ok) {
        console.log(`✅ Uploaded: ${fileName} (${fileSizeMB}MB)`);
        successCount++;
      } else if (response.status === 413) {
        console.warn(`⚠️  Skipping ${fileName} (too large for Rollbar API: ${fileSizeMB}MB)`);
        skippedCount++;
      } else {
        const errorText = await response.text();
        console.error(`❌ Failed to upload ${fileName}: ${response.status} ${response.statusText}`);
        if (errorText && !errorText.includes('<html>')) {
          console.error(`   Error: ${errorText}`);
        }
        errorCount++;
      }
    } catch (error) {
      // EPIPE usually means the server closed the connection on an oversized body
      if (error.code === 'EPIPE' || (error.response && error.response.status === 413)) {
        const stats = fs.statSync(mapFile);
        const fileSizeMB = (stats.size / (1024 * 1024)).toFixed(2);
        console.warn(`⚠️  Skipping ${path.basename(mapFile)} (too large: ${fileSizeMB}MB)`);
        skippedCount++;
      } else {
        console.error(`❌ Error uploading ${path.basename(mapFile)}:`, error.message || error);
        errorCount++;
      }
    }
  }

  console.log(`\\n📊 Upload complete: ${successCount} succeeded, ${skippedCount} skipped (too large), ${errorCount} failed`);

  // Upload problems never fail the build
  if (errorCount > 0) {
    console.warn('⚠️  Some source maps failed to upload. This may affect error tracking quality.');
  } else if (skippedCount > 0) {
    console.warn('⚠️  Some source maps were skipped due to size limits. Consider optimizing your build.');
  }
}

uploadSourceMaps().catch((error) => {
  console.error('❌ Fatal error:', error);
  process.exit(1);
});
"""


def script_path(typescript: bool) -> str:
    ext = "ts" if typescript else "js"
    return f"{SCRIPT_DIR}/{SCRIPT_STEM}.{ext}"


def script_runner(typescript: bool) -> str:
    """Command that executes the script (tsx for TypeScript, node otherwise)."""
    return f"{'tsx' if typescript else 'node'} {script_path(typescript)}"


def required_packages(typescript: bool) -> dict[str, str]:
    packages = dict(SCRIPT_PACKAGES)
    if typescript:
        packages.update(SCRIPT_TS_PACKAGES)
    return packages


def sourcemap_script_contents(config: WizardConfig, typescript: bool) -> str:
    token_sources: list[str] = []
    if config.is_vercel and config.vercel_server_token_env_var:
        token_sources.append(f"process.env.{config.vercel_server_token_env_var}")
    token_sources.append(f"process.env.{SERVER_TOKEN_ENV_VAR}")
    token_sources.append("process.env.VERCEL_ROLLBAR_SERVER_TOKEN")
    token_sources.append("process.env.ROLLBAR_SERVER_TOKEN")
    access_token_expr = " ||\n    ".join(token_sources)

    if config.is_vercel and config.vercel_server_token_env_var:
        error_message = (
            f"❌ {config.vercel_server_token_env_var} or {SERVER_TOKEN_ENV_VAR} "
            "environment variable is required"
        )
    else:
        error_message = (
            f"❌ {SERVER_TOKEN_ENV_VAR} or Vercel server token environment variable is required"
        )

    return (
        (_TS_IMPORTS if typescript else _JS_IMPORTS)
        + "\n"
        + "async function uploadSourceMaps() {\n"
        + f"  const accessToken = {access_token_expr};\n"
        + "  const baseUrl = process.env.NEXT_PUBLIC_BASE_URL || process.env.BASE_URL "
        + "|| process.env.VERCEL_URL;\n"
        + "  const codeVersion = process.env.ROLLBAR_CODE_VERSION || "
        + "process.env.VERCEL_GIT_COMMIT_SHA || 'unknown';\n"
        + "\n"
        + "  if (!accessToken) {\n"
        + f"    console.error({js_string(error_message)});\n"
        + "    process.exit(1);\n"
        + "  }\n"
        + "\n"
        + _BODY_AFTER_TOKEN_CHECK
    )


def generate_sourcemap_script(config: WizardConfig, typescript: bool) -> GeneratedFile:
    return GeneratedFile(
        path=script_path(typescript),
        content=sourcemap_script_contents(config, typescript),
        overwrite=True,
        reason="Uploads production source maps to Rollbar after each build",
    )
