"""
Next.js setup decisions — what each phase should do to the project.

Every function here is a planner: it looks at the fingerprint, the config
and (for files the user may already have) the current file content, and
returns ``FileAction``s.  Nothing is written; ``engine/executor.py``
applies the actions.

File categories:

    owned         service configs, upload script, example page and route:
                  regenerated whenever their content differs
    integration   instrumentation hook, next.config.*: created when absent,
                  a near-empty placeholder is replaced, a file that already
                  has the setting is left alone, anything else gets a
                  copy-paste snippet and is never modified
    scaffold      error pages, root layout: created only when no variant
                  of the file exists
"""

from __future__ import annotations

import logging
from pathlib import Path

from rollbar_wizard.core.models.action import FileAction
from rollbar_wizard.core.models.config import WizardConfig
from rollbar_wizard.core.models.fingerprint import ProjectFingerprint
from rollbar_wizard.core.models.manifest import ManifestPatch
from rollbar_wizard.core.models.template import GeneratedFile
from rollbar_wizard.core.services import project_probes
from rollbar_wizard.core.services.generators import render
from rollbar_wizard.core.services.generators.common import location_label
from rollbar_wizard.core.services.generators.example_page import (
    EXAMPLE_API_SLUG,
    EXAMPLE_PAGE_SLUG,
)
from rollbar_wizard.core.services.generators.instrumentation import HookLocation
from rollbar_wizard.core.services.generators.next_config import (
    SOURCEMAP_SETTING,
    flavor_for,
    next_config_snippet,
)
from rollbar_wizard.core.services.generators.rollbar_config import generate_config_files
from rollbar_wizard.core.services.generators.sourcemap_script import (
    SCRIPT_DIR,
    generate_sourcemap_script,
    required_packages,
    script_runner,
)

logger = logging.getLogger(__name__)

HOOK_MARKER = "rollbar.server.config"
PLACEHOLDER_MARKER = "/* config options here */"
POSTBUILD_SCRIPT = "postbuild"
SOURCEMAP_SCRIPT_MARKER = "upload-sourcemaps"

NEXT_CONFIG_FILES = ("next.config.js", "next.config.mjs", "next.config.ts")

_UNDERSCORE_ERROR_VARIANTS = ("tsx", "ts", "jsx", "js")
_GLOBAL_ERROR_VARIANTS = ("tsx", "ts", "jsx", "js")

_BOILERPLATE_PREFIXES = ("import", "export", "const", "module.exports")


# ── Classification ──────────────────────────────────────────────────


def meaningful_lines(content: str) -> list[str]:
    """Lines that carry user configuration.

    Drops blank lines, ``//`` comments, and the import/export/declaration
    boilerplate every config file starts from.
    """
    out: list[str] = []
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("//"):
            continue
        if line.startswith(_BOILERPLATE_PREFIXES) or "NextConfig" in line:
            continue
        out.append(line)
    return out


def is_placeholder(content: str) -> bool:
    """Whether a config file is a near-empty scaffold that is safe to replace.

    Conservative: anything with more than two meaningful lines is treated
    as user content, even if it could have been merged automatically.
    """
    if PLACEHOLDER_MARKER in content:
        return True
    return len(meaningful_lines(content)) <= 2


def _read(root: Path, rel: str) -> str | None:
    try:
        return (root / rel).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _integration_action(
    root: Path,
    rel: str,
    *,
    marker: str,
    template: str,
    snippet: str,
    what: str,
) -> FileAction:
    """skip / patch / warn for an integration file that already exists."""
    content = _read(root, rel)
    if content is None:
        return FileAction.warn(rel, f"Could not read {rel}. Add the {what} manually:", snippet)
    if marker in content:
        return FileAction.skip(rel, f"{rel} already has the {what}")
    if is_placeholder(content):
        return FileAction.patch(rel, template, f"Replaced placeholder {rel} with the {what}")
    logger.info("%s has custom content; leaving it untouched", rel)
    return FileAction.warn(
        rel,
        f"Found existing {rel}. Please add the following code:",
        snippet,
    )


# ── Locations ───────────────────────────────────────────────────────


def hook_location(fp: ProjectFingerprint) -> HookLocation:
    """Where new top-level files go: root, then src/, then root."""
    if fp.has_root_routing_dir:
        return "root"
    if fp.has_src_dir:
        return "src"
    return "root"


def _hook_prefix(location: HookLocation) -> str:
    return "" if location == "root" else "src/"


# ═══════════════════════════════════════════════════════════════════
#  Phases
# ═══════════════════════════════════════════════════════════════════


def plan_config_files(fp: ProjectFingerprint, config: WizardConfig) -> list[FileAction]:
    return [FileAction.create(f) for f in generate_config_files(config, fp.source_ext)]


def plan_instrumentation(root: Path, fp: ProjectFingerprint, config: WizardConfig) -> FileAction:
    location = hook_location(fp)
    prefix = _hook_prefix(location)
    snippet = render("instrumentation-snippet", config, location=location)
    template = render("instrumentation", config, location=location)

    for ext in ("ts", "js"):
        rel = f"{prefix}instrumentation.{ext}"
        if (root / rel).exists():
            return _integration_action(
                root,
                rel,
                marker=HOOK_MARKER,
                template=template,
                snippet=snippet,
                what="Rollbar instrumentation hook",
            )

    return FileAction.create(
        GeneratedFile(
            path=f"{prefix}instrumentation.{fp.source_ext}",
            content=template,
            reason="Registers Rollbar for the Node.js and Edge runtimes",
        )
    )


def _scaffold_action(
    root: Path,
    location: tuple[str, ...],
    stem: str,
    variants: tuple[str, ...],
    ext: str,
    content: str,
    reason: str,
) -> FileAction:
    for variant in variants:
        rel = location_label(location, f"{stem}.{variant}")
        if (root / rel).exists():
            return FileAction.skip(rel, f"{rel} already exists")
    return FileAction.create(
        GeneratedFile(path=location_label(location, f"{stem}.{ext}"), content=content, reason=reason)
    )


def plan_error_pages(root: Path, fp: ProjectFingerprint, config: WizardConfig) -> list[FileAction]:
    actions: list[FileAction] = []

    if config.router_type in ("pages", "both"):
        pages = project_probes.pages_dir_location(root)
        if pages:
            actions.append(
                _scaffold_action(
                    root,
                    pages,
                    "_error",
                    _UNDERSCORE_ERROR_VARIANTS,
                    fp.component_ext,
                    render("underscore-error", config, pages_location=pages),
                    "Reports Pages Router errors to Rollbar",
                )
            )

    if config.router_type in ("app", "both"):
        app = project_probes.app_dir_location(root)
        if app:
            actions.append(
                _scaffold_action(
                    root,
                    app,
                    "global-error",
                    _GLOBAL_ERROR_VARIANTS,
                    fp.component_ext,
                    render("global-error", config, typescript=fp.has_typescript, app_location=app),
                    "Reports App Router errors to Rollbar",
                )
            )

    return actions


def existing_next_config(root: Path) -> str | None:
    for name in NEXT_CONFIG_FILES:
        if (root / name).exists():
            return name
    return None


def plan_next_config(root: Path, fp: ProjectFingerprint, config: WizardConfig) -> FileAction | None:
    """Enable browser source maps in next.config (None when source maps are off)."""
    if not config.enable_sourcemaps:
        return None

    name = existing_next_config(root)
    if name:
        return _integration_action(
            root,
            name,
            marker=SOURCEMAP_SETTING,
            template=render("next-config", config, flavor=flavor_for(name)),
            snippet=next_config_snippet(),
            what=f"{SOURCEMAP_SETTING} setting",
        )

    name = "next.config.mjs" if (fp.is_esm or fp.has_typescript) else "next.config.js"
    return FileAction.create(
        GeneratedFile(
            path=name,
            content=render("next-config", config, flavor=flavor_for(name)),
            reason="Enables production browser source maps",
        )
    )


def sourcemap_manifest_patch(fp: ProjectFingerprint) -> ManifestPatch:
    """devDependencies and the postbuild entry the upload script needs."""
    return ManifestPatch(
        dev_dependencies=required_packages(fp.has_typescript),
        script_name=POSTBUILD_SCRIPT,
        script_command=script_runner(fp.has_typescript),
        script_marker=SOURCEMAP_SCRIPT_MARKER,
    )


def sourcemap_tsconfig_exclude() -> str:
    return SCRIPT_DIR


def plan_sourcemap_script(fp: ProjectFingerprint, config: WizardConfig) -> FileAction:
    return FileAction.create(generate_sourcemap_script(config, fp.has_typescript))


def example_location(root: Path, fp: ProjectFingerprint) -> tuple[str, tuple[str, ...]]:
    """(router, location) for the example; ``app`` wins when both exist.

    With neither router directory present, the example goes into a new
    ``pages`` (or ``src/pages``) directory.
    """
    app = project_probes.app_dir_location(root)
    if app:
        return "app", app
    pages = project_probes.pages_dir_location(root)
    if pages:
        return "pages", pages
    return "pages", ("src", "pages") if fp.has_src_dir else ("pages",)


def plan_example(root: Path, fp: ProjectFingerprint, config: WizardConfig) -> list[FileAction]:
    if not config.create_example_page:
        return []

    ts = fp.has_typescript
    router, location = example_location(root, fp)
    actions: list[FileAction] = []

    if router == "app":
        app = location
        app_dir = root.joinpath(*app)
        layout = location_label(app, f"layout.{fp.component_ext}")
        if project_probes.has_root_layout_file(app_dir):
            actions.append(FileAction.skip(layout, "Root layout already exists"))
        else:
            actions.append(
                FileAction.create(
                    GeneratedFile(
                        path=layout,
                        content=render("root-layout", config, typescript=ts),
                        reason="The App Router needs a root layout to render the example page",
                    )
                )
            )
        actions.append(
            FileAction.create(
                GeneratedFile(
                    path=location_label(app, EXAMPLE_PAGE_SLUG, f"page.{fp.component_ext}"),
                    content=render("example-page", config, typescript=ts, app_location=app),
                    overwrite=True,
                    reason="Example page for testing the integration",
                )
            )
        )
        actions.append(
            FileAction.create(
                GeneratedFile(
                    path=location_label(app, "api", EXAMPLE_API_SLUG, f"route.{fp.source_ext}"),
                    content=render("example-app-api-route", config, typescript=ts, app_location=app),
                    overwrite=True,
                    reason="Example API route that throws on the server",
                )
            )
        )
        return actions

    pages = location
    actions.append(
        FileAction.create(
            GeneratedFile(
                path=location_label(pages, f"{EXAMPLE_PAGE_SLUG}.{fp.component_ext}"),
                content=render("example-page", config, typescript=ts, pages_location=pages),
                overwrite=True,
                reason="Example page for testing the integration",
            )
        )
    )
    actions.append(
        FileAction.create(
            GeneratedFile(
                path=location_label(pages, "api", f"{EXAMPLE_API_SLUG}.{fp.source_ext}"),
                content=render("example-pages-api-route", config, typescript=ts, pages_location=pages),
                overwrite=True,
                reason="Example API route that throws on the server",
            )
        )
    )
    return actions
