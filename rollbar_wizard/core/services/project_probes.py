"""
Project probes — derive the structural fingerprint of a target project.

Channel-independent: no click, no prompts.  Every probe is a pure
filesystem existence/content check.  Nothing here raises: a probe that
cannot read its input degrades to the negative answer for that field.

Used by:
    - main.py               (framework auto-detection)
    - ui/cli/nextjs.py      (fingerprint before the interview)
    - nextjs_setup.py       (location decisions)
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from rollbar_wizard.core.models.fingerprint import PackageManager, ProjectFingerprint

logger = logging.getLogger(__name__)


# Well-known files recorded in the fingerprint
_WELL_KNOWN_FILES = (
    "next.config.js",
    "next.config.mjs",
    "next.config.ts",
    "instrumentation.ts",
    "instrumentation.js",
    "src/instrumentation.ts",
    "src/instrumentation.js",
    "tsconfig.json",
    ".env.local",
    ".gitignore",
)

# Lockfile → package manager, in precedence order
_LOCKFILES: tuple[tuple[str, PackageManager], ...] = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
)

_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")
_WILDCARD_RE = re.compile(r"^[\s=v]*[*xX](?:\.[*xX])*\s*$")
_UPPER_BOUND_ZERO_RE = re.compile(r"^\s*<\s*v?0(?:\.0){0,2}\s*$")


# ── Utilities ───────────────────────────────────────────────────────


def read_package_json(root: Path) -> dict | None:
    """Read package.json as a dict, or None if missing or malformed."""
    path = root / "package.json"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def _deps(pkg: dict) -> dict:
    """Merged dependencies + devDependencies (non-dict sections ignored)."""
    merged: dict = {}
    for section in ("devDependencies", "dependencies"):
        value = pkg.get(section)
        if isinstance(value, dict):
            merged.update(value)
    return merged


def has_dependency(pkg: dict | None, name: str) -> bool:
    """Whether package.json declares ``name`` in either dependency section."""
    return bool(pkg) and bool(_deps(pkg).get(name))


def has_directory(root: Path, *parts: str) -> bool:
    """Whether ``root/parts...`` exists and is a directory."""
    try:
        return root.joinpath(*parts).is_dir()
    except OSError:
        return False


def app_dir_location(root: Path) -> tuple[str, ...] | None:
    """Locate the App Router directory: ``app`` wins over ``src/app``."""
    if has_directory(root, "app"):
        return ("app",)
    if has_directory(root, "src", "app"):
        return ("src", "app")
    return None


def pages_dir_location(root: Path) -> tuple[str, ...] | None:
    """Locate the Pages Router directory: ``pages`` wins over ``src/pages``."""
    if has_directory(root, "pages"):
        return ("pages",)
    if has_directory(root, "src", "pages"):
        return ("src", "pages")
    return None


def has_root_layout_file(app_dir: Path) -> bool:
    """Whether the app directory already has a root layout."""
    return any((app_dir / f"layout.{ext}").exists() for ext in ("jsx", "tsx", "js"))


def detect_package_manager(root: Path) -> PackageManager:
    """Infer the package manager from lockfiles (pnpm > yarn > npm)."""
    for lockfile, manager in _LOCKFILES:
        if (root / lockfile).exists():
            return manager
    return "npm"


def next_version_bucket(version: str | None) -> str:
    """Bucket a Next.js version range by its minimum major version.

    ``"^14.1.0"`` → ``"14.x"``, ``"10.2.3"`` → ``"<11.0.0"``,
    ``None`` → ``"none"``.  A wildcard (``"*"``, ``"x"``) has minimum
    0.0.0 and lands in ``"<11.0.0"``.  A range nothing can satisfy
    (``"<0.0.0"``) is ``"invalid"``; text with no version number at all
    (a dist-tag such as ``"latest"``) is ``"unknown"``.
    """
    if not version:
        return "none"
    if _WILDCARD_RE.match(version):
        return "<11.0.0"
    if _UPPER_BOUND_ZERO_RE.match(version):
        return "invalid"
    match = _VERSION_RE.search(version)
    if not match:
        return "unknown"
    major = int(match.group(1))
    if major >= 11:
        return f"{major}.x"
    return "<11.0.0"


# ── Framework probes ────────────────────────────────────────────────


def is_nextjs_project(root: Path) -> bool:
    """A Next.js project declares ``next`` as a dependency."""
    return has_dependency(read_package_json(root), "next")


def is_nuxtjs_project(root: Path) -> bool:
    pkg = read_package_json(root)
    if has_dependency(pkg, "nuxt") or has_dependency(pkg, "@nuxt/kit"):
        return True
    return any((root / f"nuxt.config.{ext}").exists() for ext in ("ts", "js", "mjs"))


def is_svelte_project(root: Path) -> bool:
    pkg = read_package_json(root)
    if has_dependency(pkg, "svelte") or has_dependency(pkg, "@sveltejs/kit"):
        return True
    return any((root / f"svelte.config.{ext}").exists() for ext in ("js", "ts"))


# ── Fingerprint ─────────────────────────────────────────────────────


def inspect_project(root: Path, *, force_typescript: bool = False) -> ProjectFingerprint:
    """Compute the project fingerprint.  Never raises.

    Args:
        root: Target project root.
        force_typescript: Language-variant override (``--typescript``).
    """
    pkg = read_package_json(root)
    if pkg is None:
        logger.debug("package.json missing or unreadable in %s", root)

    next_version = "unknown"
    if pkg:
        deps = _deps(pkg)
        raw = deps.get("next")
        if isinstance(raw, str) and raw:
            next_version = raw

    existing: list[str] = []
    for rel in _WELL_KNOWN_FILES:
        try:
            if (root / rel).exists():
                existing.append(rel)
        except OSError:
            continue

    has_root_app = has_directory(root, "app")
    has_root_pages = has_directory(root, "pages")

    fingerprint = ProjectFingerprint(
        has_package_json=pkg is not None,
        has_typescript=force_typescript or "tsconfig.json" in existing,
        has_app_router=has_root_app or has_directory(root, "src", "app"),
        has_pages_router=has_root_pages or has_directory(root, "src", "pages"),
        has_root_app_dir=has_root_app,
        has_root_pages_dir=has_root_pages,
        has_src_dir=has_directory(root, "src"),
        package_manager=detect_package_manager(root),
        next_version=next_version,
        next_version_bucket=next_version_bucket(None if next_version == "unknown" else next_version),
        is_esm=bool(pkg) and pkg.get("type") == "module",
        existing_files=tuple(sorted(existing)),
    )
    logger.debug("Fingerprint for %s: %s", root, fingerprint.model_dump())
    return fingerprint
