"""
Manifest operations — idempotent edits to package.json and tsconfig.json.

Edits are key insertions only: existing values are never replaced, and a
file whose content would not change is never rewritten.  Writes are
atomic (temp file in the same directory, then rename).

A manifest that cannot be parsed as JSON (tsconfig.json with comments is
the usual case) is reported as a ``warned`` Outcome with the manual edit;
only an OS-level write failure raises.
"""

from __future__ import annotations

import json
import logging
import re
import tempfile
from pathlib import Path

from rollbar_wizard.core.errors import FilesystemError
from rollbar_wizard.core.models.action import Outcome
from rollbar_wizard.core.models.manifest import ManifestPatch

logger = logging.getLogger(__name__)

_INDENT_RE = re.compile(r"^\{\s*?\n([ \t]+)\"", re.MULTILINE)


# ── Utilities ───────────────────────────────────────────────────────


def _detect_indent(text: str) -> str | int:
    """Reuse the file's own indentation (two spaces when undetectable)."""
    match = _INDENT_RE.match(text)
    if not match:
        return 2
    indent = match.group(1)
    return indent if "\t" in indent else len(indent)


def write_json_atomic(path: Path, data: dict, *, indent: str | int = 2, phase: str) -> None:
    """Serialize ``data`` to ``path`` via temp-file-then-rename.

    Raises:
        FilesystemError: the temp file could not be written or renamed.
    """
    content = json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
    try:
        _fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            tmp.replace(path)
            logger.debug("Wrote %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise FilesystemError(phase, path, e) from e


def _load_json_object(path: Path) -> tuple[dict | None, str]:
    """Return (parsed object or None, raw text).  Missing or unreadable → (None, "")."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return None, ""
    try:
        data = json.loads(text)
    except ValueError:
        return None, text
    if not isinstance(data, dict):
        return None, text
    return data, text


def _section(data: dict, key: str) -> dict | None:
    """Get or create a dict-valued section; None if it holds a non-dict."""
    value = data.setdefault(key, {})
    return value if isinstance(value, dict) else None


# ═══════════════════════════════════════════════════════════════════
#  package.json
# ═══════════════════════════════════════════════════════════════════


def _declared_packages(data: dict) -> set[str]:
    """Names listed in either dependency section (non-dict sections ignored)."""
    names: set[str] = set()
    for key in ("dependencies", "devDependencies"):
        value = data.get(key)
        if isinstance(value, dict):
            names.update(value)
    return names


def _manual_patch_instructions(patch: ManifestPatch) -> str:
    lines: list[str] = []
    if patch.dependencies:
        lines.append('"dependencies": ' + json.dumps(patch.dependencies, indent=2))
    if patch.dev_dependencies:
        lines.append('"devDependencies": ' + json.dumps(patch.dev_dependencies, indent=2))
    if patch.script_name:
        lines.append(f'"scripts": {{ "{patch.script_name}": "{patch.script_command}" }}')
    return "\n".join(lines)


def merge_manifest_patch(data: dict, patch: ManifestPatch) -> list[str]:
    """Apply ``patch`` to a parsed manifest in place.

    Returns:
        Human-readable list of the changes made (empty when none).
    """
    changes: list[str] = []
    declared = _declared_packages(data)

    for key, deps in (("dependencies", patch.dependencies), ("devDependencies", patch.dev_dependencies)):
        missing = {name: version for name, version in deps.items() if name not in declared}
        if not missing:
            continue
        section = _section(data, key)
        if section is None:
            raise ValueError(f'"{key}" is not an object')
        for name, version in missing.items():
            section[name] = version
            declared.add(name)
            changes.append(f"{key}.{name}")

    if patch.script_name:
        scripts = _section(data, "scripts")
        if scripts is None:
            raise ValueError('"scripts" is not an object')
        marker = patch.script_marker or patch.script_command
        current = scripts.get(patch.script_name)
        if not isinstance(current, str) or not current.strip():
            scripts[patch.script_name] = patch.script_command
            changes.append(f"scripts.{patch.script_name}")
        elif marker not in current:
            scripts[patch.script_name] = f"{current}{patch.script_separator}{patch.script_command}"
            changes.append(f"scripts.{patch.script_name} (appended)")

    return changes


def apply_manifest_patch(root: Path, patch: ManifestPatch, *, phase: str) -> Outcome:
    """Apply ``patch`` to ``root/package.json`` with one atomic write."""
    path = root / "package.json"
    rel = "package.json"
    if patch.is_empty:
        return Outcome.skipped(phase, rel, "Nothing to change")

    data, text = _load_json_object(path)
    if data is None:
        reason = "is missing or unreadable" if not text else "is not valid JSON"
        logger.warning("package.json %s; skipping manifest patch", reason)
        return Outcome.warned(
            phase,
            rel,
            message=f"package.json {reason}. Add these entries manually:",
            snippet=_manual_patch_instructions(patch),
        )

    try:
        changes = merge_manifest_patch(data, patch)
    except ValueError as e:
        return Outcome.warned(
            phase,
            rel,
            message=f"package.json has an unexpected shape ({e}). Add these entries manually:",
            snippet=_manual_patch_instructions(patch),
        )

    if not changes:
        return Outcome.skipped(phase, rel, "package.json already up to date")

    write_json_atomic(path, data, indent=_detect_indent(text), phase=phase)
    return Outcome.patched(phase, rel, f"Updated package.json: {', '.join(changes)}")


# ═══════════════════════════════════════════════════════════════════
#  tsconfig.json
# ═══════════════════════════════════════════════════════════════════


def exclude_from_tsconfig(root: Path, entry: str, *, phase: str) -> Outcome:
    """Ensure ``entry`` is listed in tsconfig.json's ``exclude`` array."""
    path = root / "tsconfig.json"
    rel = "tsconfig.json"
    if not path.exists():
        return Outcome.skipped(phase, rel, "No tsconfig.json")

    data, text = _load_json_object(path)
    snippet = f'"exclude": ["{entry}"]'
    if data is None:
        logger.warning("tsconfig.json is not plain JSON; not editing it")
        return Outcome.warned(
            phase,
            rel,
            message=f'Could not parse tsconfig.json. Add "{entry}" to its "exclude" list:',
            snippet=snippet,
        )

    exclude = data.get("exclude")
    if exclude is None:
        exclude = data["exclude"] = []
    if not isinstance(exclude, list):
        return Outcome.warned(
            phase,
            rel,
            message=f'tsconfig.json "exclude" is not a list. Add "{entry}" manually:',
            snippet=snippet,
        )
    if entry in exclude:
        return Outcome.skipped(phase, rel, f'"{entry}" already excluded in tsconfig.json')

    exclude.append(entry)
    write_json_atomic(path, data, indent=_detect_indent(text), phase=phase)
    return Outcome.patched(phase, rel, f'Added "{entry}" to tsconfig.json exclude')
