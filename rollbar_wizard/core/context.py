"""
Project context — the single source of truth for "which project are we wiring up."

Every core service that needs the target project root without having it
passed in imports from here.  The root is set ONCE at startup by the
entry point:

    - CLI:    main.py   → context.set_project_root(root)
    - Tests:  conftest  → resets context._project_root to None

Module-level singleton (not a class).  require_project_root() falls back
to the current working directory when nothing was registered.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_project_root: Optional[Path] = None


def set_project_root(root: Path) -> None:
    """Register the target project root for the current process."""
    global _project_root
    _project_root = root


def require_project_root() -> Path:
    """Return the registered project root, falling back to the CWD."""
    return _project_root if _project_root is not None else Path.cwd()
