"""
Shared helpers for the JavaScript/TypeScript generators.
"""

from __future__ import annotations


def js_string(value: str) -> str:
    """Quote a value as a single-quoted JS string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def up_to_root(depth: int) -> str:
    """Relative import prefix climbing ``depth`` directories (``../..``)."""
    if depth <= 0:
        return "."
    return "/".join([".."] * depth)


def location_label(location: tuple[str, ...], *rest: str) -> str:
    """Join a router location and trailing parts with forward slashes."""
    return "/".join((*location, *rest))
