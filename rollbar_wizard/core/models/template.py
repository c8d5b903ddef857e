"""
Generated file model — used by all generators.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file produced by a template generator.

    Attributes:
        path:      Relative path from project root.
        content:   Full file content.
        overwrite: Whether the wizard owns the file and may replace it.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""
