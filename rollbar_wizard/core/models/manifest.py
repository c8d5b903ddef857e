"""
Manifest patch model — targeted, idempotent edits to package.json.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ManifestPatch(BaseModel):
    """A batch of key insertions into package.json.

    Applying a patch never replaces a value that is already there:
    dependency keys are only added when absent, and the script entry is
    either created, left alone (``script_marker`` already present), or
    appended to the existing command with ``script_separator``.
    """

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)

    script_name: str = ""
    script_command: str = ""
    script_marker: str = ""
    script_separator: str = " && "

    @property
    def is_empty(self) -> bool:
        return not (self.dependencies or self.dev_dependencies or self.script_name)
