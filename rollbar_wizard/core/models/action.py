"""
FileAction and Outcome models — the mutation contract.

FileActions are planned effects on one path, derived deterministically
from (fingerprint, config).  Outcomes record what actually happened when
the executor applied them.  The executor sends FileActions in and gets
Outcomes back; only a failed write escapes as an exception.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from rollbar_wizard.core.models.template import GeneratedFile

ActionKind = Literal["create", "patch", "skip", "warn"]
OutcomeStatus = Literal["created", "patched", "skipped", "warned", "failed"]


class FileAction(BaseModel):
    """A planned effect on a single path.

    kind:
        create  write ``content`` if the path is absent; when ``owned`` is
                set, also replace it whenever the content differs
        patch   replace an existing placeholder with ``content``
        skip    leave the path alone
        warn    leave the path alone and tell the user what to add
    """

    kind: ActionKind
    path: str
    content: str = ""
    owned: bool = False
    reason: str = ""
    snippet: str = ""

    @classmethod
    def create(cls, file: GeneratedFile) -> FileAction:
        return cls(
            kind="create",
            path=file.path,
            content=file.content,
            owned=file.overwrite,
            reason=file.reason,
        )

    @classmethod
    def patch(cls, path: str, content: str, reason: str) -> FileAction:
        return cls(kind="patch", path=path, content=content, reason=reason)

    @classmethod
    def skip(cls, path: str, reason: str) -> FileAction:
        return cls(kind="skip", path=path, reason=reason)

    @classmethod
    def warn(cls, path: str, reason: str, snippet: str = "") -> FileAction:
        return cls(kind="warn", path=path, reason=reason, snippet=snippet)


class Outcome(BaseModel):
    """Result of applying one action (file write, patch, install...)."""

    phase: str
    path: str = ""
    status: OutcomeStatus = "skipped"
    message: str = ""
    snippet: str = ""

    @property
    def mutated(self) -> bool:
        """Whether this outcome changed something on disk."""
        return self.status in ("created", "patched")

    @classmethod
    def created(cls, phase: str, path: str, message: str = "") -> Outcome:
        return cls(phase=phase, path=path, status="created", message=message or f"Created {path}")

    @classmethod
    def patched(cls, phase: str, path: str, message: str = "") -> Outcome:
        return cls(phase=phase, path=path, status="patched", message=message or f"Updated {path}")

    @classmethod
    def skipped(cls, phase: str, path: str = "", message: str = "") -> Outcome:
        return cls(phase=phase, path=path, status="skipped", message=message)

    @classmethod
    def warned(
        cls,
        phase: str,
        path: str = "",
        message: str = "",
        snippet: str = "",
    ) -> Outcome:
        return cls(phase=phase, path=path, status="warned", message=message, snippet=snippet)

    @classmethod
    def failure(cls, phase: str, path: str, message: str) -> Outcome:
        return cls(phase=phase, path=path, status="failed", message=message)
