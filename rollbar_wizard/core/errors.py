"""
Wizard error taxonomy.

    ValidationError     a user-supplied field fails a format check (re-prompt)
    PrerequisiteError   the target is not a project we can set up (abort, exit 1)
    FilesystemError     a write failed mid-run (abort, exit 1, no rollback)
    WizardCancelled     the user backed out (clean exit with the carried code)

Subprocess failures are never raised past a phase boundary; they are
reported as warned outcomes carrying the manual command instead.
"""

from __future__ import annotations

from pathlib import Path


class WizardError(Exception):
    """Base class for all wizard errors."""


class ValidationError(WizardError):
    """A user-supplied value failed validation."""


class PrerequisiteError(WizardError):
    """The target project lacks the markers the wizard needs."""


class FilesystemError(WizardError):
    """A filesystem read/write failed while applying a phase."""

    def __init__(self, phase: str, path: Path | str, cause: OSError) -> None:
        self.phase = phase
        self.path = str(path)
        self.cause = cause
        super().__init__(f"{phase}: cannot write {self.path}: {cause}")


class WizardCancelled(WizardError):
    """The user cancelled the wizard. Not a failure."""

    def __init__(self, message: str = "Operation cancelled.", exit_code: int = 1) -> None:
        self.exit_code = exit_code
        super().__init__(message)
