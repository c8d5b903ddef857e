"""
Engine executor — applies planned FileActions and collects Outcomes.

Flow:
    fingerprint + config → decide (FileActions) → apply → Outcomes → SetupReport

Decisions are made by ``services/nextjs_setup.py``; this module only
performs the filesystem side effects they describe.  An ``OSError``
while writing is raised as ``FilesystemError`` so the run aborts at the
phase boundary.  Nothing that was written earlier is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rollbar_wizard.core.errors import FilesystemError
from rollbar_wizard.core.models.action import FileAction, Outcome

logger = logging.getLogger(__name__)


@dataclass
class PhaseResult:
    """Outcomes of one wizard phase, in the order they happened."""

    name: str
    outcomes: list[Outcome] = field(default_factory=list)

    def add(self, outcome: Outcome) -> Outcome:
        self.outcomes.append(outcome)
        return outcome

    def extend(self, outcomes: list[Outcome]) -> None:
        self.outcomes.extend(outcomes)

    @property
    def failed(self) -> bool:
        return any(o.status == "failed" for o in self.outcomes)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }


@dataclass
class SetupReport:
    """Result of a whole wizard run."""

    phases: list[PhaseResult] = field(default_factory=list)
    failed_phase: str | None = None
    error: str = ""

    def phase(self, name: str) -> PhaseResult:
        """Start (and register) a new phase."""
        result = PhaseResult(name=name)
        self.phases.append(result)
        return result

    @property
    def outcomes(self) -> list[Outcome]:
        return [o for p in self.phases for o in p.outcomes]

    def _count(self, status: str) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def created(self) -> int:
        return self._count("created")

    @property
    def patched(self) -> int:
        return self._count("patched")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def warned(self) -> int:
        return self._count("warned")

    @property
    def failed(self) -> int:
        return self._count("failed")

    @property
    def mutations(self) -> int:
        return sum(1 for o in self.outcomes if o.mutated)

    @property
    def ok(self) -> bool:
        return self.failed_phase is None and self.failed == 0

    @property
    def status(self) -> str:
        if self.ok:
            return "ok" if self.warned == 0 else "warnings"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "failed_phase": self.failed_phase,
            "error": self.error,
            "created": self.created,
            "patched": self.patched,
            "skipped": self.skipped,
            "warned": self.warned,
            "failed": self.failed,
            "mutations": self.mutations,
            "phases": [p.to_dict() for p in self.phases],
        }


# ═══════════════════════════════════════════════════════════════════
#  Apply
# ═══════════════════════════════════════════════════════════════════


def _read_existing(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except UnicodeDecodeError:
        return None


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def apply_action(root: Path, action: FileAction, *, phase: str) -> Outcome:
    """Perform one FileAction.

    ``create`` writes when the path is absent; an ``owned`` create also
    rewrites a path whose content differs.  Identical content is always
    a skip, which keeps repeated runs free of writes.

    Raises:
        FilesystemError: the write (or the directory creation) failed.
    """
    target = root / action.path

    if action.kind == "skip":
        logger.debug("skip %s: %s", action.path, action.reason)
        return Outcome.skipped(phase, action.path, action.reason)

    if action.kind == "warn":
        logger.warning("%s: %s", action.path, action.reason)
        return Outcome.warned(phase, action.path, action.reason, action.snippet)

    try:
        if action.kind == "create":
            existing = _read_existing(target) if target.exists() else None
            if existing is None and target.exists():
                # present but unreadable as text: never clobber it
                return Outcome.skipped(phase, action.path, f"{action.path} already exists")
            if existing is not None:
                if existing == action.content:
                    return Outcome.skipped(phase, action.path, f"{action.path} is up to date")
                if not action.owned:
                    return Outcome.skipped(phase, action.path, f"{action.path} already exists")
                _write(target, action.content)
                logger.info("Regenerated %s", action.path)
                return Outcome.patched(phase, action.path, f"Regenerated {action.path}")
            _write(target, action.content)
            logger.info("Created %s", action.path)
            return Outcome.created(phase, action.path)

        if action.kind == "patch":
            existing = _read_existing(target)
            if existing == action.content:
                return Outcome.skipped(phase, action.path, f"{action.path} is up to date")
            _write(target, action.content)
            logger.info("Patched %s", action.path)
            return Outcome.patched(phase, action.path, action.reason or f"Updated {action.path}")
    except OSError as e:
        logger.error("Failed to write %s: %s", target, e)
        raise FilesystemError(phase, action.path, e) from e

    raise ValueError(f"Unknown action kind: {action.kind}")


def apply_actions(root: Path, actions: list[FileAction], result: PhaseResult) -> list[Outcome]:
    """Apply ``actions`` in order, recording each outcome on ``result``."""
    return [result.add(apply_action(root, a, phase=result.name)) for a in actions]
