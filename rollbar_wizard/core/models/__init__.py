"""
Domain models — Pydantic types for the wizard.

All models are re-exported here for convenient access:

    from rollbar_wizard.core.models import ProjectFingerprint, WizardConfig, FileAction
"""

from rollbar_wizard.core.models.action import FileAction, Outcome
from rollbar_wizard.core.models.config import WizardConfig
from rollbar_wizard.core.models.fingerprint import ProjectFingerprint
from rollbar_wizard.core.models.manifest import ManifestPatch
from rollbar_wizard.core.models.template import GeneratedFile

__all__ = [
    # action.py
    "FileAction",
    # template.py
    "GeneratedFile",
    # manifest.py
    "ManifestPatch",
    "Outcome",
    # fingerprint.py
    "ProjectFingerprint",
    # config.py
    "WizardConfig",
]
