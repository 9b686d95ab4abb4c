"""
Job application wizard.

- draft: form model shared across steps
- validation: per-step rules and the step enum
- snapshot: frozen record written at submission
- controller: navigation and the submission procedure
"""

from portal.wizard.controller import ApplicationWizard, StepOutcome, open_wizard
from portal.wizard.draft import DraftApplication, profile_fields
from portal.wizard.snapshot import SubmissionSnapshot, build_snapshot
from portal.wizard.validation import StepValidation, WizardState, validate_step

__all__ = [
    "ApplicationWizard",
    "StepOutcome",
    "open_wizard",
    "DraftApplication",
    "profile_fields",
    "SubmissionSnapshot",
    "build_snapshot",
    "StepValidation",
    "WizardState",
    "validate_step",
]
