"""
Per-step validation for the application wizard.

Validation is deliberately shallow: presence checks plus a minimum phone
length. No cross-field checks are made.
"""

from dataclasses import dataclass, field
from enum import IntEnum

from portal.config import settings
from portal.wizard.draft import ACADEMIC_FIELDS, FIELD_LABELS, PERSONAL_FIELDS, DraftApplication

RESUME_REQUIRED_TITLE = "Resume Required"
RESUME_REQUIRED_MESSAGE = "Please upload your resume to continue."


class WizardState(IntEnum):
    """Wizard steps plus the terminal Submitted display state."""

    PERSONAL_INFO = 1
    PROFESSIONAL = 2
    DOCUMENTS = 3
    REVIEW = 4
    SUBMITTED = 5

    @property
    def title(self) -> str:
        return STEP_TITLES[self]


STEP_TITLES = {
    WizardState.PERSONAL_INFO: "Personal Info",
    WizardState.PROFESSIONAL: "Professional",
    WizardState.DOCUMENTS: "Documents",
    WizardState.REVIEW: "Review",
    WizardState.SUBMITTED: "Submitted",
}

FIRST_STEP = WizardState.PERSONAL_INFO
LAST_STEP = WizardState.REVIEW


@dataclass
class StepValidation:
    valid: bool
    errors: dict[str, str] = field(default_factory=dict)
    notice: str | None = None
    description: str | None = None


def _required(draft: DraftApplication, names: tuple[str, ...]) -> dict[str, str]:
    return {
        name: f"{FIELD_LABELS[name]} is required"
        for name in names
        if not getattr(draft, name).strip()
    }


def validate_personal(draft: DraftApplication) -> dict[str, str]:
    errors = _required(draft, PERSONAL_FIELDS[1:])
    if len(draft.phone.strip()) < settings.min_phone_length:
        errors["phone"] = f"Phone number must be at least {settings.min_phone_length} digits"
    return {name: errors[name] for name in PERSONAL_FIELDS if name in errors}


def validate_step(
    step: WizardState,
    draft: DraftApplication,
    existing_resume_url: str | None = None,
) -> StepValidation:
    """Check the fields a step owns before the wizard may leave it."""
    match step:
        case WizardState.PERSONAL_INFO:
            errors = validate_personal(draft)
            return StepValidation(valid=not errors, errors=errors)
        case WizardState.PROFESSIONAL:
            errors = _required(draft, ACADEMIC_FIELDS)
            return StepValidation(valid=not errors, errors=errors)
        case WizardState.DOCUMENTS:
            if draft.resume is None and not existing_resume_url:
                return StepValidation(
                    valid=False,
                    notice=RESUME_REQUIRED_TITLE,
                    description=RESUME_REQUIRED_MESSAGE,
                )
            return StepValidation(valid=True)
        case WizardState.REVIEW:
            return StepValidation(valid=True)
        case WizardState.SUBMITTED:
            return StepValidation(valid=False, notice="Application already submitted")
