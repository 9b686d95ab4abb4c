"""
Draft application edited across the wizard steps.

Every field is free text while editing. Typed values are produced only when
the draft leaves the wizard (profile update payload, submission snapshot).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from portal.errors import WizardStateError
from portal.models import ProfileRecord, ResumeFile
from portal.utils.coercion import blank_to_none, to_float, to_int, to_text

PERSONAL_FIELDS = ("phone", "date_of_birth", "nationality", "gender", "address")
ACADEMIC_FIELDS = (
    "class_x_school",
    "class_x_year",
    "class_x_percentage",
    "class_xii_school",
    "class_xii_year",
    "class_xii_percentage",
    "degree_institution",
    "degree_name",
    "degree_year",
    "degree_cgpa",
)
PROFESSIONAL_FIELDS = ("current_company", "current_ctc", "expected_ctc")
TEXT_FIELDS = PERSONAL_FIELDS + ACADEMIC_FIELDS + PROFESSIONAL_FIELDS

INT_FIELDS = frozenset({"class_x_year", "class_xii_year", "degree_year"})
FLOAT_FIELDS = frozenset(
    {
        "class_x_percentage",
        "class_xii_percentage",
        "degree_cgpa",
        "current_ctc",
        "expected_ctc",
    }
)

FIELD_LABELS = {
    "phone": "Phone",
    "date_of_birth": "Date of birth",
    "nationality": "Nationality",
    "gender": "Gender",
    "address": "Address",
    "class_x_school": "Class X School",
    "class_x_year": "Class X Year",
    "class_x_percentage": "Class X Percentage",
    "class_xii_school": "Class XII School",
    "class_xii_year": "Class XII Year",
    "class_xii_percentage": "Class XII Percentage",
    "degree_institution": "Degree Institution",
    "degree_name": "Degree Name",
    "degree_year": "Degree Year",
    "degree_cgpa": "Degree CGPA",
    "current_company": "Current Company",
    "current_ctc": "Current CTC",
    "expected_ctc": "Expected CTC",
}


class DraftApplication(BaseModel):
    """Mutable form model shared by all steps of one wizard session."""

    model_config = ConfigDict(validate_assignment=True)

    phone: str = ""
    date_of_birth: str = ""
    nationality: str = ""
    gender: str = ""
    address: str = ""
    class_x_school: str = ""
    class_x_year: str = ""
    class_x_percentage: str = ""
    class_xii_school: str = ""
    class_xii_year: str = ""
    class_xii_percentage: str = ""
    degree_institution: str = ""
    degree_name: str = ""
    degree_year: str = ""
    degree_cgpa: str = ""
    current_company: str = ""
    current_ctc: str = ""
    expected_ctc: str = ""
    save_to_profile: bool = True

    # Transient, never serialized
    resume: ResumeFile | None = Field(default=None, exclude=True, repr=False)

    @classmethod
    def from_profile(cls, profile: ProfileRecord | None) -> "DraftApplication":
        """Pre-fill a draft from the stored profile (empty draft when absent)."""
        if profile is None:
            return cls()
        values = {name: to_text(getattr(profile, name)) for name in TEXT_FIELDS}
        return cls(**values, save_to_profile=True)

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Edit named fields in place; unknown names are rejected."""
        unknown = set(changes) - set(TEXT_FIELDS) - {"save_to_profile"}
        if unknown:
            raise WizardStateError(f"Unknown draft fields: {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            if name == "save_to_profile":
                if value is not None:
                    self.save_to_profile = bool(value)
            else:
                setattr(self, name, "" if value is None else str(value))

    def typed_fields(self) -> dict[str, Any]:
        """Coerce every text field to its stored type."""
        typed: dict[str, Any] = {}
        for name in TEXT_FIELDS:
            raw = getattr(self, name)
            if name in INT_FIELDS:
                typed[name] = to_int(raw)
            elif name in FLOAT_FIELDS:
                typed[name] = to_float(raw)
            else:
                typed[name] = blank_to_none(raw)
        return typed


def profile_fields(draft: DraftApplication, resume_url: str | None) -> dict[str, Any]:
    """Payload written back to the Profile Store when save_to_profile is set."""
    fields = draft.typed_fields()
    fields["primary_resume_url"] = resume_url or None
    return fields
