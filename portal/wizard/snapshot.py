"""Immutable record of what a candidate submitted for a job."""

from pydantic import BaseModel, ConfigDict

from portal.models import CandidateIdentity, ProfileRecord
from portal.wizard.draft import DraftApplication


class SubmissionSnapshot(BaseModel):
    """Point-in-time copy of the draft, independent of later profile edits."""

    model_config = ConfigDict(frozen=True)

    candidate_id: str
    job_id: str
    snapshot_name: str
    snapshot_email: str
    snapshot_phone: str | None = None
    snapshot_date_of_birth: str | None = None
    snapshot_nationality: str | None = None
    snapshot_gender: str | None = None
    snapshot_address: str | None = None
    snapshot_class_x_school: str | None = None
    snapshot_class_x_year: int | None = None
    snapshot_class_x_percentage: float | None = None
    snapshot_class_xii_school: str | None = None
    snapshot_class_xii_year: int | None = None
    snapshot_class_xii_percentage: float | None = None
    snapshot_degree_institution: str | None = None
    snapshot_degree_name: str | None = None
    snapshot_degree_year: int | None = None
    snapshot_degree_cgpa: float | None = None
    snapshot_current_company: str | None = None
    snapshot_current_ctc: float | None = None
    snapshot_expected_ctc: float | None = None
    snapshot_resume_url: str | None = None

    def columns(self) -> dict:
        """Column values for the applications table."""
        data = self.model_dump()
        data["user_id"] = data.pop("candidate_id")
        return data


def build_snapshot(
    identity: CandidateIdentity,
    profile: ProfileRecord | None,
    draft: DraftApplication,
    job_id: str,
    resume_url: str | None,
) -> SubmissionSnapshot:
    """Freeze the draft together with the candidate's stored name and email."""
    fields = {f"snapshot_{name}": value for name, value in draft.typed_fields().items()}
    return SubmissionSnapshot(
        candidate_id=identity.user_id,
        job_id=job_id,
        snapshot_name=profile.full_name if profile else "",
        snapshot_email=(profile.email if profile and profile.email else identity.email),
        snapshot_resume_url=resume_url or None,
        **fields,
    )
