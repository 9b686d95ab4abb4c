"""Data models shared by the wizard, the stores and the API."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class CandidateIdentity:
    """The signed-in candidate, passed explicitly to everything that needs it."""

    user_id: str
    email: str


class ProfileRecord(BaseModel):
    """Stored candidate profile as read from the Profile Store."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    full_name: str = ""
    email: str = ""
    phone: str | None = None
    date_of_birth: str | None = None
    nationality: str | None = None
    gender: str | None = None
    address: str | None = None
    class_x_school: str | None = None
    class_x_year: int | None = None
    class_x_percentage: float | None = None
    class_xii_school: str | None = None
    class_xii_year: int | None = None
    class_xii_percentage: float | None = None
    degree_institution: str | None = None
    degree_name: str | None = None
    degree_year: int | None = None
    degree_cgpa: float | None = None
    current_company: str | None = None
    current_ctc: float | None = None
    expected_ctc: float | None = None
    primary_resume_url: str | None = None
    profile_image_url: str | None = None


class JobSummary(BaseModel):
    """Job metadata used for the wizard header."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    location: str
    job_type: str


class ResumeFile(BaseModel):
    """An attached file held in memory until it is uploaded."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)
