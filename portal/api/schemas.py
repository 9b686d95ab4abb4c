"""API request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


# Job schemas
class JobResponse(BaseModel):
    id: str
    title: str
    location: str
    job_type: str
    job_function: str
    description: str
    minimum_experience: int
    salary_range: str | None = None
    created_at: datetime


class JobDetailResponse(JobResponse):
    requirements: list[str] = []
    responsibilities: list[str] = []


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total: int
    filtered: bool
    available_locations: list[str]
    location_categories: list[str]


# Wizard schemas
class JobHeader(BaseModel):
    id: str
    title: str
    location: str
    job_type: str


class DraftResponse(BaseModel):
    phone: str
    date_of_birth: str
    nationality: str
    gender: str
    address: str
    class_x_school: str
    class_x_year: str
    class_x_percentage: str
    class_xii_school: str
    class_xii_year: str
    class_xii_percentage: str
    degree_institution: str
    degree_name: str
    degree_year: str
    degree_cgpa: str
    current_company: str
    current_ctc: str
    expected_ctc: str
    save_to_profile: bool


class DraftUpdate(BaseModel):
    phone: str | None = None
    date_of_birth: str | None = None
    nationality: str | None = None
    gender: str | None = None
    address: str | None = None
    class_x_school: str | None = None
    class_x_year: str | None = None
    class_x_percentage: str | None = None
    class_xii_school: str | None = None
    class_xii_year: str | None = None
    class_xii_percentage: str | None = None
    degree_institution: str | None = None
    degree_name: str | None = None
    degree_year: str | None = None
    degree_cgpa: str | None = None
    current_company: str | None = None
    current_ctc: str | None = None
    expected_ctc: str | None = None
    save_to_profile: bool | None = None


class WizardResponse(BaseModel):
    session_id: str
    state: str = Field(description="personal_info/professional/documents/review/submitted")
    current_step: int | None
    step_title: str
    job: JobHeader
    draft: DraftResponse
    resume_filename: str | None
    existing_resume_url: str | None
    submitting: bool
    application_id: str | None = None


class StepResponse(BaseModel):
    ok: bool
    errors: dict[str, str] = {}
    notice: str | None = None
    description: str | None = None
    wizard: WizardResponse


class SubmitResponse(BaseModel):
    application_id: str
    message: str
    wizard: WizardResponse


# Account schemas
class AccountCreate(BaseModel):
    full_name: str = Field(min_length=2)
    email: str = Field(min_length=3)


class AccountResponse(BaseModel):
    user_id: str
    email: str
    full_name: str


class ProfileResponse(BaseModel):
    full_name: str
    email: str
    phone: str | None
    date_of_birth: str | None
    nationality: str | None
    gender: str | None
    address: str | None
    class_x_school: str | None
    class_x_year: int | None
    class_x_percentage: float | None
    class_xii_school: str | None
    class_xii_year: int | None
    class_xii_percentage: float | None
    degree_institution: str | None
    degree_name: str | None
    degree_year: int | None
    degree_cgpa: float | None
    current_company: str | None
    current_ctc: float | None
    expected_ctc: float | None
    primary_resume_url: str | None
    profile_image_url: str | None

    class Config:
        from_attributes = True


class PersonalDetailsUpdate(BaseModel):
    full_name: str = Field(min_length=2, description="Please enter your full name")
    phone: str | None = None
    date_of_birth: str | None = None
    nationality: str | None = None
    gender: str | None = None
    address: str | None = None


class AcademicDetailsUpdate(BaseModel):
    class_x_school: str | None = None
    class_x_year: str | None = None
    class_x_percentage: str | None = None
    class_xii_school: str | None = None
    class_xii_year: str | None = None
    class_xii_percentage: str | None = None
    degree_institution: str | None = None
    degree_name: str | None = None
    degree_year: str | None = None
    degree_cgpa: str | None = None
    current_company: str | None = None
    current_ctc: str | None = None
    expected_ctc: str | None = None


class FileUploadResponse(BaseModel):
    url: str
    message: str


class ApplicationSummary(BaseModel):
    id: str
    job_id: str
    status: str
    applied_at: datetime
    job_title: str
    job_location: str
    job_type: str


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationSummary]


class DashboardResponse(BaseModel):
    full_name: str
    email: str
    profile_completion: int
    has_resume: bool
    applications: list[ApplicationSummary]
    recommended_jobs: list[JobHeader]
