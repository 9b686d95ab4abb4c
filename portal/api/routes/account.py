"""Candidate account endpoints: profile, resume, applications, dashboard."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from portal.api.deps import get_collaborators, get_identity
from portal.api.schemas import (
    AcademicDetailsUpdate,
    AccountCreate,
    AccountResponse,
    ApplicationListResponse,
    ApplicationSummary,
    DashboardResponse,
    FileUploadResponse,
    JobHeader,
    PersonalDetailsUpdate,
    ProfileResponse,
)
from portal.config import settings
from portal.db import Application, CandidateProfile, Job, User, get_db
from portal.errors import ResumePolicyError, UploadError
from portal.models import CandidateIdentity, ResumeFile
from portal.stores import Collaborators
from portal.utils.coercion import blank_to_none, to_float, to_int
from portal.utils.uploads import IMAGE_BUCKET, RESUME_BUCKET, check_resume, storage_path

logger = logging.getLogger(__name__)

router = APIRouter()

COMPLETION_FIELDS = ("full_name", "email", "phone", "primary_resume_url", "degree_institution")
RECENT_APPLICATIONS = 5
RECOMMENDED_JOBS = 3


def _get_profile(db: Session, user_id: str) -> CandidateProfile:
    profile = db.query(CandidateProfile).filter(CandidateProfile.user_id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


def _save(db: Session, profile: CandidateProfile) -> ProfileResponse:
    profile.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(profile)
    return ProfileResponse.model_validate(profile)


def _application_summaries(db: Session, user_id: str, limit: int | None = None) -> list[ApplicationSummary]:
    query = (
        db.query(Application, Job)
        .join(Job, Application.job_id == Job.id)
        .filter(Application.user_id == user_id)
        .order_by(Application.applied_at.desc())
    )
    if limit:
        query = query.limit(limit)
    return [
        ApplicationSummary(
            id=application.id,
            job_id=job.id,
            status=application.status,
            applied_at=application.applied_at,
            job_title=job.title,
            job_location=job.location,
            job_type=job.job_type,
        )
        for application, job in query.all()
    ]


def profile_completion(profile: CandidateProfile | None) -> int:
    """Percentage of the key profile fields that are filled in."""
    if profile is None:
        return 0
    filled = sum(1 for name in COMPLETION_FIELDS if getattr(profile, name))
    return round(filled / len(COMPLETION_FIELDS) * 100)


async def _read_upload(file: UploadFile, limit: int) -> ResumeFile:
    content = await file.read(limit + 1)
    return ResumeFile(
        filename=file.filename or "upload",
        content_type=file.content_type or "",
        content=content,
    )


@router.post("", response_model=AccountResponse)
def create_account(data: AccountCreate, db: Session = Depends(get_db)):
    """Create the candidate record for a newly signed-up user."""
    email = data.email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="An account with this email already exists")

    user = User(email=email)
    db.add(user)
    db.flush()
    db.add(CandidateProfile(user_id=user.id, full_name=data.full_name.strip(), email=email))
    db.commit()

    logger.info(f"[{user.id}] Candidate account created")
    return AccountResponse(user_id=user.id, email=email, full_name=data.full_name.strip())


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    identity: CandidateIdentity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Get the candidate's stored profile."""
    return ProfileResponse.model_validate(_get_profile(db, identity.user_id))


@router.put("/personal", response_model=ProfileResponse)
def update_personal_details(
    data: PersonalDetailsUpdate,
    identity: CandidateIdentity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Update name and personal details."""
    profile = _get_profile(db, identity.user_id)
    profile.full_name = data.full_name.strip()
    profile.phone = blank_to_none(data.phone)
    profile.date_of_birth = blank_to_none(data.date_of_birth)
    profile.nationality = blank_to_none(data.nationality)
    profile.gender = blank_to_none(data.gender)
    profile.address = blank_to_none(data.address)
    return _save(db, profile)


@router.put("/academic", response_model=ProfileResponse)
def update_academic_details(
    data: AcademicDetailsUpdate,
    identity: CandidateIdentity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Update academic and professional details."""
    profile = _get_profile(db, identity.user_id)
    profile.class_x_school = blank_to_none(data.class_x_school)
    profile.class_x_year = to_int(data.class_x_year)
    profile.class_x_percentage = to_float(data.class_x_percentage)
    profile.class_xii_school = blank_to_none(data.class_xii_school)
    profile.class_xii_year = to_int(data.class_xii_year)
    profile.class_xii_percentage = to_float(data.class_xii_percentage)
    profile.degree_institution = blank_to_none(data.degree_institution)
    profile.degree_name = blank_to_none(data.degree_name)
    profile.degree_year = to_int(data.degree_year)
    profile.degree_cgpa = to_float(data.degree_cgpa)
    profile.current_company = blank_to_none(data.current_company)
    profile.current_ctc = to_float(data.current_ctc)
    profile.expected_ctc = to_float(data.expected_ctc)
    return _save(db, profile)


@router.post("/resume", response_model=FileUploadResponse)
async def upload_resume(
    file: UploadFile = File(...),
    identity: CandidateIdentity = Depends(get_identity),
    collaborators: Collaborators = Depends(get_collaborators),
    db: Session = Depends(get_db),
):
    """Upload a new primary resume (PDF, 5 MB max)."""
    profile = _get_profile(db, identity.user_id)
    resume = await _read_upload(file, settings.max_resume_bytes)
    try:
        check_resume(resume)
    except ResumePolicyError as e:
        status = 413 if e.title == "File too large" else 415
        raise HTTPException(status_code=status, detail=e.message)

    path = storage_path(identity.user_id, resume.filename)
    try:
        url = await collaborators.documents.upload_file(RESUME_BUCKET, path, resume)
    except UploadError as e:
        raise HTTPException(status_code=502, detail=f"Upload Failed: {e.message}")

    profile.primary_resume_url = url
    _save(db, profile)
    return FileUploadResponse(url=url, message="Your resume has been saved successfully.")


@router.delete("/resume")
def delete_resume(
    identity: CandidateIdentity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Forget the primary resume; past applications keep their own copy."""
    profile = _get_profile(db, identity.user_id)
    profile.primary_resume_url = None
    _save(db, profile)
    return {"message": "Your resume has been deleted."}


@router.post("/image", response_model=FileUploadResponse)
async def upload_profile_image(
    file: UploadFile = File(...),
    identity: CandidateIdentity = Depends(get_identity),
    collaborators: Collaborators = Depends(get_collaborators),
    db: Session = Depends(get_db),
):
    """Upload a profile picture (any image type)."""
    profile = _get_profile(db, identity.user_id)
    image = await _read_upload(file, settings.max_resume_bytes)
    if not image.content_type.startswith("image/"):
        raise HTTPException(status_code=415, detail="Please upload an image file.")
    if image.size > settings.max_resume_bytes:
        raise HTTPException(status_code=413, detail="Image is too large.")

    path = storage_path(identity.user_id, image.filename)
    try:
        url = await collaborators.documents.upload_file(IMAGE_BUCKET, path, image)
    except UploadError as e:
        raise HTTPException(status_code=502, detail=f"Upload failed: {e.message}")

    profile.profile_image_url = url
    _save(db, profile)
    return FileUploadResponse(url=url, message="Your profile image has been updated.")


@router.get("/applications", response_model=ApplicationListResponse)
def list_applications(
    identity: CandidateIdentity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """All of the candidate's applications, newest first."""
    return ApplicationListResponse(applications=_application_summaries(db, identity.user_id))


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    identity: CandidateIdentity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Profile completion, recent applications and recommended jobs."""
    profile = db.query(CandidateProfile).filter(CandidateProfile.user_id == identity.user_id).first()

    jobs = (
        db.query(Job)
        .filter(Job.is_active.is_(True))
        .order_by(Job.created_at.desc())
        .limit(RECOMMENDED_JOBS)
        .all()
    )
    if not jobs:
        # Fall back to the latest jobs regardless of status
        jobs = db.query(Job).order_by(Job.created_at.desc()).limit(RECOMMENDED_JOBS).all()

    return DashboardResponse(
        full_name=profile.full_name if profile else "",
        email=(profile.email if profile and profile.email else identity.email),
        profile_completion=profile_completion(profile),
        has_resume=bool(profile and profile.primary_resume_url),
        applications=_application_summaries(db, identity.user_id, limit=RECENT_APPLICATIONS),
        recommended_jobs=[
            JobHeader(id=job.id, title=job.title, location=job.location, job_type=job.job_type)
            for job in jobs
        ],
    )
