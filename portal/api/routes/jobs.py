"""Job listing endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portal.api.schemas import JobDetailResponse, JobListResponse, JobResponse
from portal.db import Job, get_db
from portal.utils.filters import (
    DEFAULT_FUNCTION,
    JobFilterCriteria,
    available_locations,
    filter_jobs,
    has_active_filters,
    location_categories,
)

router = APIRouter()


def _job_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        location=job.location,
        job_type=job.job_type,
        job_function=job.job_function or DEFAULT_FUNCTION,  # Older rows have no function
        description=job.description or "",
        minimum_experience=job.minimum_experience or 0,
        salary_range=job.salary_range,
        created_at=job.created_at,
    )


@router.get("", response_model=JobListResponse)
def list_jobs(
    q: str = "",
    job_type: list[str] = Query(default=[]),
    location: list[str] = Query(default=[]),
    function: list[str] = Query(default=[]),
    max_experience: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
):
    """List active jobs, newest first, with search and filters applied."""
    jobs = (
        db.query(Job)
        .filter(Job.is_active.is_(True))
        .order_by(Job.created_at.desc())
        .all()
    )
    criteria = JobFilterCriteria(
        query=q,
        job_types=job_type,
        locations=location,
        functions=function,
        max_experience=max_experience,
    )
    matches = filter_jobs(jobs, criteria)
    locations = available_locations(jobs)

    return JobListResponse(
        jobs=[_job_response(job) for job in matches],
        total=len(matches),
        filtered=has_active_filters(criteria),
        available_locations=locations,
        location_categories=location_categories(locations),
    )


@router.get("/{job_id}", response_model=JobDetailResponse)
def get_job(job_id: str, db: Session = Depends(get_db)):
    """Get one active job."""
    job = db.query(Job).filter(Job.id == job_id, Job.is_active.is_(True)).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return JobDetailResponse(
        **_job_response(job).model_dump(),
        requirements=job.requirements or [],
        responsibilities=job.responsibilities or [],
    )
