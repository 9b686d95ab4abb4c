"""Job Catalog: open positions and existing-application lookups."""

from typing import Protocol

from sqlalchemy.orm import sessionmaker

from portal.db.tables import Application, Job
from portal.models import JobSummary


class JobCatalog(Protocol):
    async def fetch_job(self, job_id: str) -> JobSummary | None: ...

    async def has_existing_application(self, candidate_id: str, job_id: str) -> bool: ...


class SqlJobCatalog:
    """Job Catalog backed by the jobs and applications tables."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def fetch_job(self, job_id: str) -> JobSummary | None:
        with self._session_factory() as db:
            job = db.query(Job).filter(Job.id == job_id, Job.is_active.is_(True)).first()
            return JobSummary.model_validate(job) if job else None

    async def has_existing_application(self, candidate_id: str, job_id: str) -> bool:
        with self._session_factory() as db:
            existing = (
                db.query(Application.id)
                .filter(Application.user_id == candidate_id, Application.job_id == job_id)
                .first()
            )
            return existing is not None
