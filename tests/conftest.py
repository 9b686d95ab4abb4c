"""Shared fixtures: in-memory stores for the wizard, SQLite for the API."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.api.app import app
from portal.api.deps import get_collaborators, get_wizard_sessions
from portal.api.limiter import limiter
from portal.db import Base, CandidateProfile, Job, User, get_db
from portal.errors import ProfileWriteError, SnapshotInsertError, UploadError
from portal.models import CandidateIdentity, JobSummary, ProfileRecord, ResumeFile
from portal.stores import Collaborators, LocalDocumentStore, build_collaborators

MB = 1024 * 1024

COMPLETE_DRAFT = {
    "phone": "9876543210",
    "date_of_birth": "1995-01-01",
    "nationality": "Indian",
    "gender": "male",
    "address": "123 Main St",
    "class_x_school": "ABC School",
    "class_x_year": "2010",
    "class_x_percentage": "90",
    "class_xii_school": "XYZ School",
    "class_xii_year": "2012",
    "class_xii_percentage": "92",
    "degree_institution": "IIT Delhi",
    "degree_name": "B.Tech",
    "degree_year": "2016",
    "degree_cgpa": "8.5",
}


# In-memory collaborators


class FakeProfileStore:
    def __init__(self):
        self.profiles: dict[str, ProfileRecord] = {}
        self.updates: list[tuple[str, dict]] = []
        self.fail = False

    async def fetch_profile(self, candidate_id):
        return self.profiles.get(candidate_id)

    async def update_profile(self, candidate_id, fields):
        if self.fail:
            raise ProfileWriteError("Failed to update profile.")
        self.updates.append((candidate_id, dict(fields)))
        current = self.profiles.get(candidate_id) or ProfileRecord(user_id=candidate_id)
        self.profiles[candidate_id] = current.model_copy(update=fields)


class FakeDocumentStore:
    def __init__(self):
        self.objects: dict[str, ResumeFile] = {}
        self.upload_calls: list[str] = []
        self.deleted: list[str] = []
        self.fail = False
        self.fail_delete = False

    async def upload_file(self, bucket, path, file):
        self.upload_calls.append(path)
        await asyncio.sleep(0)
        if self.fail:
            raise UploadError("Storage unavailable")
        self.objects[f"{bucket}/{path}"] = file
        return self.public_url(bucket, path)

    async def delete_file(self, bucket, path):
        if self.fail_delete:
            raise UploadError(f"Failed to delete {bucket}/{path}")
        self.deleted.append(path)
        self.objects.pop(f"{bucket}/{path}", None)

    def public_url(self, bucket, path):
        return f"https://files.test/{bucket}/{path}"


class FakeJobCatalog:
    def __init__(self):
        self.jobs: dict[str, JobSummary] = {}
        self.applied: set[tuple[str, str]] = set()

    async def fetch_job(self, job_id):
        return self.jobs.get(job_id)

    async def has_existing_application(self, candidate_id, job_id):
        return (candidate_id, job_id) in self.applied


class FakeApplicationStore:
    def __init__(self, catalog: FakeJobCatalog):
        self.catalog = catalog
        self.snapshots = []
        self.fail = False

    async def insert_application(self, snapshot):
        await asyncio.sleep(0)
        if self.fail:
            raise SnapshotInsertError("Failed to submit application.")
        self.snapshots.append(snapshot)
        self.catalog.applied.add((snapshot.candidate_id, snapshot.job_id))
        return f"app-{len(self.snapshots)}"


@pytest.fixture
def identity():
    return CandidateIdentity(user_id="cand-1", email="asha@example.com")


@pytest.fixture
def job():
    return JobSummary(id="job-1", title="Chief Financial Officer", location="Mumbai, India", job_type="Full-time")


@pytest.fixture
def fakes(identity, job):
    catalog = FakeJobCatalog()
    catalog.jobs[job.id] = job
    profiles = FakeProfileStore()
    profiles.profiles[identity.user_id] = ProfileRecord(
        user_id=identity.user_id,
        full_name="Asha Rao",
        email=identity.email,
    )
    return Collaborators(
        profiles=profiles,
        documents=FakeDocumentStore(),
        catalog=catalog,
        applications=FakeApplicationStore(catalog),
    )


@pytest.fixture
def make_pdf():
    def _make(size: int = 2 * MB, filename: str = "resume.pdf", content_type: str = "application/pdf"):
        return ResumeFile(filename=filename, content_type=content_type, content=b"%" * size)

    return _make


@pytest.fixture
def complete_draft():
    return dict(COMPLETE_DRAFT)


# SQL-backed fixtures


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def seeded(session_factory):
    """One candidate with a profile, two active jobs and one closed job."""
    with session_factory() as db:
        user = User(email="asha@example.com")
        db.add(user)
        db.flush()
        db.add(CandidateProfile(user_id=user.id, full_name="Asha Rao", email=user.email))
        jobs = [
            Job(
                title="Chief Financial Officer",
                location="Mumbai, India",
                job_type="Full-time",
                job_function="Finance",
                description="Lead finance for a listed manufacturer.",
                minimum_experience=15,
            ),
            Job(
                title="Head of Product",
                location="Remote",
                job_type="Contract",
                job_function=None,
                description="Rebuild a B2B SaaS product line.",
                minimum_experience=None,
            ),
            Job(
                title="Closed Role",
                location="Delhi, India",
                job_type="Full-time",
                description="No longer hiring.",
                is_active=False,
            ),
        ]
        db.add_all(jobs)
        db.commit()
        return {
            "user_id": user.id,
            "email": user.email,
            "cfo": jobs[0].id,
            "product": jobs[1].id,
            "closed": jobs[2].id,
        }


@pytest.fixture
def client(session_factory, tmp_path):
    """TestClient wired to the in-memory database and a temp document store."""
    documents = LocalDocumentStore(tmp_path / "storage", "http://testserver/files")
    collaborators = build_collaborators(session_factory, documents=documents)
    sessions = get_wizard_sessions()
    sessions.clear()
    limiter.reset()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_collaborators] = lambda: collaborators
    yield TestClient(app)
    app.dependency_overrides.clear()
    sessions.clear()


@pytest.fixture
def auth(seeded):
    return {"X-User-ID": seeded["user_id"]}
