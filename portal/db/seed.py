"""Demo data for local runs of the CLI and API."""

from sqlalchemy.orm import Session

from portal.db.tables import CandidateProfile, Job, User

DEMO_EMAIL = "candidate@example.com"

DEMO_JOBS = [
    {
        "title": "Chief Financial Officer",
        "location": "Mumbai, India",
        "job_type": "Full-time",
        "job_function": "Finance",
        "description": "Lead finance, treasury and investor relations for a listed manufacturer.",
        "minimum_experience": 15,
        "salary_range": "Confidential",
    },
    {
        "title": "VP Engineering",
        "location": "Bengaluru, India (Hybrid)",
        "job_type": "Full-time",
        "job_function": "Engineering",
        "description": "Own the platform roadmap and grow a 120-person engineering team.",
        "minimum_experience": 12,
    },
    {
        "title": "Head of Product",
        "location": "Remote",
        "job_type": "Contract",
        "job_function": "Product",
        "description": "Twelve-month mandate to rebuild a B2B SaaS product line.",
        "minimum_experience": 8,
    },
]


def seed_demo(db: Session) -> tuple[str, list[str]]:
    """Create a demo candidate and jobs if missing; returns (user_id, job_ids)."""
    user = db.query(User).filter(User.email == DEMO_EMAIL).first()
    if user is None:
        user = User(email=DEMO_EMAIL)
        db.add(user)
        db.flush()
        db.add(CandidateProfile(user_id=user.id, full_name="Demo Candidate", email=DEMO_EMAIL))

    if db.query(Job).count() == 0:
        db.add_all(Job(**job) for job in DEMO_JOBS)

    db.commit()
    job_ids = [job.id for job in db.query(Job).filter(Job.is_active.is_(True)).order_by(Job.title)]
    return user.id, job_ids
