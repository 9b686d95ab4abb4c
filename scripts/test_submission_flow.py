"""
End-to-end submission against the configured database.

Seeds the demo candidate and jobs, walks the wizard to Review, submits,
then removes the application again so the script can be rerun.

Requires: DATABASE_URL configured.
Usage: python scripts/test_submission_flow.py
"""

import asyncio
import sys
import tempfile
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

from portal.db import Application, CandidateProfile, User
from portal.db.base import get_session_factory, init_db
from portal.db.seed import seed_demo
from portal.models import CandidateIdentity, ResumeFile
from portal.stores import LocalDocumentStore, build_collaborators
from portal.wizard import WizardState, open_wizard

DRAFT = {
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


async def run_submission(storage_dir: str):
    init_db()
    session_factory = get_session_factory()
    with session_factory() as db:
        user_id, job_ids = seed_demo(db)
        email = db.get(User, user_id).email
        db.query(Application).filter(Application.user_id == user_id, Application.job_id == job_ids[0]).delete()
        db.commit()
    print(f"[OK] Seeded candidate {user_id} and {len(job_ids)} jobs")

    documents = LocalDocumentStore(storage_dir, "http://localhost:8000/files")
    collaborators = build_collaborators(session_factory, documents=documents)
    identity = CandidateIdentity(user_id=user_id, email=email)

    wizard = await open_wizard(identity, job_ids[0], collaborators)
    assert wizard.state is WizardState.PERSONAL_INFO, f"Unexpected start state: {wizard.state.name}"

    wizard.update_draft(**DRAFT)
    wizard.attach_resume(ResumeFile(filename="resume.pdf", content_type="application/pdf", content=b"%PDF-1.4"))
    for _ in range(3):
        outcome = wizard.advance()
        assert outcome.ok, f"Blocked at {outcome.state.title}: {outcome.errors or outcome.notice}"
    print(f"[OK] Reached {wizard.state.title}")

    snapshot = await wizard.submit()
    print(f"[OK] Submitted application {wizard.application_id}")

    with session_factory() as db:
        row = db.get(Application, wizard.application_id)
        assert row is not None, "Application row missing"
        assert row.snapshot_degree_year == 2016, f"Expected int year, got {row.snapshot_degree_year!r}"
        assert row.snapshot_degree_cgpa == 8.5, f"Expected float CGPA, got {row.snapshot_degree_cgpa!r}"
        profile = db.query(CandidateProfile).filter(CandidateProfile.user_id == user_id).one()
        assert profile.primary_resume_url == snapshot.snapshot_resume_url, "Profile resume not updated"
        print("[OK] Snapshot and profile stored with typed values")

        reopened = await open_wizard(identity, job_ids[0], collaborators)
        assert reopened.is_submitted, "Duplicate application not detected"
        print("[OK] Reopening shows the submitted state")

        db.delete(row)
        db.commit()
    print("[OK] Cleaned up application")
    print("\nAll tests passed!")


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as storage_dir:
        asyncio.run(run_submission(storage_dir))
