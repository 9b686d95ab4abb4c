"""Rules for files candidates attach to their profile or application."""

from datetime import UTC, datetime
from pathlib import PurePath

from portal.config import settings
from portal.errors import ResumePolicyError
from portal.models import ResumeFile

PDF_CONTENT_TYPE = "application/pdf"
RESUME_BUCKET = "resumes"
IMAGE_BUCKET = "profile-images"


def check_resume(file: ResumeFile, max_bytes: int | None = None) -> None:
    """Accept only PDFs within the size limit; raises ResumePolicyError."""
    limit = settings.max_resume_bytes if max_bytes is None else max_bytes
    if file.content_type != PDF_CONTENT_TYPE:
        raise ResumePolicyError("Invalid file type", "Please upload a PDF file.")
    if file.size > limit:
        raise ResumePolicyError(
            "File too large",
            f"Please upload a file smaller than {limit // (1024 * 1024)}MB.",
        )


def storage_path(candidate_id: str, filename: str, now: datetime | None = None) -> str:
    """Object path scoped to the candidate and unique per upload attempt."""
    stamp = int((now or datetime.now(UTC)).timestamp() * 1000)
    name = PurePath(filename.replace("\\", "/")).name or "upload"
    return f"{candidate_id}/{stamp}-{name}"
