"""
Application wizard controller.

Four editing steps (Personal Info, Professional, Documents, Review) share one
draft. Moving forward is gated by validation, moving back is always allowed,
and submission from Review runs upload -> profile write -> snapshot insert
in strict order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from portal.errors import (
    JobNotFoundError,
    ProfileWriteError,
    SubmissionCancelledError,
    SubmissionInProgressError,
    UploadError,
    WizardStateError,
)
from portal.models import CandidateIdentity, JobSummary, ProfileRecord, ResumeFile
from portal.utils.uploads import RESUME_BUCKET, check_resume, storage_path
from portal.wizard.draft import (
    ACADEMIC_FIELDS,
    PERSONAL_FIELDS,
    PROFESSIONAL_FIELDS,
    DraftApplication,
    profile_fields,
)
from portal.wizard.snapshot import SubmissionSnapshot, build_snapshot
from portal.wizard.validation import FIRST_STEP, LAST_STEP, WizardState, validate_step

if TYPE_CHECKING:
    from portal.stores import Collaborators

logger = logging.getLogger(__name__)


@dataclass
class StepOutcome:
    """Result of a navigation request."""

    ok: bool
    state: WizardState
    errors: dict[str, str] = field(default_factory=dict)
    notice: str | None = None
    description: str | None = None


@dataclass
class _Upload:
    file: ResumeFile
    path: str
    url: str


class ApplicationWizard:
    """One candidate's application session for one job."""

    def __init__(
        self,
        identity: CandidateIdentity,
        job: JobSummary,
        collaborators: Collaborators,
        profile: ProfileRecord | None = None,
        already_applied: bool = False,
    ):
        self.identity = identity
        self.job = job
        self.profile = profile
        self.draft = DraftApplication.from_profile(profile)
        self.state = WizardState.SUBMITTED if already_applied else FIRST_STEP
        self.snapshot: SubmissionSnapshot | None = None
        self.application_id: str | None = None
        self._collaborators = collaborators
        self._submitting = False
        self._closed = False
        self._upload: _Upload | None = None

    @property
    def _prefix(self) -> str:
        return f"[{self.identity.user_id}/{self.job.id}]"

    @property
    def current_step(self) -> int | None:
        """Step number 1..4 while editing, None once submitted."""
        if self.state is WizardState.SUBMITTED:
            return None
        return int(self.state)

    @property
    def existing_resume_url(self) -> str | None:
        return self.profile.primary_resume_url if self.profile else None

    @property
    def is_submitted(self) -> bool:
        return self.state is WizardState.SUBMITTED

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _require_editing(self) -> None:
        if self._closed:
            raise WizardStateError("This application wizard has been closed")
        if self.is_submitted:
            raise WizardStateError("Application already submitted")
        if self._submitting:
            raise SubmissionInProgressError("Submission in progress")

    def _move(self, target: WizardState) -> StepOutcome:
        logger.debug(f"{self._prefix} Step {self.state.title} -> {target.title}")
        self.state = target
        return StepOutcome(ok=True, state=target)

    # Navigation

    def advance(self) -> StepOutcome:
        """Validate the current step and move to the next one."""
        self._require_editing()
        if self.state is LAST_STEP:
            return StepOutcome(ok=False, state=self.state, notice="Submit your application to finish")

        result = validate_step(self.state, self.draft, self.existing_resume_url)
        if not result.valid:
            logger.debug(f"{self._prefix} {self.state.title} blocked: {sorted(result.errors)}")
            return StepOutcome(
                ok=False,
                state=self.state,
                errors=result.errors,
                notice=result.notice,
                description=result.description,
            )
        return self._move(WizardState(self.state + 1))

    def retreat(self) -> StepOutcome:
        """Go back one step; no validation needed."""
        self._require_editing()
        if self.state is FIRST_STEP:
            return StepOutcome(ok=False, state=self.state)
        return self._move(WizardState(self.state - 1))

    def jump_to(self, target: int) -> StepOutcome:
        """Jump to an earlier (or the current) step; never skips ahead."""
        self._require_editing()
        if not FIRST_STEP <= target <= self.state:
            return StepOutcome(
                ok=False,
                state=self.state,
                notice="Complete the current step before moving ahead",
            )
        return self._move(WizardState(target))

    # Draft editing

    def update_draft(self, **changes: Any) -> None:
        self._require_editing()
        self.draft.apply_changes(changes)

    def set_save_to_profile(self, enabled: bool) -> None:
        self.update_draft(save_to_profile=enabled)

    def attach_resume(self, file: ResumeFile) -> None:
        """Attach a resume; a rejected file leaves the previous one in place."""
        self._require_editing()
        check_resume(file)
        self.draft.resume = file
        logger.debug(f"{self._prefix} Attached {file.filename} ({file.size} bytes)")

    def detach_resume(self) -> None:
        self._require_editing()
        self.draft.resume = None

    def close(self) -> None:
        """Tear the wizard down; a submission not yet started will not run."""
        self._closed = True

    def summary(self) -> dict[str, Any]:
        """Read-only view of everything the Review step shows."""
        draft = self.draft
        return {
            "job": self.job.model_dump(),
            "full_name": self.profile.full_name if self.profile else "",
            "email": (self.profile.email if self.profile and self.profile.email else self.identity.email),
            "personal": {name: getattr(draft, name) for name in PERSONAL_FIELDS},
            "academic": {name: getattr(draft, name) for name in ACADEMIC_FIELDS},
            "professional": {name: getattr(draft, name) for name in PROFESSIONAL_FIELDS},
            "resume": {
                "filename": draft.resume.filename if draft.resume else None,
                "existing_url": self.existing_resume_url,
            },
            "save_to_profile": draft.save_to_profile,
        }

    # Submission

    def _first_invalid_step(self) -> tuple[WizardState, dict[str, str]] | None:
        for step in (WizardState.PERSONAL_INFO, WizardState.PROFESSIONAL, WizardState.DOCUMENTS):
            result = validate_step(step, self.draft, self.existing_resume_url)
            if not result.valid:
                return step, result.errors
        return None

    async def _resolve_resume_url(self) -> tuple[str | None, _Upload | None]:
        """Upload a newly attached resume, or fall back to the profile's one."""
        resume = self.draft.resume
        if resume is None:
            return self.existing_resume_url, None

        if self._upload is not None and self._upload.file is resume:
            logger.info(f"{self._prefix} Reusing uploaded resume {self._upload.path}")
            return self._upload.url, None

        path = storage_path(self.identity.user_id, resume.filename)
        logger.info(f"{self._prefix} Uploading resume: {path}")
        url = await self._collaborators.documents.upload_file(RESUME_BUCKET, path, resume)
        self._upload = _Upload(file=resume, path=path, url=url)
        return url, self._upload

    async def _discard_upload(self, upload: _Upload) -> None:
        try:
            await self._collaborators.documents.delete_file(RESUME_BUCKET, upload.path)
        except UploadError as e:
            logger.warning(f"{self._prefix} Could not remove orphaned upload {upload.path}: {e}")
        self._upload = None

    async def submit(self) -> SubmissionSnapshot:
        """Upload, save to profile, and record the application snapshot."""
        if self._closed:
            raise SubmissionCancelledError("The application wizard was closed")
        if self._submitting:
            raise SubmissionInProgressError("Submission in progress")
        if self.is_submitted:
            raise WizardStateError("Application already submitted")
        if self.state is not LAST_STEP:
            raise WizardStateError("Applications can only be submitted from the Review step")

        invalid = self._first_invalid_step()
        if invalid is not None:
            step, _ = invalid
            self.state = step
            raise WizardStateError(f"Please complete the {step.title} step before submitting")

        self._submitting = True
        try:
            resume_url, fresh_upload = await self._resolve_resume_url()

            if self.draft.save_to_profile:
                try:
                    await self._collaborators.profiles.update_profile(
                        self.identity.user_id, profile_fields(self.draft, resume_url)
                    )
                except ProfileWriteError:
                    if fresh_upload is not None:
                        await self._discard_upload(fresh_upload)
                    raise
                logger.info(f"{self._prefix} Profile updated")

            snapshot = build_snapshot(self.identity, self.profile, self.draft, self.job.id, resume_url)
            self.application_id = await self._collaborators.applications.insert_application(snapshot)
        except Exception as e:
            logger.warning(f"{self._prefix} Submission failed: {e}")
            raise
        finally:
            self._submitting = False

        self.snapshot = snapshot
        self.state = WizardState.SUBMITTED
        self._upload = None
        logger.info(f"{self._prefix} Application {self.application_id} submitted")
        return snapshot


async def open_wizard(
    identity: CandidateIdentity,
    job_id: str,
    collaborators: Collaborators,
) -> ApplicationWizard:
    """Load the job, duplicate check and profile, then start at step 1."""
    job = await collaborators.catalog.fetch_job(job_id)
    if job is None:
        raise JobNotFoundError("This position may no longer be available.")

    already_applied = await collaborators.catalog.has_existing_application(identity.user_id, job_id)
    profile = await collaborators.profiles.fetch_profile(identity.user_id)
    if already_applied:
        logger.info(f"[{identity.user_id}/{job_id}] Already applied, opening as submitted")

    return ApplicationWizard(
        identity,
        job,
        collaborators,
        profile=profile,
        already_applied=already_applied,
    )
