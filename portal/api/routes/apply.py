"""
Application wizard endpoints.

Every route here is async so live wizards and the session cache are only
touched from the event loop; neither is thread-safe.
"""

import logging
import uuid

from cachetools import TTLCache
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from portal.api.deps import get_collaborators, get_identity, get_wizard_sessions
from portal.api.limiter import limiter
from portal.api.schemas import (
    DraftResponse,
    DraftUpdate,
    JobHeader,
    StepResponse,
    SubmitResponse,
    WizardResponse,
)
from portal.config import settings
from portal.errors import (
    JobNotFoundError,
    ResumePolicyError,
    SubmissionCancelledError,
    SubmissionError,
    SubmissionInProgressError,
    WizardStateError,
)
from portal.models import CandidateIdentity, ResumeFile
from portal.stores import Collaborators
from portal.wizard import ApplicationWizard, StepOutcome, open_wizard

logger = logging.getLogger(__name__)

router = APIRouter()


def _wizard_response(session_id: str, wizard: ApplicationWizard) -> WizardResponse:
    return WizardResponse(
        session_id=session_id,
        state=wizard.state.name.lower(),
        current_step=wizard.current_step,
        step_title=wizard.state.title,
        job=JobHeader(**wizard.job.model_dump()),
        draft=DraftResponse(**wizard.draft.model_dump()),
        resume_filename=wizard.draft.resume.filename if wizard.draft.resume else None,
        existing_resume_url=wizard.existing_resume_url,
        submitting=wizard.is_submitting,
        application_id=wizard.application_id,
    )


def _step_response(session_id: str, wizard: ApplicationWizard, outcome: StepOutcome) -> StepResponse:
    return StepResponse(
        ok=outcome.ok,
        errors=outcome.errors,
        notice=outcome.notice,
        description=outcome.description,
        wizard=_wizard_response(session_id, wizard),
    )


def _get_wizard(
    session_id: str,
    identity: CandidateIdentity,
    sessions: TTLCache,
) -> ApplicationWizard:
    """Look up a live wizard owned by the caller."""
    wizard = sessions.get(session_id)
    if wizard is None:
        raise HTTPException(status_code=404, detail="Application session not found or expired")
    if wizard.identity.user_id != identity.user_id:
        raise HTTPException(status_code=403, detail="Access denied")
    return wizard


def _editing(action):
    """Run a wizard edit, mapping state errors to 409."""
    try:
        return action()
    except (WizardStateError, SubmissionInProgressError) as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{job_id}", response_model=WizardResponse)
async def start_application(
    job_id: str,
    identity: CandidateIdentity = Depends(get_identity),
    collaborators: Collaborators = Depends(get_collaborators),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Open the wizard for a job, pre-filled from the candidate's profile."""
    try:
        wizard = await open_wizard(identity, job_id, collaborators)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Job Not Found. {e}")

    session_id = str(uuid.uuid4())
    sessions[session_id] = wizard
    return _wizard_response(session_id, wizard)


@router.get("/sessions/{session_id}", response_model=WizardResponse)
async def get_application(
    session_id: str,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Current wizard state and draft."""
    wizard = _get_wizard(session_id, identity, sessions)
    return _wizard_response(session_id, wizard)


@router.patch("/sessions/{session_id}/draft", response_model=WizardResponse)
async def update_draft(
    session_id: str,
    data: DraftUpdate,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Edit draft fields; only the fields sent are changed."""
    wizard = _get_wizard(session_id, identity, sessions)
    changes = data.model_dump(exclude_unset=True)
    _editing(lambda: wizard.update_draft(**changes))
    return _wizard_response(session_id, wizard)


@router.post("/sessions/{session_id}/next", response_model=StepResponse)
async def next_step(
    session_id: str,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Validate the current step and move forward."""
    wizard = _get_wizard(session_id, identity, sessions)
    outcome = _editing(wizard.advance)
    return _step_response(session_id, wizard, outcome)


@router.post("/sessions/{session_id}/back", response_model=StepResponse)
async def previous_step(
    session_id: str,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Move back one step."""
    wizard = _get_wizard(session_id, identity, sessions)
    outcome = _editing(wizard.retreat)
    return _step_response(session_id, wizard, outcome)


@router.post("/sessions/{session_id}/jump/{step}", response_model=StepResponse)
async def jump_to_step(
    session_id: str,
    step: int,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Jump back to a completed step (Review "Edit" links, step indicator)."""
    wizard = _get_wizard(session_id, identity, sessions)
    outcome = _editing(lambda: wizard.jump_to(step))
    return _step_response(session_id, wizard, outcome)


@router.post("/sessions/{session_id}/resume", response_model=WizardResponse)
async def attach_resume(
    session_id: str,
    file: UploadFile = File(...),
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Attach a resume (PDF, 5 MB max) to the draft."""
    wizard = _get_wizard(session_id, identity, sessions)

    # Read one byte past the limit so oversize files are caught without buffering them
    content = await file.read(settings.max_resume_bytes + 1)
    resume = ResumeFile(
        filename=file.filename or "resume.pdf",
        content_type=file.content_type or "",
        content=content,
    )
    try:
        _editing(lambda: wizard.attach_resume(resume))
    except ResumePolicyError as e:
        status = 413 if e.title == "File too large" else 415
        raise HTTPException(status_code=status, detail=e.message)
    return _wizard_response(session_id, wizard)


@router.delete("/sessions/{session_id}/resume", response_model=WizardResponse)
async def detach_resume(
    session_id: str,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Remove the attached resume from the draft."""
    wizard = _get_wizard(session_id, identity, sessions)
    _editing(wizard.detach_resume)
    return _wizard_response(session_id, wizard)


@router.get("/sessions/{session_id}/review")
async def review_application(
    session_id: str,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Everything the candidate is about to submit."""
    wizard = _get_wizard(session_id, identity, sessions)
    return wizard.summary()


@router.post("/sessions/{session_id}/submit", response_model=SubmitResponse)
@limiter.limit(settings.submit_rate_limit)
async def submit_application(
    request: Request,
    session_id: str,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Submit from the Review step."""
    wizard = _get_wizard(session_id, identity, sessions)
    try:
        await wizard.submit()
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SubmissionCancelledError as e:
        raise HTTPException(status_code=410, detail=str(e))
    except WizardStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SubmissionError as e:
        raise HTTPException(status_code=502, detail={"title": e.title, "message": e.message})

    return SubmitResponse(
        application_id=wizard.application_id,
        message=f"Your application for {wizard.job.title} has been submitted successfully.",
        wizard=_wizard_response(session_id, wizard),
    )


@router.delete("/sessions/{session_id}")
async def close_application(
    session_id: str,
    identity: CandidateIdentity = Depends(get_identity),
    sessions: TTLCache = Depends(get_wizard_sessions),
):
    """Abandon the wizard and discard its draft."""
    wizard = _get_wizard(session_id, identity, sessions)
    wizard.close()
    sessions.pop(session_id, None)
    return {"message": "Application session closed"}
