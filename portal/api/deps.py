"""Shared FastAPI dependencies."""

from cachetools import TTLCache
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from portal.config import settings
from portal.db import User, get_db, get_session_factory
from portal.models import CandidateIdentity
from portal.stores import Collaborators, build_collaborators

# Live wizard sessions (session_id -> ApplicationWizard).
# Abandoned wizards expire; the draft is client-session state only.
_wizard_sessions: TTLCache = TTLCache(
    maxsize=settings.wizard_session_max,
    ttl=settings.wizard_session_ttl,
)

_collaborators: Collaborators | None = None


def get_identity(
    x_user_id: str = Header(..., alias="X-User-ID"),
    db: Session = Depends(get_db),
) -> CandidateIdentity:
    """Resolve the caller to a candidate identity."""
    user = db.query(User).filter(User.id == x_user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="Unknown candidate")
    return CandidateIdentity(user_id=user.id, email=user.email)


def get_collaborators() -> Collaborators:
    """Stores used by the wizard, created once per process."""
    global _collaborators
    if _collaborators is None:
        _collaborators = build_collaborators(get_session_factory())
    return _collaborators


def get_wizard_sessions() -> TTLCache:
    return _wizard_sessions
