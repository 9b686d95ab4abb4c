"""Database package."""

from portal.db.base import Base, get_db, get_session_factory, init_db
from portal.db.tables import Application, CandidateProfile, Job, User

__all__ = [
    "Base",
    "get_db",
    "get_session_factory",
    "init_db",
    "User",
    "CandidateProfile",
    "Job",
    "Application",
]
