"""Profile Store: the candidate's reusable personal and academic details."""

import logging
from datetime import UTC, datetime
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from portal.db.tables import CandidateProfile
from portal.errors import ProfileWriteError
from portal.models import ProfileRecord

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = frozenset(ProfileRecord.model_fields) - {"user_id"}


class ProfileStore(Protocol):
    async def fetch_profile(self, candidate_id: str) -> ProfileRecord | None: ...

    async def update_profile(self, candidate_id: str, fields: dict[str, Any]) -> None: ...


class SqlProfileStore:
    """Profile Store backed by the candidate_profiles table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def fetch_profile(self, candidate_id: str) -> ProfileRecord | None:
        with self._session_factory() as db:
            profile = (
                db.query(CandidateProfile).filter(CandidateProfile.user_id == candidate_id).first()
            )
            return ProfileRecord.model_validate(profile) if profile else None

    async def update_profile(self, candidate_id: str, fields: dict[str, Any]) -> None:
        unknown = set(fields) - WRITABLE_FIELDS
        if unknown:
            raise ProfileWriteError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        try:
            with self._session_factory() as db:
                profile = (
                    db.query(CandidateProfile)
                    .filter(CandidateProfile.user_id == candidate_id)
                    .first()
                )
                if profile is None:
                    profile = CandidateProfile(user_id=candidate_id)
                    db.add(profile)
                for name, value in fields.items():
                    setattr(profile, name, value)
                profile.updated_at = datetime.now(UTC)
                db.commit()
        except (SQLAlchemyError, OverflowError) as e:
            logger.error(f"[{candidate_id}] Profile update failed: {e}")
            raise ProfileWriteError("Failed to update profile.") from e
