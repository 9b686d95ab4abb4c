"""Insert-only store for submitted applications."""

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from portal.db.tables import Application
from portal.errors import SnapshotInsertError
from portal.wizard.snapshot import SubmissionSnapshot

logger = logging.getLogger(__name__)


class ApplicationStore(Protocol):
    async def insert_application(self, snapshot: SubmissionSnapshot) -> str: ...


class SqlApplicationStore:
    """Writes each snapshot as a new applications row."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def insert_application(self, snapshot: SubmissionSnapshot) -> str:
        prefix = f"[{snapshot.candidate_id}/{snapshot.job_id}]"
        try:
            with self._session_factory() as db:
                application = Application(**snapshot.columns())
                db.add(application)
                db.commit()
                return application.id
        except IntegrityError as e:
            logger.warning(f"{prefix} Duplicate application rejected")
            raise SnapshotInsertError("You have already applied for this job.") from e
        except (SQLAlchemyError, OverflowError) as e:
            logger.error(f"{prefix} Application insert failed: {e}")
            raise SnapshotInsertError("Failed to submit application.") from e
