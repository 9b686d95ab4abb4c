"""
External collaborators of the application wizard.

- profiles: candidate profile read/update
- documents: resume and image storage
- catalog: job lookups and duplicate-application checks
- applications: insert-only submitted applications
"""

from dataclasses import dataclass

from sqlalchemy.orm import sessionmaker

from portal.stores.applications import ApplicationStore, SqlApplicationStore
from portal.stores.catalog import JobCatalog, SqlJobCatalog
from portal.stores.documents import (
    DocumentStore,
    HttpDocumentStore,
    LocalDocumentStore,
    build_document_store,
)
from portal.stores.profiles import ProfileStore, SqlProfileStore


@dataclass
class Collaborators:
    profiles: ProfileStore
    documents: DocumentStore
    catalog: JobCatalog
    applications: ApplicationStore


def build_collaborators(
    session_factory: sessionmaker,
    documents: DocumentStore | None = None,
) -> Collaborators:
    """Wire the SQL-backed stores to one session factory."""
    return Collaborators(
        profiles=SqlProfileStore(session_factory),
        documents=documents or build_document_store(),
        catalog=SqlJobCatalog(session_factory),
        applications=SqlApplicationStore(session_factory),
    )


__all__ = [
    "Collaborators",
    "build_collaborators",
    "ProfileStore",
    "SqlProfileStore",
    "DocumentStore",
    "LocalDocumentStore",
    "HttpDocumentStore",
    "build_document_store",
    "JobCatalog",
    "SqlJobCatalog",
    "ApplicationStore",
    "SqlApplicationStore",
]
