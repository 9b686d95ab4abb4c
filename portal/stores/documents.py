"""
Document Store for resumes and profile images.

Two backends share one contract: a local directory served as static files,
and a remote object store spoken to over HTTP with httpx.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

import httpx

from portal.config import settings
from portal.errors import UploadError
from portal.models import ResumeFile
from portal.utils.uploads import RESUME_BUCKET, check_resume

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    async def upload_file(self, bucket: str, path: str, file: ResumeFile) -> str: ...

    async def delete_file(self, bucket: str, path: str) -> None: ...

    def public_url(self, bucket: str, path: str) -> str: ...


class LocalDocumentStore:
    """Stores objects under a directory; URLs point at the static mount."""

    def __init__(self, root: str | Path, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _target(self, bucket: str, path: str) -> Path:
        target = (self.root / bucket / path).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise UploadError(f"Invalid storage path: {path}")
        return target

    async def upload_file(self, bucket: str, path: str, file: ResumeFile) -> str:
        if bucket == RESUME_BUCKET:
            check_resume(file)

        target = self._target(bucket, path)
        if target.exists():
            raise UploadError("The resource already exists")

        def _write():
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(file.content)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            logger.error(f"Upload to {bucket}/{path} failed: {e}")
            raise UploadError(f"Failed to store file: {e.strerror or e}") from e

        logger.info(f"Stored {file.size} bytes at {bucket}/{path}")
        return self.public_url(bucket, path)

    async def delete_file(self, bucket: str, path: str) -> None:
        target = self._target(bucket, path)
        try:
            await asyncio.to_thread(target.unlink, True)
        except OSError as e:
            logger.error(f"Delete of {bucket}/{path} failed: {e}")
            raise UploadError(f"Failed to delete {bucket}/{path}: {e.strerror or e}") from e

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/{bucket}/{path}"


class HttpDocumentStore:
    """Object store reached through a storage REST API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Authorization": f"Bearer {self.api_key}", "apikey": self.api_key}
        return httpx.AsyncClient(
            base_url=self.api_url,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return f"Storage error: HTTP {response.status_code}"
        return data.get("message") or data.get("error") or f"Storage error: HTTP {response.status_code}"

    async def upload_file(self, bucket: str, path: str, file: ResumeFile) -> str:
        if bucket == RESUME_BUCKET:
            check_resume(file)

        try:
            async with self._client() as client:
                response = await client.post(
                    f"/storage/v1/object/{bucket}/{path}",
                    content=file.content,
                    headers={
                        "Content-Type": file.content_type,
                        "Cache-Control": "max-age=3600",
                        "x-upsert": "false",
                    },
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = self._error_message(e.response)
            logger.error(f"Upload to {bucket}/{path} rejected: {message}")
            raise UploadError(message) from e
        except httpx.HTTPError as e:
            logger.error(f"Upload to {bucket}/{path} failed: {e}")
            raise UploadError(f"Storage unavailable: {e}") from e

        logger.info(f"Uploaded {file.size} bytes to {bucket}/{path}")
        return self.public_url(bucket, path)

    async def delete_file(self, bucket: str, path: str) -> None:
        try:
            async with self._client() as client:
                response = await client.delete(f"/storage/v1/object/{bucket}/{path}")
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise UploadError(f"Failed to delete {bucket}/{path}: {e}") from e

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.api_url}/storage/v1/object/public/{bucket}/{path}"


def build_document_store() -> DocumentStore:
    """Remote store when STORAGE_API_URL is set, local directory otherwise."""
    if settings.storage_api_url:
        return HttpDocumentStore(
            settings.storage_api_url,
            settings.storage_api_key,
            timeout=settings.storage_timeout,
        )
    return LocalDocumentStore(settings.storage_dir, settings.storage_public_url)
