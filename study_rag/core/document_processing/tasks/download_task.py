"""
Document download task.

Resolves a file reference through the storage collaborator and fetches
its bytes.

Dependencies: study_rag.boundary.storage (duck-typed)
System role: Source stage of document ingestion
"""

import logging

from study_rag.core.exceptions import FileNotFoundInStorageError

logger = logging.getLogger(__name__)


class DownloadTask:
    """Download a stored document through its presigned URL."""

    def __init__(self, storage) -> None:
        """
        Initialize download task.

        Args:
            storage: Object exposing async get_download_url(file_ref) and fetch(url)
        """
        self._storage = storage

    async def download(
        self,
        file_ref: str,
        document_id: str | None = None,
    ) -> tuple[bytes, str]:
        """
        Download a document.

        Args:
            file_ref: Storage key of the raw file
            document_id: Document being downloaded (error context only)

        Returns:
            tuple[bytes, str]: (raw bytes, declared content type)

        Raises:
            FileNotFoundInStorageError: Storage returned no URL for file_ref
            StorageError: Fetching the URL failed
        """
        url = await self._storage.get_download_url(file_ref)
        if not url:
            raise FileNotFoundInStorageError(file_ref, document_id)

        blob, content_type = await self._storage.fetch(url)
        logger.info(
            f"{__name__}:download - Downloaded document",
            extra={"document_id": document_id, "file_ref": file_ref, "bytes": len(blob)},
        )
        return blob, content_type
