"""
Processing status tracker.

Owns the per-document ingestion state machine:
pending -> processing -> completed (or failed with error message)

Every write upserts the processing_statuses row by document id, mirrors
the state onto the document, and commits.

Dependencies: sqlalchemy, study_rag.boundary.db
System role: Status persistence for the ingestion orchestrator
"""

import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.boundary.db.base import utc_now
from study_rag.boundary.db.CRUD.document_crud import document_crud
from study_rag.boundary.db.CRUD.processing_status_crud import processing_status_crud
from study_rag.boundary.db.models.document_model import DocumentStatus
from study_rag.boundary.db.models.processing_status_model import ProcessingStatusModel

logger = logging.getLogger(__name__)


class ProcessingStatusTracker:
    """Persist ingestion status transitions for documents."""

    def __init__(self, db_session: AsyncSession, max_error_length: int = 2000) -> None:
        """
        Initialize with database session.

        Args:
            db_session: AsyncSession used for every write
            max_error_length: Error messages are truncated to this length
        """
        self.db = db_session
        self._max_error_length = max_error_length

    async def upsert_status(self, document_id: uuid.UUID, **fields: Any) -> uuid.UUID:
        """
        Insert or patch the status record of a document and commit.

        Only the supplied fields change on an existing record. A new
        record starts with started_at=now and zero counters.

        Args:
            document_id: Document UUID
            **fields: ProcessingStatusModel columns to set

        Returns:
            uuid.UUID: Status record id
        """
        try:
            record = await processing_status_crud.upsert(self.db, document_id, **fields)
            if "status" in fields:
                await document_crud.update_status(
                    self.db,
                    document_id,
                    fields["status"],
                    fields.get("error_message"),
                )
            await self.db.commit()
            return record.id

        except Exception as e:
            logger.error(f"{__name__}:upsert_status - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise

    async def get_status(self, document_id: uuid.UUID) -> ProcessingStatusModel | None:
        """Current status record of a document, if any."""
        return await processing_status_crud.get_by_document_id(self.db, document_id)

    async def mark_processing(
        self,
        document_id: uuid.UUID,
        reset_started_at: bool = True,
    ) -> uuid.UUID:
        """
        Start a run: PROCESSING with zeroed counters.

        Args:
            document_id: Document UUID
            reset_started_at: Stamp a fresh started_at

        Returns:
            uuid.UUID: Status record id
        """
        fields: dict[str, Any] = {
            "status": DocumentStatus.PROCESSING,
            "chunks_processed": 0,
            "embeddings_generated": 0,
            "completed_at": None,
            "error_message": None,
        }
        if reset_started_at:
            fields["started_at"] = utc_now()

        status_id = await self.upsert_status(document_id, **fields)
        logger.info(
            f"{__name__}:mark_processing - Document marked as PROCESSING",
            extra={"document_id": str(document_id)},
        )
        return status_id

    async def mark_progress(self, document_id: uuid.UUID, processed: int) -> uuid.UUID:
        """
        Record progress counters for the current run.

        Args:
            document_id: Document UUID
            processed: Chunks embedded and persisted so far

        Returns:
            uuid.UUID: Status record id
        """
        status_id = await self.upsert_status(
            document_id,
            chunks_processed=processed,
            embeddings_generated=processed,
        )
        logger.info(
            f"{__name__}:mark_progress - Progress recorded",
            extra={"document_id": str(document_id), "processed": processed},
        )
        return status_id

    async def mark_completed(self, document_id: uuid.UUID, total_chunks: int) -> uuid.UUID:
        """
        Mark document as COMPLETED with counters equal to total_chunks.

        Args:
            document_id: Document UUID
            total_chunks: Chunk count of the run

        Returns:
            uuid.UUID: Status record id
        """
        status_id = await self.upsert_status(
            document_id,
            status=DocumentStatus.COMPLETED,
            completed_at=utc_now(),
            chunks_processed=total_chunks,
            embeddings_generated=total_chunks,
            error_message=None,
        )
        logger.info(
            f"{__name__}:mark_completed - Document marked as COMPLETED",
            extra={"document_id": str(document_id), "total_chunks": total_chunks},
        )
        return status_id

    async def mark_failed(
        self,
        document_id: uuid.UUID,
        error_message: str,
        processed: int | None = None,
    ) -> uuid.UUID:
        """
        Mark document as FAILED with error message.

        Args:
            document_id: Document UUID
            error_message: Error description (truncated to max_error_length)
            processed: Counters reached before the failure (unchanged if None)

        Returns:
            uuid.UUID: Status record id
        """
        truncated_error = error_message[: self._max_error_length]
        fields: dict[str, Any] = {
            "status": DocumentStatus.FAILED,
            "error_message": truncated_error,
        }
        if processed is not None:
            fields["chunks_processed"] = processed
            fields["embeddings_generated"] = processed

        status_id = await self.upsert_status(document_id, **fields)
        logger.info(
            f"{__name__}:mark_failed - Document marked as FAILED",
            extra={"document_id": str(document_id), "error": truncated_error[:100]},
        )
        return status_id
