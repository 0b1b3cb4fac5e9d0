"""
Document ingestion orchestrator.

Coordinates download, extraction, chunking, batched embedding and chunk
persistence, driving the processing status state machine throughout.

Stages can run inline (run) or separately (extract, then chunk_and_embed)
when a work queue hands a document from one stage to the next.

Dependencies: All task modules, status tracker, configs
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from study_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from study_rag.boundary.db.CRUD.document_crud import document_crud
from study_rag.boundary.db.models.document_model import DocumentStatus
from study_rag.core.exceptions import (
    ContentMissingError,
    DocumentNotFoundError,
    IngestionCancelledError,
    StudyRagException,
)
from study_rag.observability.log_utils import log_exception_with_context

from .configs import IngestionSettings, get_ingestion_settings
from .database.status_tracker import ProcessingStatusTracker
from .models import IngestionResult
from .tasks import (
    ChunkingTask,
    DownloadTask,
    EmbeddingTask,
    SavingTask,
    TextExtractor,
)

logger = logging.getLogger(__name__)


def _error_message(exc: BaseException) -> str:
    if isinstance(exc, StudyRagException):
        return exc.message
    return f"{type(exc).__name__}: {exc}"


class IngestionPipeline:
    """Orchestrate document ingestion: download -> extract -> chunk -> embed -> save."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        storage,
        embedding_client,
        settings: IngestionSettings | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            session_factory: Factory for the sessions each stage opens
            storage: File storage with get_download_url / fetch
            embedding_client: EmbeddingClient (async embed, model_id)
            settings: Pipeline settings (uses defaults if None)
        """
        self._settings = settings or get_ingestion_settings()
        self._session_factory = session_factory
        self._embedding_client = embedding_client

        self._download_task = DownloadTask(storage)
        self._extractor = TextExtractor(
            min_content_length=self._settings.min_content_length,
        )
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
        )
        self._embedding_task = EmbeddingTask(embedding_client)
        self._saving_task = SavingTask(namespace_prefix=self._settings.namespace_prefix)

    def _tracker(self, session: AsyncSession) -> ProcessingStatusTracker:
        return ProcessingStatusTracker(
            session, max_error_length=self._settings.max_error_length
        )

    async def _record_failure(
        self,
        tracker: ProcessingStatusTracker,
        document_id: uuid.UUID,
        exc: BaseException,
        processed: int | None = None,
    ) -> None:
        try:
            await tracker.mark_failed(document_id, _error_message(exc), processed)
        except Exception as status_exc:
            log_exception_with_context(
                logger,
                f"{__name__}:_record_failure - Could not persist FAILED status",
                status_exc,
                document_id=str(document_id),
                original_error=_error_message(exc),
            )

    async def _record_cancellation(
        self,
        session: AsyncSession,
        tracker: ProcessingStatusTracker,
        document_id: uuid.UUID,
        processed: int | None = None,
    ) -> None:
        await session.rollback()
        logger.warning(
            f"{__name__}:_record_cancellation - Run cancelled before finishing",
            extra={"document_id": str(document_id), "processed": processed},
        )
        await self._record_failure(
            tracker, document_id, IngestionCancelledError(str(document_id)), processed
        )

    async def abandon(self, document_id: uuid.UUID) -> None:
        """
        Mark a run that will not be continued as FAILED.

        Used for documents whose next stage was queued but never started.
        Chunks and extracted content are left as they are.

        Args:
            document_id: Document UUID
        """
        async with self._session_factory() as session:
            await self._record_cancellation(session, self._tracker(session), document_id)

    async def extract(self, document_id: uuid.UUID, file_ref: str) -> str:
        """
        Start a run and extract the document's text.

        Sets status PROCESSING with a fresh started_at and zeroed counters,
        downloads the file, extracts cleaned text and stores it on the
        document.

        Args:
            document_id: Document UUID
            file_ref: Storage key of the raw file

        Returns:
            str: Cleaned text

        Raises:
            DocumentNotFoundError: No such document (no status is written)
            FileNotFoundInStorageError: Storage has no URL for file_ref
            StorageError: Download failed
            NoReadableContentError: Too little readable text
        """
        async with self._session_factory() as session:
            tracker = self._tracker(session)
            document = await document_crud.get_by_id(session, document_id)
            if document is None:
                raise DocumentNotFoundError(str(document_id))
            filename = document.name

            await tracker.mark_processing(document_id)

            try:
                blob, content_type = await self._download_task.download(
                    file_ref, str(document_id)
                )
                text = self._extractor.extract(
                    blob, content_type, filename, document_id=str(document_id)
                )
                await document_crud.save_extracted_content(session, document_id, text)
                await session.commit()
            except asyncio.CancelledError:
                await self._record_cancellation(session, tracker, document_id)
                raise
            except Exception as e:
                await session.rollback()
                logger.error(
                    f"{__name__}:extract - Extraction failed",
                    extra={
                        "document_id": str(document_id),
                        "error_type": type(e).__name__,
                        "error_msg": _error_message(e),
                    },
                )
                await self._record_failure(tracker, document_id, e)
                raise

        logger.info(
            f"{__name__}:extract - Extraction complete",
            extra={"document_id": str(document_id), "text_length": len(text)},
        )
        return text

    async def chunk_and_embed(
        self,
        document_id: uuid.UUID,
        new_run: bool = False,
    ) -> int:
        """
        Chunk the stored text and embed it batch by batch.

        Existing chunks of the document are deleted first. Each batch is
        embedded concurrently, then persisted sequentially; progress is
        written at least every progress_interval chunks and the terminal
        status always carries the counters reached.

        Args:
            document_id: Document UUID
            new_run: Start a fresh run (reset status and started_at) because
                no extraction stage preceded this call

        Returns:
            int: Number of chunks embedded

        Raises:
            DocumentNotFoundError: No such document
            ContentMissingError: Document has no extracted content
            EmbeddingBatchFailedError: A batch failed (status is FAILED)
        """
        batch_size = self._settings.batch_size
        interval = self._settings.progress_interval
        processed = 0

        async with self._session_factory() as session:
            tracker = self._tracker(session)
            context = await document_crud.get_context(session, document_id)
            if context is None:
                raise DocumentNotFoundError(str(document_id))
            if not context.extracted_content:
                raise ContentMissingError(str(document_id))

            if new_run:
                await tracker.mark_processing(document_id)

            try:
                deleted = await chunk_crud.delete_by_document_id(session, document_id)
                await session.commit()
                if deleted:
                    logger.info(
                        f"{__name__}:chunk_and_embed - Removed chunks of previous run",
                        extra={"document_id": str(document_id), "deleted": deleted},
                    )

                candidates = self._chunking_task.chunk(context.extracted_content)
                total = len(candidates)
                last_written = 0

                for batch_index, start in enumerate(range(0, total, batch_size)):
                    batch = candidates[start : start + batch_size]
                    vectors = await self._embedding_task.embed_batch(
                        batch, batch_index, str(document_id)
                    )
                    await self._saving_task.save(
                        session,
                        document_id=document_id,
                        context=context,
                        batch=batch,
                        vectors=vectors,
                        total_chunks=total,
                        embedding_model=self._embedding_client.model_id,
                    )
                    processed += len(batch)

                    if processed < total and processed - last_written >= interval:
                        await tracker.mark_progress(document_id, processed)
                        last_written = processed
                    else:
                        await session.commit()

                    logger.debug(
                        f"{__name__}:chunk_and_embed - Batch persisted",
                        extra={
                            "document_id": str(document_id),
                            "batch_index": batch_index,
                            "processed": processed,
                            "total": total,
                        },
                    )

                await tracker.mark_completed(document_id, total)

            except asyncio.CancelledError:
                await self._record_cancellation(session, tracker, document_id, processed)
                raise
            except Exception as e:
                await session.rollback()
                logger.error(
                    f"{__name__}:chunk_and_embed - Embedding stage failed",
                    extra={
                        "document_id": str(document_id),
                        "processed": processed,
                        "error_type": type(e).__name__,
                        "error_msg": _error_message(e),
                    },
                )
                await self._record_failure(tracker, document_id, e, processed)
                raise

        logger.info(
            f"{__name__}:chunk_and_embed - Document embedded",
            extra={"document_id": str(document_id), "total_chunks": total},
        )
        return total

    async def run(self, document_id: uuid.UUID, file_ref: str) -> IngestionResult:
        """
        Run both stages inline.

        Stage failures are already persisted as FAILED; they are reported
        in the result rather than raised.

        Args:
            document_id: Document UUID
            file_ref: Storage key of the raw file

        Returns:
            IngestionResult: Terminal status and counts

        Raises:
            DocumentNotFoundError: No such document
        """
        start_time = time.perf_counter()
        text_length = 0
        try:
            text = await self.extract(document_id, file_ref)
            text_length = len(text)
            chunk_count = await self.chunk_and_embed(document_id)
        except DocumentNotFoundError:
            raise
        except Exception as e:
            return IngestionResult(
                document_id=str(document_id),
                status=DocumentStatus.FAILED,
                text_length=text_length,
                processing_time_ms=(time.perf_counter() - start_time) * 1000,
                error_message=_error_message(e),
            )

        return IngestionResult(
            document_id=str(document_id),
            status=DocumentStatus.COMPLETED,
            chunk_count=chunk_count,
            text_length=text_length,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
