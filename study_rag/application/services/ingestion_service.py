"""
Ingestion service.

Facade used by the HTTP layer: triggers background ingestion, reports
status, runs scoped retrieval and collection-level maintenance.

Dependencies: study_rag.boundary.db, study_rag.core, study_rag.workers
System role: Ingestion and retrieval orchestration for the API
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from study_rag.boundary.db.CRUD.document_crud import document_crud
from study_rag.boundary.db.CRUD.processing_status_crud import processing_status_crud
from study_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus
from study_rag.boundary.db.models.processing_status_model import ProcessingStatusModel
from study_rag.boundary.vdb import ChunkVectorStore, RetrievalScope, RetrievedChunk
from study_rag.core.document_processing.configs import (
    IngestionSettings,
    get_ingestion_settings,
)
from study_rag.core.exceptions import DocumentNotFoundError, IngestionInProgressError
from study_rag.core.retriever import Retriever
from study_rag.models.chunk import ChunkSummary
from study_rag.models.collection import (
    CollectionProcessingStatus,
    CollectionRagStats,
    DocumentProcessingRow,
)
from study_rag.models.retrieval import ContextResponse

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"
PREVIEW_LENGTH = 100


class IngestionService:
    """
    Ingestion and retrieval service.

    Writes during a run belong to the pipeline; this service only reads
    status, queues work and removes chunks on request.
    """

    def __init__(
        self,
        db: AsyncSession,
        worker_pool,
        embedding_client,
        settings: IngestionSettings | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            db: AsyncSession for request-scoped reads and chunk deletion
            worker_pool: IngestionWorkerPool that runs the pipeline
            embedding_client: EmbeddingClient used for query embeddings
            settings: Pipeline settings (uses defaults if None)
        """
        self.db = db
        self._worker_pool = worker_pool
        self._embedding_client = embedding_client
        self._settings = settings or get_ingestion_settings()

    async def _get_document(self, document_id: UUID) -> DocumentModel:
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return document

    def _is_running(self, document_id: UUID, status: ProcessingStatusModel | None) -> bool:
        if self._worker_pool.is_active(document_id):
            return True
        return status is not None and status.status == DocumentStatus.PROCESSING

    async def start_ingestion(self, document_id: UUID, file_ref: str | None = None) -> None:
        """
        Queue a document for extraction and embedding (fire-and-forget).

        Args:
            document_id: Document UUID
            file_ref: Storage key override (the document's file_ref if None)

        Raises:
            DocumentNotFoundError: No such document
            IngestionInProgressError: The document is already processing
        """
        document = await self._get_document(document_id)
        status = await processing_status_crud.get_by_document_id(self.db, document_id)
        if self._is_running(document_id, status):
            raise IngestionInProgressError(str(document_id))

        if not self._worker_pool.submit_ingestion(document_id, file_ref or document.file_ref):
            raise IngestionInProgressError(str(document_id))

        logger.info(
            f"{__name__}:start_ingestion - Ingestion queued",
            extra={"document_id": str(document_id)},
        )

    async def get_status(self, document_id: UUID) -> ProcessingStatusModel | None:
        """
        Get the processing status of a document.

        Args:
            document_id: Document UUID

        Returns:
            ProcessingStatusModel if ingestion was ever started, None otherwise
        """
        return await processing_status_crud.get_by_document_id(self.db, document_id)

    async def retrieve(
        self,
        scope: RetrievalScope,
        query: str,
        limit: int = 5,
        similarity_threshold: float | None = None,
    ) -> list[RetrievedChunk]:
        """
        Scoped similarity search.

        Raises:
            RetrievalFailedError: Query embedding or vector search failed
        """
        retriever = Retriever(
            ChunkVectorStore(self.db, namespace_prefix=self._settings.namespace_prefix),
            self._embedding_client,
        )
        return await retriever.retrieve(
            scope, query, limit=limit, similarity_threshold=similarity_threshold
        )

    async def build_context(
        self,
        scope: RetrievalScope,
        query: str,
        limit: int = 5,
        similarity_threshold: float | None = None,
    ) -> ContextResponse:
        """
        Join retrieved chunk texts into a single context block.

        Args:
            scope: Owner/collection filter
            query: Query text
            limit: Maximum chunks to include
            similarity_threshold: Minimum score to include a chunk

        Returns:
            ContextResponse: Texts joined with a horizontal-rule separator
        """
        results = await self.retrieve(scope, query, limit, similarity_threshold)
        return ContextResponse(
            context=CONTEXT_SEPARATOR.join(r.text for r in results),
            chunk_count=len(results),
        )

    async def get_document_chunks(self, document_id: UUID) -> list[ChunkSummary]:
        """
        List a document's chunks ordered by chunk_index.

        Raises:
            DocumentNotFoundError: No such document
        """
        await self._get_document(document_id)
        chunks = await chunk_crud.get_by_document_id(self.db, document_id)
        return [
            ChunkSummary(
                chunk_index=chunk.chunk_index,
                total_chunks=chunk.total_chunks,
                text_preview=chunk.text[:PREVIEW_LENGTH],
                created_at=chunk.created_at,
            )
            for chunk in chunks
        ]

    async def delete_document_chunks(self, document_id: UUID) -> int:
        """
        Delete every chunk of a document.

        Args:
            document_id: Document UUID

        Returns:
            int: Number of chunks deleted

        Raises:
            DocumentNotFoundError: No such document
            IngestionInProgressError: The document is being processed
        """
        await self._get_document(document_id)
        status = await processing_status_crud.get_by_document_id(self.db, document_id)
        if self._is_running(document_id, status):
            raise IngestionInProgressError(str(document_id))

        try:
            deleted = await chunk_crud.delete_by_document_id(self.db, document_id)
            await self.db.commit()
        except Exception as e:
            logger.error(f"{__name__}:delete_document_chunks - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise

        logger.info(
            f"{__name__}:delete_document_chunks - Chunks deleted",
            extra={"document_id": str(document_id), "deleted": deleted},
        )
        return deleted

    async def get_collection_stats(
        self,
        owner_id: str,
        collection_id: UUID,
    ) -> CollectionRagStats:
        """
        Summarize ingestion state of an owner's documents in a collection.

        Documents without a status record count as pending.

        Args:
            owner_id: Owner identifier
            collection_id: Collection UUID

        Returns:
            CollectionRagStats: Counts per state and chunk totals
        """
        documents = await document_crud.get_by_collection_id(
            self.db, collection_id, owner_id=owner_id
        )
        document_ids = [d.id for d in documents]
        statuses = await processing_status_crud.get_by_document_ids(self.db, document_ids)
        chunk_counts = await chunk_crud.count_by_document_ids(self.db, document_ids)

        with_embeddings = sum(1 for c in chunk_counts.values() if c > 0)
        counts = {state: 0 for state in DocumentStatus}
        for document_id in document_ids:
            status = statuses.get(document_id)
            counts[status.status if status else DocumentStatus.PENDING] += 1

        return CollectionRagStats(
            collection_id=collection_id,
            total_documents=len(documents),
            documents_with_embeddings=with_embeddings,
            total_chunks=sum(chunk_counts.values()),
            pending=counts[DocumentStatus.PENDING],
            processing=counts[DocumentStatus.PROCESSING],
            completed=counts[DocumentStatus.COMPLETED],
            failed=counts[DocumentStatus.FAILED],
            ready_for_rag=with_embeddings > 0,
        )

    async def get_collection_processing_status(
        self,
        collection_id: UUID,
    ) -> CollectionProcessingStatus:
        """
        Per-document processing state of a collection.

        Args:
            collection_id: Collection UUID

        Returns:
            CollectionProcessingStatus: One row per document, pending/0 when never started
        """
        documents = await document_crud.get_by_collection_id(self.db, collection_id)
        statuses = await processing_status_crud.get_by_document_ids(
            self.db, [d.id for d in documents]
        )

        rows = []
        for document in documents:
            status = statuses.get(document.id)
            if status is None:
                rows.append(
                    DocumentProcessingRow(
                        document_id=document.id,
                        name=document.name,
                        status=DocumentStatus.PENDING.value,
                    )
                )
                continue
            rows.append(
                DocumentProcessingRow(
                    document_id=document.id,
                    name=document.name,
                    status=status.status.value,
                    chunks_processed=status.chunks_processed,
                    embeddings_generated=status.embeddings_generated,
                    started_at=status.started_at,
                    completed_at=status.completed_at,
                    error_message=status.error_message,
                )
            )
        return CollectionProcessingStatus(collection_id=collection_id, documents=rows)

    async def reprocess_collection(self, owner_id: str, collection_id: UUID) -> int:
        """
        Re-embed every extracted document of a collection.

        Documents without extracted content or already processing are
        skipped. A queued run deletes the document's existing chunks
        before embedding, so chunks are only removed for documents that
        were actually queued.

        Args:
            owner_id: Owner identifier
            collection_id: Collection UUID

        Returns:
            int: Number of documents queued
        """
        documents = await document_crud.get_by_collection_id(
            self.db, collection_id, owner_id=owner_id
        )
        statuses = await processing_status_crud.get_by_document_ids(
            self.db, [d.id for d in documents]
        )

        queued = 0
        skipped = 0
        for document in documents:
            if not document.extracted_content:
                continue
            if self._is_running(document.id, statuses.get(document.id)) or not (
                self._worker_pool.submit_embedding(document.id, new_run=True)
            ):
                skipped += 1
                logger.info(
                    f"{__name__}:reprocess_collection - Document already processing, skipped",
                    extra={"document_id": str(document.id)},
                )
                continue
            queued += 1

        logger.info(
            f"{__name__}:reprocess_collection - Collection queued for reprocessing",
            extra={
                "collection_id": str(collection_id),
                "documents": len(documents),
                "queued": queued,
                "skipped": skipped,
            },
        )
        return queued
