"""
Tests for IngestionService.

Uses the in-memory database with a mocked worker pool so queueing
decisions can be asserted without running the pipeline.
"""

import uuid
from unittest.mock import MagicMock

import pytest

from study_rag.application.services.ingestion_service import (
    CONTEXT_SEPARATOR,
    IngestionService,
)
from study_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from study_rag.boundary.db.CRUD.processing_status_crud import processing_status_crud
from study_rag.boundary.db.models.document_model import DocumentStatus
from study_rag.boundary.vdb import RetrievalScope
from study_rag.core.document_processing import IngestionSettings
from study_rag.core.exceptions import DocumentNotFoundError, IngestionInProgressError


@pytest.fixture
def worker_pool():
    pool = MagicMock()
    pool.is_active.return_value = False
    pool.submit_ingestion.return_value = True
    pool.submit_embedding.return_value = True
    return pool


@pytest.fixture
def service(test_async_db, worker_pool, embedding_client):
    return IngestionService(
        db=test_async_db,
        worker_pool=worker_pool,
        embedding_client=embedding_client,
        settings=IngestionSettings(),
    )


async def _add_chunks(session, document_id, texts, embeddings, owner_id="owner-a", collection_id=None):
    for index, text in enumerate(texts):
        await chunk_crud.create(
            session,
            document_id=document_id,
            collection_id=collection_id,
            namespace=f"user_{owner_id}",
            owner_id=owner_id,
            chunk_index=index,
            total_chunks=len(texts),
            text=text,
            embedding=embeddings.embed_query(text),
            embedding_model="test-keyword-model",
        )
    await session.commit()


class TestStartIngestion:
    @pytest.mark.asyncio
    async def test_queues_with_stored_file_ref(self, service, worker_pool, make_document):
        document_id = await make_document(file_ref="documents/bio.txt")

        await service.start_ingestion(document_id)

        worker_pool.submit_ingestion.assert_called_once_with(document_id, "documents/bio.txt")

    @pytest.mark.asyncio
    async def test_file_ref_override(self, service, worker_pool, make_document):
        document_id = await make_document(file_ref="documents/bio.txt")

        await service.start_ingestion(document_id, "documents/bio-v2.txt")

        worker_pool.submit_ingestion.assert_called_once_with(document_id, "documents/bio-v2.txt")

    @pytest.mark.asyncio
    async def test_unknown_document(self, service, worker_pool):
        with pytest.raises(DocumentNotFoundError):
            await service.start_ingestion(uuid.uuid4())
        worker_pool.submit_ingestion.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_when_status_processing(
        self, service, worker_pool, test_async_db, make_document
    ):
        document_id = await make_document()
        await processing_status_crud.upsert(
            test_async_db, document_id, status=DocumentStatus.PROCESSING
        )

        with pytest.raises(IngestionInProgressError):
            await service.start_ingestion(document_id)
        worker_pool.submit_ingestion.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_when_pool_has_job(self, service, worker_pool, make_document):
        document_id = await make_document()
        worker_pool.is_active.return_value = True

        with pytest.raises(IngestionInProgressError):
            await service.start_ingestion(document_id)

    @pytest.mark.asyncio
    async def test_rejects_when_submit_declined(self, service, worker_pool, make_document):
        document_id = await make_document()
        worker_pool.submit_ingestion.return_value = False

        with pytest.raises(IngestionInProgressError):
            await service.start_ingestion(document_id)

    @pytest.mark.asyncio
    async def test_retry_allowed_after_failure(
        self, service, worker_pool, test_async_db, make_document
    ):
        document_id = await make_document()
        await processing_status_crud.upsert(
            test_async_db, document_id, status=DocumentStatus.FAILED, error_message="boom"
        )

        await service.start_ingestion(document_id)

        worker_pool.submit_ingestion.assert_called_once()


class TestRetrieval:
    @pytest.mark.asyncio
    async def test_build_context_joins_results(
        self, service, test_async_db, make_document, keyword_embeddings
    ):
        document_id = await make_document()
        await _add_chunks(
            test_async_db,
            document_id,
            ["photosynthesis in leaves", "gravity pulls", "photosynthesis photosynthesis"],
            keyword_embeddings,
        )

        context = await service.build_context(
            RetrievalScope(owner_id="owner-a"), "photosynthesis", limit=2
        )

        assert context.chunk_count == 2
        assert context.context == CONTEXT_SEPARATOR.join(
            ["photosynthesis in leaves", "photosynthesis photosynthesis"]
        )

    @pytest.mark.asyncio
    async def test_retrieve_other_owner_sees_nothing(
        self, service, test_async_db, make_document, keyword_embeddings
    ):
        document_id = await make_document()
        await _add_chunks(test_async_db, document_id, ["photosynthesis"], keyword_embeddings)

        results = await service.retrieve(RetrievalScope(owner_id="owner-b"), "photosynthesis")

        assert results == []


class TestChunkMaintenance:
    @pytest.mark.asyncio
    async def test_get_document_chunks_previews(
        self, service, test_async_db, make_document, keyword_embeddings
    ):
        document_id = await make_document()
        await _add_chunks(test_async_db, document_id, ["a" * 250, "short"], keyword_embeddings)

        chunks = await service.get_document_chunks(document_id)

        assert [c.chunk_index for c in chunks] == [0, 1]
        assert chunks[0].text_preview == "a" * 100
        assert chunks[1].text_preview == "short"
        assert all(c.total_chunks == 2 for c in chunks)

    @pytest.mark.asyncio
    async def test_get_document_chunks_unknown(self, service):
        with pytest.raises(DocumentNotFoundError):
            await service.get_document_chunks(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_delete_document_chunks(
        self, service, test_async_db, make_document, keyword_embeddings
    ):
        document_id = await make_document()
        await _add_chunks(test_async_db, document_id, ["one", "two"], keyword_embeddings)

        assert await service.delete_document_chunks(document_id) == 2
        assert await chunk_crud.get_by_document_id(test_async_db, document_id) == []

    @pytest.mark.asyncio
    async def test_delete_refused_while_processing(
        self, service, test_async_db, make_document
    ):
        document_id = await make_document()
        await processing_status_crud.upsert(
            test_async_db, document_id, status=DocumentStatus.PROCESSING
        )

        with pytest.raises(IngestionInProgressError):
            await service.delete_document_chunks(document_id)


class TestCollections:
    @pytest.mark.asyncio
    async def test_collection_stats(
        self, service, test_async_db, make_document, keyword_embeddings
    ):
        collection_id = uuid.uuid4()
        completed = await make_document(collection_id=collection_id)
        failed = await make_document(collection_id=collection_id)
        await make_document(collection_id=collection_id)
        await make_document(collection_id=collection_id, owner_id="owner-b")
        await processing_status_crud.upsert(
            test_async_db, completed, status=DocumentStatus.COMPLETED
        )
        await processing_status_crud.upsert(
            test_async_db, failed, status=DocumentStatus.FAILED, error_message="boom"
        )
        await _add_chunks(
            test_async_db, completed, ["photosynthesis", "mitosis", "enzyme"],
            keyword_embeddings, collection_id=collection_id,
        )

        stats = await service.get_collection_stats("owner-a", collection_id)

        assert stats.total_documents == 3
        assert stats.completed == 1
        assert stats.failed == 1
        assert stats.pending == 1
        assert stats.processing == 0
        assert stats.total_chunks == 3
        assert stats.documents_with_embeddings == 1
        assert stats.ready_for_rag is True

    @pytest.mark.asyncio
    async def test_empty_collection_stats(self, service):
        stats = await service.get_collection_stats("owner-a", uuid.uuid4())

        assert stats.total_documents == 0
        assert stats.ready_for_rag is False

    @pytest.mark.asyncio
    async def test_partial_chunks_of_failed_run_make_collection_ready(
        self, service, test_async_db, make_document, keyword_embeddings
    ):
        collection_id = uuid.uuid4()
        failed = await make_document(collection_id=collection_id)
        await processing_status_crud.upsert(
            test_async_db, failed, status=DocumentStatus.FAILED, error_message="quota"
        )
        await _add_chunks(
            test_async_db, failed, ["photosynthesis", "mitosis"],
            keyword_embeddings, collection_id=collection_id,
        )

        stats = await service.get_collection_stats("owner-a", collection_id)

        assert stats.completed == 0
        assert stats.documents_with_embeddings == 1
        assert stats.ready_for_rag is True

    @pytest.mark.asyncio
    async def test_completed_without_chunks_is_not_ready(
        self, service, test_async_db, make_document
    ):
        collection_id = uuid.uuid4()
        document_id = await make_document(collection_id=collection_id)
        await processing_status_crud.upsert(
            test_async_db, document_id, status=DocumentStatus.COMPLETED
        )
        await test_async_db.commit()

        stats = await service.get_collection_stats("owner-a", collection_id)

        assert stats.completed == 1
        assert stats.ready_for_rag is False

    @pytest.mark.asyncio
    async def test_processing_status_rows(self, service, test_async_db, make_document):
        collection_id = uuid.uuid4()
        started = await make_document(collection_id=collection_id, name="a.txt")
        never = await make_document(collection_id=collection_id, name="b.txt")
        await processing_status_crud.upsert(
            test_async_db,
            started,
            status=DocumentStatus.PROCESSING,
            chunks_processed=10,
            embeddings_generated=10,
        )

        result = await service.get_collection_processing_status(collection_id)

        rows = {row.document_id: row for row in result.documents}
        assert rows[started].status == "processing"
        assert rows[started].chunks_processed == 10
        assert rows[started].started_at is not None
        assert rows[never].status == "pending"
        assert rows[never].chunks_processed == 0
        assert rows[never].started_at is None

    @pytest.mark.asyncio
    async def test_reprocess_collection(
        self, service, worker_pool, test_async_db, make_document, keyword_embeddings
    ):
        collection_id = uuid.uuid4()
        ready = await make_document(collection_id=collection_id, extracted_content="Cell biology notes")
        running = await make_document(collection_id=collection_id, extracted_content="Enzyme notes here")
        await make_document(collection_id=collection_id)
        await _add_chunks(test_async_db, ready, ["old chunk"], keyword_embeddings)
        await processing_status_crud.upsert(
            test_async_db, running, status=DocumentStatus.PROCESSING
        )
        await test_async_db.commit()

        queued = await service.reprocess_collection("owner-a", collection_id)

        assert queued == 1
        worker_pool.submit_embedding.assert_called_once_with(ready, new_run=True)
        # the queued run replaces the chunks itself
        assert len(await chunk_crud.get_by_document_id(test_async_db, ready)) == 1

    @pytest.mark.asyncio
    async def test_reprocess_skips_document_claimed_by_pool(
        self, service, worker_pool, test_async_db, make_document, keyword_embeddings
    ):
        collection_id = uuid.uuid4()
        claimed = await make_document(collection_id=collection_id, extracted_content="Cell biology notes")
        await _add_chunks(test_async_db, claimed, ["old chunk"], keyword_embeddings)
        worker_pool.submit_embedding.return_value = False

        queued = await service.reprocess_collection("owner-a", collection_id)

        assert queued == 0
        worker_pool.submit_embedding.assert_called_once_with(claimed, new_run=True)
        assert len(await chunk_crud.get_by_document_id(test_async_db, claimed)) == 1
