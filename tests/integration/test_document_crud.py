"""
Integration tests for DocumentCRUD.

Covers context lookup, collection listing, status mirroring and
extracted-content persistence.
"""

import uuid

import pytest

from study_rag.boundary.db.CRUD.document_crud import DocumentContext, document_crud
from study_rag.boundary.db.models.document_model import DocumentStatus


async def _create(session, **overrides):
    fields = {
        "owner_id": "owner-a",
        "name": "notes.txt",
        "file_ref": f"documents/{uuid.uuid4()}/notes.txt",
    }
    fields.update(overrides)
    return await document_crud.create(session, **fields)


class TestGetContext:
    @pytest.mark.asyncio
    async def test_context_of_existing_document(self, test_async_db):
        collection_id = uuid.uuid4()
        document = await _create(
            test_async_db, collection_id=collection_id, extracted_content="Newton's laws"
        )

        context = await document_crud.get_context(test_async_db, document.id)

        assert context == DocumentContext(
            extracted_content="Newton's laws",
            collection_id=collection_id,
            owner_id="owner-a",
        )

    @pytest.mark.asyncio
    async def test_context_before_extraction(self, test_async_db):
        document = await _create(test_async_db)

        context = await document_crud.get_context(test_async_db, document.id)

        assert context.extracted_content is None
        assert context.collection_id is None

    @pytest.mark.asyncio
    async def test_context_of_missing_document(self, test_async_db):
        assert await document_crud.get_context(test_async_db, uuid.uuid4()) is None


class TestGetByCollection:
    @pytest.mark.asyncio
    async def test_filters_collection_and_owner(self, test_async_db):
        collection_id = uuid.uuid4()
        mine = await _create(test_async_db, collection_id=collection_id)
        theirs = await _create(test_async_db, collection_id=collection_id, owner_id="owner-b")
        await _create(test_async_db, collection_id=uuid.uuid4())

        everyone = await document_crud.get_by_collection_id(test_async_db, collection_id)
        owned = await document_crud.get_by_collection_id(
            test_async_db, collection_id, owner_id="owner-a"
        )

        assert {d.id for d in everyone} == {mine.id, theirs.id}
        assert [d.id for d in owned] == [mine.id]


class TestUpdateStatus:
    @pytest.mark.asyncio
    async def test_failed_keeps_error_message(self, test_async_db):
        document = await _create(test_async_db)

        updated = await document_crud.update_status(
            test_async_db, document.id, DocumentStatus.FAILED, "boom"
        )

        assert updated.status == DocumentStatus.FAILED
        assert updated.error_message == "boom"

    @pytest.mark.asyncio
    async def test_other_states_clear_error_message(self, test_async_db):
        document = await _create(test_async_db)
        await document_crud.update_status(
            test_async_db, document.id, DocumentStatus.FAILED, "boom"
        )

        updated = await document_crud.update_status(
            test_async_db, document.id, DocumentStatus.PROCESSING, "ignored"
        )

        assert updated.status == DocumentStatus.PROCESSING
        assert updated.error_message is None

    @pytest.mark.asyncio
    async def test_missing_document(self, test_async_db):
        result = await document_crud.update_status(
            test_async_db, uuid.uuid4(), DocumentStatus.COMPLETED
        )
        assert result is None


class TestSaveExtractedContent:
    @pytest.mark.asyncio
    async def test_overwrites_content(self, test_async_db):
        document = await _create(test_async_db, extracted_content="old")

        updated = await document_crud.save_extracted_content(
            test_async_db, document.id, "new text"
        )

        assert updated.extracted_content == "new text"
