"""Integration tests for ChunkCRUD and chunk table constraints."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from study_rag.boundary.db.CRUD.chunk_crud import chunk_crud


def _chunk_fields(document_id, chunk_index=0, total_chunks=1, **overrides):
    fields = {
        "document_id": document_id,
        "collection_id": None,
        "namespace": "user_owner-a",
        "owner_id": "owner-a",
        "chunk_index": chunk_index,
        "total_chunks": total_chunks,
        "text": f"chunk {chunk_index}",
        "embedding": [1.0, 0.0, 0.5],
        "embedding_model": "test-keyword-model",
    }
    fields.update(overrides)
    return fields


class TestChunkCRUD:
    @pytest.mark.asyncio
    async def test_get_by_document_id_is_ordered(self, test_async_db, make_document):
        document_id = await make_document()
        for index in (2, 0, 1):
            await chunk_crud.create(test_async_db, **_chunk_fields(document_id, index, 3))

        chunks = await chunk_crud.get_by_document_id(test_async_db, document_id)

        assert [c.chunk_index for c in chunks] == [0, 1, 2]
        assert chunks[0].embedding == [1.0, 0.0, 0.5]

    @pytest.mark.asyncio
    async def test_delete_by_document_id(self, test_async_db, make_document):
        document_id = await make_document()
        other_id = await make_document()
        for index in range(3):
            await chunk_crud.create(test_async_db, **_chunk_fields(document_id, index, 3))
        await chunk_crud.create(test_async_db, **_chunk_fields(other_id))

        deleted = await chunk_crud.delete_by_document_id(test_async_db, document_id)

        assert deleted == 3
        assert await chunk_crud.get_by_document_id(test_async_db, document_id) == []
        assert len(await chunk_crud.get_by_document_id(test_async_db, other_id)) == 1

    @pytest.mark.asyncio
    async def test_get_scoped_filters_namespace_and_collection(
        self, test_async_db, make_document
    ):
        collection_id = uuid.uuid4()
        in_collection = await make_document(collection_id=collection_id)
        loose = await make_document()
        other_owner = await make_document(owner_id="owner-b", collection_id=collection_id)
        await chunk_crud.create(
            test_async_db, **_chunk_fields(in_collection, collection_id=collection_id)
        )
        await chunk_crud.create(test_async_db, **_chunk_fields(loose))
        await chunk_crud.create(
            test_async_db,
            **_chunk_fields(
                other_owner,
                collection_id=collection_id,
                namespace="user_owner-b",
                owner_id="owner-b",
            ),
        )

        owner_scope = await chunk_crud.get_scoped(test_async_db, "user_owner-a")
        collection_scope = await chunk_crud.get_scoped(
            test_async_db, "user_owner-a", collection_id
        )

        assert {c.document_id for c in owner_scope} == {in_collection, loose}
        assert [c.document_id for c in collection_scope] == [in_collection]

    @pytest.mark.asyncio
    async def test_count_by_document_ids(self, test_async_db, make_document):
        first = await make_document()
        second = await make_document()
        empty = await make_document()
        for index in range(2):
            await chunk_crud.create(test_async_db, **_chunk_fields(first, index, 2))
        await chunk_crud.create(test_async_db, **_chunk_fields(second))

        counts = await chunk_crud.count_by_document_ids(test_async_db, [first, second, empty])

        assert counts == {first: 2, second: 1}
        assert await chunk_crud.count_by_document_ids(test_async_db, []) == {}


class TestChunkConstraints:
    @pytest.mark.asyncio
    async def test_duplicate_index_rejected(self, test_async_db, make_document):
        document_id = await make_document()
        await chunk_crud.create(test_async_db, **_chunk_fields(document_id, 0, 2))

        with pytest.raises(IntegrityError):
            await chunk_crud.create(test_async_db, **_chunk_fields(document_id, 0, 2))

    @pytest.mark.asyncio
    async def test_index_must_be_below_total(self, test_async_db, make_document):
        document_id = await make_document()

        with pytest.raises(IntegrityError):
            await chunk_crud.create(test_async_db, **_chunk_fields(document_id, 2, 2))
