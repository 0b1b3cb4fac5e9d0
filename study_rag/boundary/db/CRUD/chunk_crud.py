"""
Chunk CRUD operations.

Append-only chunk persistence plus the scoped reads used by retrieval
and collection statistics.

Dependencies: sqlalchemy, study_rag.boundary.db.models
System role: Chunk vector persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.boundary.db.CRUD.base_crud import BaseCRUD
from study_rag.boundary.db.models.chunk_model import ChunkModel


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChunkModel]:
        """
        Retrieve all chunks of a document ordered by chunk_index.

        Args:
            session: Async database session
            document_id: Document UUID

        Returns:
            Sequence of ChunkModels
        """
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == document_id)
            .order_by(ChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> int:
        """
        Delete every chunk of a document.

        Args:
            session: Async database session
            document_id: Document UUID

        Returns:
            Number of chunks deleted
        """
        stmt = delete(ChunkModel).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def get_scoped(
        self,
        session: AsyncSession,
        namespace: str,
        collection_id: UUID | None = None,
    ) -> Sequence[ChunkModel]:
        """
        Retrieve every chunk inside a retrieval scope.

        Args:
            session: Async database session
            namespace: Owner namespace (mandatory filter)
            collection_id: Further restrict to one collection when given

        Returns:
            Sequence of ChunkModels in the scope
        """
        stmt = select(ChunkModel).where(ChunkModel.namespace == namespace)
        if collection_id is not None:
            stmt = stmt.where(ChunkModel.collection_id == collection_id)
        stmt = stmt.order_by(ChunkModel.document_id, ChunkModel.chunk_index)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_document_ids(
        self,
        session: AsyncSession,
        document_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """
        Count chunks per document.

        Args:
            session: Async database session
            document_ids: Document UUIDs

        Returns:
            Mapping of document UUID to chunk count (documents without chunks omitted)
        """
        if not document_ids:
            return {}
        stmt = (
            select(ChunkModel.document_id, func.count(ChunkModel.id))
            .where(ChunkModel.document_id.in_(document_ids))
            .group_by(ChunkModel.document_id)
        )
        result = await session.execute(stmt)
        return {document_id: count for document_id, count in result.all()}


chunk_crud = ChunkCRUD()
