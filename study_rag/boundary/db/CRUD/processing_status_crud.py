"""
Processing status CRUD operations.

Upsert-by-document persistence for the ingestion state machine.

Dependencies: sqlalchemy, study_rag.boundary.db.models
System role: Status tracker persistence
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.boundary.db.base import utc_now
from study_rag.boundary.db.CRUD.base_crud import BaseCRUD
from study_rag.boundary.db.models.processing_status_model import ProcessingStatusModel


class ProcessingStatusCRUD(BaseCRUD[ProcessingStatusModel]):
    """CRUD operations for ProcessingStatusModel keyed by document."""

    def __init__(self) -> None:
        """Initialize ProcessingStatusCRUD with ProcessingStatusModel."""
        super().__init__(ProcessingStatusModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> ProcessingStatusModel | None:
        """
        Retrieve the status record of a document.

        Args:
            session: Async database session
            document_id: Document UUID

        Returns:
            ProcessingStatusModel if one exists, None otherwise
        """
        stmt = select(ProcessingStatusModel).where(
            ProcessingStatusModel.document_id == document_id
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_document_ids(
        self,
        session: AsyncSession,
        document_ids: Sequence[UUID],
    ) -> dict[UUID, ProcessingStatusModel]:
        """
        Retrieve status records for several documents.

        Args:
            session: Async database session
            document_ids: Document UUIDs

        Returns:
            Mapping of document UUID to its status record (missing ids omitted)
        """
        if not document_ids:
            return {}
        stmt = select(ProcessingStatusModel).where(
            ProcessingStatusModel.document_id.in_(document_ids)
        )
        result = await session.execute(stmt)
        return {row.document_id: row for row in result.scalars().all()}

    async def upsert(
        self,
        session: AsyncSession,
        document_id: UUID,
        **fields: Any,
    ) -> ProcessingStatusModel:
        """
        Insert or partially update the status record of a document.

        A new record defaults started_at to now and counters to 0. An
        existing record only has the supplied fields patched.

        Args:
            session: Async database session
            document_id: Document UUID (natural key)
            **fields: Status columns to set

        Returns:
            The inserted or updated ProcessingStatusModel
        """
        existing = await self.get_by_document_id(session, document_id)
        if existing is None:
            values = {
                "started_at": utc_now(),
                "chunks_processed": 0,
                "embeddings_generated": 0,
            }
            values.update(fields)
            return await self.create(session, document_id=document_id, **values)

        for field, value in fields.items():
            setattr(existing, field, value)
        await session.flush()
        return existing


processing_status_crud = ProcessingStatusCRUD()
