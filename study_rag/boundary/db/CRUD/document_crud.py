"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with the document-lookup accessor used to assemble embedding context.

Dependencies: sqlalchemy, pydantic, study_rag.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.boundary.db.CRUD.base_crud import BaseCRUD
from study_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus


class DocumentContext(BaseModel):
    """Fields needed to chunk and scope a document's embeddings."""

    extracted_content: str | None = Field(description="Cleaned text, None before extraction")
    collection_id: UUID | None = Field(default=None, description="Owning collection")
    owner_id: str = Field(description="Owning user identifier")


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with collection filtering, status mirroring and
    extracted-content persistence.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_context(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> DocumentContext | None:
        """
        Look up the embedding context of a document.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            DocumentContext if the document exists, None otherwise
        """
        document = await self.get_by_id(session, id)
        if document is None:
            return None
        return DocumentContext(
            extracted_content=document.extracted_content,
            collection_id=document.collection_id,
            owner_id=document.owner_id,
        )

    async def get_by_collection_id(
        self,
        session: AsyncSession,
        collection_id: UUID,
        owner_id: str | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve all documents of a collection, oldest first.

        Args:
            session: Async database session
            collection_id: Collection UUID
            owner_id: Restrict to documents of this owner when given

        Returns:
            Sequence of DocumentModels in the collection
        """
        stmt = select(DocumentModel).where(DocumentModel.collection_id == collection_id)
        if owner_id is not None:
            stmt = stmt.where(DocumentModel.owner_id == owner_id)
        stmt = stmt.order_by(DocumentModel.created_at)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: DocumentStatus,
        error_message: str | None = None,
    ) -> DocumentModel | None:
        """
        Update document processing status.

        error_message is cleared unless the new status is FAILED.

        Args:
            session: Async database session
            id: Document UUID
            status: New processing status
            error_message: Error details if status is FAILED

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        if status != DocumentStatus.FAILED:
            error_message = None
        return await self.update_by_id(
            session, id, status=status, error_message=error_message
        )

    async def save_extracted_content(
        self,
        session: AsyncSession,
        id: UUID,
        content: str,
    ) -> DocumentModel | None:
        """
        Persist cleaned text produced by extraction.

        Args:
            session: Async database session
            id: Document UUID
            content: Cleaned text

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_by_id(session, id, extracted_content=content)


document_crud = DocumentCRUD()
