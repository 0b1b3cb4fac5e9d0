"""
Collection RAG schemas.

Response schemas for collection-level ingestion statistics and reprocessing.

Dependencies: pydantic
System role: Collection API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CollectionRagStats(BaseModel):
    """Ingestion statistics of one collection."""

    collection_id: uuid.UUID
    total_documents: int
    documents_with_embeddings: int
    total_chunks: int
    pending: int
    processing: int
    completed: int
    failed: int
    ready_for_rag: bool = Field(description="At least one chunk exists in the collection")


class DocumentProcessingRow(BaseModel):
    """Processing state of one document in a collection."""

    document_id: uuid.UUID
    name: str
    status: str
    chunks_processed: int = 0
    embeddings_generated: int = 0
    started_at: datetime | None = None
    completed_at: datetime | None = None
    error_message: str | None = None


class CollectionProcessingStatus(BaseModel):
    """Per-document processing state of a collection."""

    collection_id: uuid.UUID
    documents: list[DocumentProcessingRow]


class ReprocessResponse(BaseModel):
    """Result of queueing a collection for re-embedding."""

    collection_id: uuid.UUID
    queued: int
