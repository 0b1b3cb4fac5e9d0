"""
Chunk schemas.

Response schemas for inspecting and removing a document's embedded chunks.

Dependencies: pydantic
System role: Chunk API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ChunkSummary(BaseModel):
    """Summary of one persisted chunk."""

    chunk_index: int
    total_chunks: int
    text_preview: str = Field(description="First 100 characters of the chunk text")
    created_at: datetime


class ChunkListResponse(BaseModel):
    """Chunks of a document ordered by chunk_index."""

    document_id: uuid.UUID
    chunks: list[ChunkSummary]
    total: int


class DeleteChunksResponse(BaseModel):
    """Result of deleting a document's chunks."""

    document_id: uuid.UUID
    deleted: int
