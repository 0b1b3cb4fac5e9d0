"""
Vector search schemas.

Pydantic models for scoped similarity search (scope, results).

Dependencies: pydantic
System role: Type definitions for vector operations
"""

import uuid

from pydantic import BaseModel, Field


class RetrievalScope(BaseModel):
    """
    Owner/collection partition a query is confined to.

    The owner is always enforced; the collection narrows it further.
    """

    owner_id: str = Field(min_length=1, description="Owning user identifier")
    collection_id: uuid.UUID | None = Field(
        default=None,
        description="Restrict to one collection when set",
    )

    def namespace(self, prefix: str = "user_") -> str:
        """Namespace string chunks of this owner are stored under."""
        return f"{prefix}{self.owner_id}"


class RetrievedChunk(BaseModel):
    """Single result from a scoped similarity search."""

    text: str = Field(description="Chunk text content")
    chunk_index: int = Field(description="0-based position within its document")
    score: float = Field(description="Cosine similarity to the query (-1.0 to 1.0)")
    document_id: uuid.UUID = Field(description="Source document")
    total_chunks: int = Field(description="Chunk count of the source document run")
