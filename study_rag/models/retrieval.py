"""
Retrieval schemas.

Request/response schemas for scoped similarity search.

Dependencies: pydantic
System role: Retrieval API contracts
"""

import uuid

from pydantic import BaseModel, Field


class RetrievalRequest(BaseModel):
    """Request schema for a scoped similarity search."""

    owner_id: str = Field(min_length=1, description="Owner whose chunks are searched")
    collection_id: uuid.UUID | None = Field(
        default=None,
        description="Restrict the search to one collection",
    )
    query: str = Field(min_length=1, description="Query text")
    limit: int = Field(default=5, ge=1, le=50, description="Maximum number of results")
    similarity_threshold: float | None = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity to keep a result",
    )


class RetrievalResultItem(BaseModel):
    """Single retrieval result."""

    text: str
    chunk_index: int
    score: float
    document_id: uuid.UUID


class RetrievalResponse(BaseModel):
    """Results ordered by descending score."""

    results: list[RetrievalResultItem]
    count: int


class ContextResponse(BaseModel):
    """Retrieved chunk texts joined for a downstream prompt."""

    context: str
    chunk_count: int
