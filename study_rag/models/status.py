"""
Ingestion status schemas.

Request/response schemas for triggering ingestion and polling progress.

Dependencies: pydantic
System role: Ingestion API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StartIngestionRequest(BaseModel):
    """Request schema for starting ingestion of a document."""

    file_ref: str | None = Field(
        default=None,
        description="Storage key of the raw file (defaults to the document's stored file_ref)",
    )


class IngestionAcceptedResponse(BaseModel):
    """Response schema for an accepted ingestion request."""

    document_id: uuid.UUID
    status: str = Field(default="queued", description="Queue state of the request")


class ProcessingStatusResponse(BaseModel):
    """Response schema for a document's processing status."""

    model_config = ConfigDict(from_attributes=True)

    document_id: uuid.UUID
    status: str
    started_at: datetime
    completed_at: datetime | None = None
    chunks_processed: int
    embeddings_generated: int
    error_message: str | None = None
