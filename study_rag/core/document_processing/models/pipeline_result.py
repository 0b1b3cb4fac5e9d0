"""
Pipeline result model for document ingestion.

Represents the outcome of running a document through the pipeline.

Dependencies: pydantic
System role: Return type for IngestionPipeline.run()
"""

from pydantic import BaseModel, Field

from study_rag.boundary.db.models.document_model import DocumentStatus


class IngestionResult(BaseModel):
    """Result of document ingestion pipeline execution."""

    document_id: str = Field(description="Unique document identifier")
    status: DocumentStatus = Field(description="Terminal processing status")
    chunk_count: int = Field(default=0, description="Number of chunks embedded")
    text_length: int = Field(default=0, description="Length of the cleaned text")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
    error_message: str | None = Field(default=None, description="Failure reason, if any")
