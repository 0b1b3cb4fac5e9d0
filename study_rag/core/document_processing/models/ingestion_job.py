"""
Ingestion job model.

Unit of work consumed by the ingestion worker pool.

Dependencies: pydantic
System role: Queue message between extraction and embedding stages
"""

import enum
import uuid

from pydantic import BaseModel, Field


class IngestionStage(str, enum.Enum):
    """Pipeline stage a job runs."""

    EXTRACT = "extract"
    EMBED = "embed"


class IngestionJob(BaseModel):
    """Queued pipeline stage for one document."""

    stage: IngestionStage = Field(description="Stage to run")
    document_id: uuid.UUID = Field(description="Target document")
    file_ref: str | None = Field(default=None, description="Storage key (EXTRACT only)")
    new_run: bool = Field(
        default=False,
        description="EMBED only: reset started_at because no extraction preceded it",
    )
