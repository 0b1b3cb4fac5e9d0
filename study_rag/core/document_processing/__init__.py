"""
Document ingestion pipeline.

Extraction, chunking, batched embedding and status tracking for study
documents.

Dependencies: sqlalchemy, pydantic, study_rag.boundary
System role: Document ingestion pipeline entrypoint
"""

from .configs import IngestionSettings, get_ingestion_settings
from .database.status_tracker import ProcessingStatusTracker
from .entrypoint import IngestionPipeline
from .models import ChunkCandidate, IngestionJob, IngestionResult, IngestionStage

__all__ = [
    "IngestionPipeline",
    "IngestionSettings",
    "get_ingestion_settings",
    "ProcessingStatusTracker",
    "ChunkCandidate",
    "IngestionJob",
    "IngestionResult",
    "IngestionStage",
]
