"""Pipeline data models."""

from study_rag.core.document_processing.models.chunk import ChunkCandidate
from study_rag.core.document_processing.models.ingestion_job import IngestionJob, IngestionStage
from study_rag.core.document_processing.models.pipeline_result import IngestionResult

__all__ = ["ChunkCandidate", "IngestionJob", "IngestionStage", "IngestionResult"]
