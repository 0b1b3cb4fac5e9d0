"""
API request/response schemas.
"""

from study_rag.models.chunk import ChunkListResponse, ChunkSummary, DeleteChunksResponse
from study_rag.models.collection import (
    CollectionProcessingStatus,
    CollectionRagStats,
    DocumentProcessingRow,
    ReprocessResponse,
)
from study_rag.models.retrieval import (
    ContextResponse,
    RetrievalRequest,
    RetrievalResponse,
    RetrievalResultItem,
)
from study_rag.models.status import (
    IngestionAcceptedResponse,
    ProcessingStatusResponse,
    StartIngestionRequest,
)

__all__ = [
    "ChunkListResponse",
    "ChunkSummary",
    "DeleteChunksResponse",
    "CollectionProcessingStatus",
    "CollectionRagStats",
    "DocumentProcessingRow",
    "ReprocessResponse",
    "ContextResponse",
    "RetrievalRequest",
    "RetrievalResponse",
    "RetrievalResultItem",
    "IngestionAcceptedResponse",
    "ProcessingStatusResponse",
    "StartIngestionRequest",
]
