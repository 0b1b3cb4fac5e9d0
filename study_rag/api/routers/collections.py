"""
Collection RAG API endpoints.

Routes:
    GET  /collections/{id}/rag-stats?owner_id=
    GET  /collections/{id}/processing-status
    POST /collections/{id}/reprocess?owner_id=

Dependencies: study_rag.application.services, study_rag.models
System role: Collection-level ingestion HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from study_rag.api.deps import get_ingestion_service
from study_rag.application.services import IngestionService
from study_rag.models import (
    CollectionProcessingStatus,
    CollectionRagStats,
    ReprocessResponse,
)

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("/{collection_id}/rag-stats", response_model=CollectionRagStats)
async def get_rag_stats(
    collection_id: UUID,
    owner_id: str = Query(min_length=1),
    service: IngestionService = Depends(get_ingestion_service),
) -> CollectionRagStats:
    """Ingestion statistics of an owner's documents in a collection."""
    return await service.get_collection_stats(owner_id, collection_id)


@router.get("/{collection_id}/processing-status", response_model=CollectionProcessingStatus)
async def get_processing_status(
    collection_id: UUID,
    service: IngestionService = Depends(get_ingestion_service),
) -> CollectionProcessingStatus:
    """Per-document processing state of a collection."""
    return await service.get_collection_processing_status(collection_id)


@router.post(
    "/{collection_id}/reprocess",
    response_model=ReprocessResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def reprocess_collection(
    collection_id: UUID,
    owner_id: str = Query(min_length=1),
    service: IngestionService = Depends(get_ingestion_service),
) -> ReprocessResponse:
    """Queue every extracted document of a collection for re-embedding."""
    queued = await service.reprocess_collection(owner_id, collection_id)
    return ReprocessResponse(collection_id=collection_id, queued=queued)
