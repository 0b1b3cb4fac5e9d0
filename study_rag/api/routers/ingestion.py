"""
Document ingestion API endpoints.

Routes:
    POST   /documents/{id}/ingestion
    GET    /documents/{id}/status
    GET    /documents/{id}/chunks
    DELETE /documents/{id}/chunks

Dependencies: study_rag.application.services, study_rag.models
System role: Ingestion trigger and progress polling HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from study_rag.api.deps import get_ingestion_service
from study_rag.application.services import IngestionService
from study_rag.core.exceptions import DocumentNotFoundError, IngestionInProgressError
from study_rag.models import (
    ChunkListResponse,
    DeleteChunksResponse,
    IngestionAcceptedResponse,
    ProcessingStatusResponse,
    StartIngestionRequest,
)

router = APIRouter(prefix="/documents", tags=["ingestion"])


@router.post(
    "/{document_id}/ingestion",
    response_model=IngestionAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def start_ingestion(
    document_id: UUID,
    request: StartIngestionRequest | None = None,
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestionAcceptedResponse:
    """
    Queue a document for extraction and embedding.

    Progress is observed by polling GET /documents/{id}/status.

    Raises:
        HTTPException(404): Document not found
        HTTPException(409): Ingestion already in progress
    """
    file_ref = request.file_ref if request else None
    try:
        await service.start_ingestion(document_id, file_ref)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except IngestionInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return IngestionAcceptedResponse(document_id=document_id)


@router.get("/{document_id}/status", response_model=ProcessingStatusResponse)
async def get_status(
    document_id: UUID,
    service: IngestionService = Depends(get_ingestion_service),
) -> ProcessingStatusResponse:
    """
    Get a document's processing status for frontend polling.

    Raises:
        HTTPException(404): Ingestion never started for this document
    """
    record = await service.get_status(document_id)
    if record is None:
        raise HTTPException(
            status_code=404,
            detail=f"No processing status for document: {document_id}",
        )
    return ProcessingStatusResponse(
        document_id=record.document_id,
        status=record.status.value,
        started_at=record.started_at,
        completed_at=record.completed_at,
        chunks_processed=record.chunks_processed,
        embeddings_generated=record.embeddings_generated,
        error_message=record.error_message,
    )


@router.get("/{document_id}/chunks", response_model=ChunkListResponse)
async def get_document_chunks(
    document_id: UUID,
    service: IngestionService = Depends(get_ingestion_service),
) -> ChunkListResponse:
    """List a document's chunks ordered by chunk_index."""
    try:
        chunks = await service.get_document_chunks(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return ChunkListResponse(document_id=document_id, chunks=chunks, total=len(chunks))


@router.delete("/{document_id}/chunks", response_model=DeleteChunksResponse)
async def delete_document_chunks(
    document_id: UUID,
    service: IngestionService = Depends(get_ingestion_service),
) -> DeleteChunksResponse:
    """Delete a document's chunks."""
    try:
        deleted = await service.delete_document_chunks(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except IngestionInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return DeleteChunksResponse(document_id=document_id, deleted=deleted)
