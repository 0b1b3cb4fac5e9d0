"""
Retrieval API endpoints.

Routes: POST /retrieval/search, POST /retrieval/context

Dependencies: study_rag.application.services, study_rag.models
System role: Scoped similarity search HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException

from study_rag.api.deps import get_ingestion_service
from study_rag.application.services import IngestionService
from study_rag.boundary.vdb import RetrievalScope
from study_rag.core.exceptions import RetrievalFailedError
from study_rag.models import (
    ContextResponse,
    RetrievalRequest,
    RetrievalResponse,
    RetrievalResultItem,
)

router = APIRouter(prefix="/retrieval", tags=["retrieval"])


def _scope(request: RetrievalRequest) -> RetrievalScope:
    return RetrievalScope(owner_id=request.owner_id, collection_id=request.collection_id)


@router.post("/search", response_model=RetrievalResponse)
async def search(
    request: RetrievalRequest,
    service: IngestionService = Depends(get_ingestion_service),
) -> RetrievalResponse:
    """
    Retrieve the chunks most similar to a query within an owner/collection scope.

    Raises:
        HTTPException(502): Query embedding or vector search failed
    """
    try:
        results = await service.retrieve(
            _scope(request),
            request.query,
            limit=request.limit,
            similarity_threshold=request.similarity_threshold,
        )
    except RetrievalFailedError as e:
        raise HTTPException(status_code=502, detail=e.message)

    items = [
        RetrievalResultItem(
            text=r.text,
            chunk_index=r.chunk_index,
            score=r.score,
            document_id=r.document_id,
        )
        for r in results
    ]
    return RetrievalResponse(results=items, count=len(items))


@router.post("/context", response_model=ContextResponse)
async def build_context(
    request: RetrievalRequest,
    service: IngestionService = Depends(get_ingestion_service),
) -> ContextResponse:
    """Retrieve and join chunk texts into a context block for the chat widget."""
    try:
        return await service.build_context(
            _scope(request),
            request.query,
            limit=request.limit,
            similarity_threshold=request.similarity_threshold,
        )
    except RetrievalFailedError as e:
        raise HTTPException(status_code=502, detail=e.message)
