"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from study_rag.boundary.db.CRUD import document_crud, chunk_crud

    document = await document_crud.get_by_id(db, document_id)
"""

from study_rag.boundary.db.CRUD.base_crud import BaseCRUD
from study_rag.boundary.db.CRUD.document_crud import (
    DocumentContext,
    DocumentCRUD,
    document_crud,
)
from study_rag.boundary.db.CRUD.processing_status_crud import (
    ProcessingStatusCRUD,
    processing_status_crud,
)
from study_rag.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud

__all__ = [
    "BaseCRUD",
    "DocumentContext",
    "DocumentCRUD",
    "document_crud",
    "ProcessingStatusCRUD",
    "processing_status_crud",
    "ChunkCRUD",
    "chunk_crud",
]
