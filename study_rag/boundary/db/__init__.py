"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - DocumentModel, ProcessingStatusModel, ChunkModel: Core domain entities
  - DocumentStatus: Enum type for state tracking
  - document_crud, processing_status_crud, chunk_crud: CRUD operation singletons

Dependencies: sqlalchemy, study_rag.configs
System role: Database adapter for documents, processing status and chunk vectors.
"""

from study_rag.boundary.db.base import Base, TimestampMixin, UUIDMixin
from study_rag.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from study_rag.boundary.db.models import (
    ChunkModel,
    DocumentModel,
    DocumentStatus,
    ProcessingStatusModel,
)
from study_rag.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    DocumentContext,
    DocumentCRUD,
    ProcessingStatusCRUD,
    chunk_crud,
    document_crud,
    processing_status_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DocumentModel",
    "DocumentStatus",
    "ProcessingStatusModel",
    "ChunkModel",
    # CRUD classes
    "BaseCRUD",
    "DocumentContext",
    "DocumentCRUD",
    "ProcessingStatusCRUD",
    "ChunkCRUD",
    # CRUD singletons
    "document_crud",
    "processing_status_crud",
    "chunk_crud",
]
