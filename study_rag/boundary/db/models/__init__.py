"""
Database models package.

Exports:
  - DocumentModel, DocumentStatus: Document ORM model and status enum
  - ProcessingStatusModel: Per-document ingestion state
  - ChunkModel: Embedded document chunk

Dependencies: sqlalchemy, study_rag.boundary.db.base
System role: Database model definitions for domain entities
"""

from study_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus
from study_rag.boundary.db.models.processing_status_model import ProcessingStatusModel
from study_rag.boundary.db.models.chunk_model import ChunkModel

__all__ = [
    "DocumentModel",
    "DocumentStatus",
    "ProcessingStatusModel",
    "ChunkModel",
]
