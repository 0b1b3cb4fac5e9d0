"""
Processing status ORM model.

One row per document tracking the ingestion state machine and progress
counters. Polled by callers to observe ingestion progress.

Dependencies: sqlalchemy, study_rag.boundary.db.base
System role: Persisted state machine for document ingestion
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from study_rag.boundary.db.base import Base, TimestampMixin, UUIDMixin, utc_now
from study_rag.boundary.db.models.document_model import DocumentStatus


class ProcessingStatusModel(Base, UUIDMixin, TimestampMixin):
    """
    Per-document processing status.

    Attributes:
        document_id: Unique foreign key to documents.id (cascade delete)
        status: pending / processing / completed / failed
        started_at: Start of the current run
        completed_at: End of a successful run, null otherwise
        chunks_processed: Chunks handled in the current run
        embeddings_generated: Embeddings persisted in the current run
        error_message: Triggering error of a failed run
    """

    __tablename__ = "processing_statuses"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.PENDING,
    )

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    chunks_processed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    embeddings_generated: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if processing failed",
    )

    document = relationship("DocumentModel", back_populates="processing_status")
