"""
Document ORM model.

Represents uploaded study documents with extracted text and processing status.

Dependencies: sqlalchemy, study_rag.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum
import uuid

from sqlalchemy import Enum, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from study_rag.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PENDING: Document uploaded, awaiting ingestion
    PROCESSING: Extraction or chunking/embedding in progress
    COMPLETED: All chunks embedded, ready for retrieval
    FAILED: Processing error; error_message field contains details
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion pipeline state.

    Created on upload by an external collaborator; this service only
    writes extracted_content, status and error_message.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Owning user identifier
        collection_id: Optional collection (revision set) the document belongs to
        name: Original filename (255 char limit)
        file_ref: Storage key of the raw file (1024 char limit)
        extracted_content: Cleaned text, null until extraction succeeds
        status: Mirrors the processing status state machine
        error_message: Null if success; human-readable error if FAILED
    """

    __tablename__ = "documents"
    __table_args__ = (Index("ix_documents_collection_id", "collection_id"),)

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Owning user identifier",
    )

    collection_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        doc="Collection the document belongs to",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    file_ref: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Storage key for raw document",
    )

    extracted_content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        doc="Cleaned text produced by extraction",
    )

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.PENDING,
    )

    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if processing failed",
    )

    # Relationships
    processing_status = relationship(
        "ProcessingStatusModel",
        back_populates="document",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
