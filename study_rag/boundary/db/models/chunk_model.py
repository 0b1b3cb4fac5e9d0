"""
Chunk ORM model.

Immutable, embedded slice of a document's extracted text. Retrieval
filters chunks by namespace and collection, never by document.

Dependencies: sqlalchemy, study_rag.boundary.db.base
System role: Persisted chunk vectors for scoped similarity search
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from study_rag.boundary.db.base import Base, UUIDMixin, utc_now


class ChunkModel(Base, UUIDMixin):
    """
    Embedded document chunk.

    Attributes:
        document_id: Source document (cascade delete)
        collection_id: Optional collection copied from the document
        namespace: Owner scoping string (e.g. "user_<owner_id>")
        owner_id: Owning user identifier
        chunk_index: 0-based position within the run
        total_chunks: Chunk count of the run, shared by all its chunks
        text: Raw chunk text
        embedding: Fixed-length float vector (JSON array)
        embedding_model: Identifier of the model that produced the vector
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        CheckConstraint(
            "chunk_index >= 0 AND chunk_index < total_chunks",
            name="ck_document_chunks_index_range",
        ),
        UniqueConstraint(
            "document_id", "chunk_index", name="uq_document_chunks_document_index"
        ),
        Index("ix_document_chunks_scope", "namespace", "collection_id"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    collection_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
    )

    namespace: Mapped[str] = mapped_column(String(255), nullable=False)

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)

    total_chunks: Mapped[int] = mapped_column(Integer, nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)

    embedding_model: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    document = relationship("DocumentModel", back_populates="chunks")
