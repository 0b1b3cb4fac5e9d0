"""
Chunk saving task.

Persists embedded chunk candidates as chunk records, one insert at a time.

Dependencies: sqlalchemy, study_rag.boundary.db
System role: Persistence stage of document ingestion
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from study_rag.boundary.db.CRUD.document_crud import DocumentContext
from study_rag.core.document_processing.models.chunk import ChunkCandidate


class SavingTask:
    """Write embedded chunks to the document_chunks table."""

    def __init__(self, namespace_prefix: str = "user_") -> None:
        self._namespace_prefix = namespace_prefix

    def namespace_for(self, owner_id: str) -> str:
        return f"{self._namespace_prefix}{owner_id}"

    async def save(
        self,
        session: AsyncSession,
        document_id: uuid.UUID,
        context: DocumentContext,
        batch: list[ChunkCandidate],
        vectors: list[list[float]],
        total_chunks: int,
        embedding_model: str,
    ) -> int:
        """
        Insert one chunk record per candidate (flushed, not committed).

        Args:
            session: Async database session
            document_id: Source document
            context: Owner and collection of the document
            batch: Candidates in chunk order
            vectors: Embeddings aligned with batch
            total_chunks: Chunk count of the whole run
            embedding_model: Model identifier stored on each record

        Returns:
            int: Number of records inserted
        """
        if len(batch) != len(vectors):
            raise ValueError("batch and vectors must be the same length")

        namespace = self.namespace_for(context.owner_id)
        for candidate, vector in zip(batch, vectors):
            await chunk_crud.create(
                session,
                document_id=document_id,
                collection_id=context.collection_id,
                namespace=namespace,
                owner_id=context.owner_id,
                chunk_index=candidate.chunk_index,
                total_chunks=total_chunks,
                text=candidate.text,
                embedding=vector,
                embedding_model=embedding_model,
            )
        return len(batch)
