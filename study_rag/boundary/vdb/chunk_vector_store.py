"""
Scoped nearest-neighbour search over persisted chunk vectors.

Loads the chunks of one scope and ranks them by cosine similarity
against the query vector.

Dependencies: numpy, sqlalchemy, study_rag.boundary.db
System role: Vector search backend for the retriever
"""

import logging
from typing import Sequence

import numpy as np
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from study_rag.boundary.db.models.chunk_model import ChunkModel
from study_rag.boundary.vdb.vector_schemas import RetrievalScope, RetrievedChunk
from study_rag.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


def cosine_scores(query: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """
    Cosine similarity of a query against each row of a matrix.

    Rows (or a query) with zero norm score 0.0.

    Args:
        query: Query vector of length d
        matrix: Array of shape (n, d)

    Returns:
        np.ndarray: Scores of shape (n,)
    """
    q = np.asarray(query, dtype=np.float64)
    q_norm = np.linalg.norm(q)
    row_norms = np.linalg.norm(matrix, axis=1)
    denom = row_norms * q_norm
    dots = matrix @ q
    return np.divide(dots, denom, out=np.zeros_like(dots), where=denom != 0)


class ChunkVectorStore:
    """Similarity search over the document_chunks table."""

    def __init__(self, session: AsyncSession, namespace_prefix: str = "user_") -> None:
        """
        Initialize store.

        Args:
            session: Async database session
            namespace_prefix: Prefix joined with owner_id to form the namespace
        """
        self._session = session
        self._namespace_prefix = namespace_prefix

    async def similarity_search(
        self,
        query_embedding: list[float],
        scope: RetrievalScope,
        limit: int = 5,
        similarity_threshold: float | None = None,
    ) -> list[RetrievedChunk]:
        """
        Rank the scope's chunks by similarity to a query vector.

        Args:
            query_embedding: Query vector
            scope: Mandatory owner/collection filter
            limit: Maximum number of results
            similarity_threshold: Drop results scoring below this value

        Returns:
            list[RetrievedChunk]: Results ordered by descending score

        Raises:
            VectorStoreError: If loading the scope's chunks fails
        """
        namespace = scope.namespace(self._namespace_prefix)
        try:
            chunks = await chunk_crud.get_scoped(
                self._session, namespace, scope.collection_id
            )
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to load chunks for scope: {e}",
                operation="search",
                details={"namespace": namespace},
            ) from e

        dimension = len(query_embedding)
        candidates: list[ChunkModel] = [
            c for c in chunks if len(c.embedding) == dimension
        ]
        skipped = len(chunks) - len(candidates)
        if skipped:
            logger.warning(
                f"{__name__}:similarity_search - Skipped chunks with mismatched dimension",
                extra={"namespace": namespace, "skipped": skipped, "dimension": dimension},
            )
        if not candidates or limit <= 0:
            return []

        matrix = np.asarray([c.embedding for c in candidates], dtype=np.float64)
        scores = cosine_scores(query_embedding, matrix)
        order = np.argsort(-scores, kind="stable")

        results: list[RetrievedChunk] = []
        for idx in order:
            score = float(scores[idx])
            if similarity_threshold is not None and score < similarity_threshold:
                break
            chunk = candidates[idx]
            results.append(
                RetrievedChunk(
                    text=chunk.text,
                    chunk_index=chunk.chunk_index,
                    score=score,
                    document_id=chunk.document_id,
                    total_chunks=chunk.total_chunks,
                )
            )
            if len(results) >= limit:
                break

        logger.info(
            f"{__name__}:similarity_search - Ranked scope",
            extra={
                "namespace": namespace,
                "collection_id": str(scope.collection_id),
                "candidates": len(candidates),
                "returned": len(results),
            },
        )
        return results
