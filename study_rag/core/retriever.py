"""
Retrieval logic with scope filtering.

Embeds a query and ranks the chunks of one owner/collection scope.

Dependencies: study_rag.boundary.vdb, study_rag.core.exceptions
System role: RAG retrieval business logic
"""

import logging

from study_rag.boundary.vdb import ChunkVectorStore, RetrievalScope, RetrievedChunk
from study_rag.core.exceptions import RetrievalFailedError

logger = logging.getLogger(__name__)


class Retriever:
    """Retrieval business logic."""

    def __init__(self, vector_store: ChunkVectorStore, embedding_client) -> None:
        """
        Initialize retriever.

        Args:
            vector_store: Scoped similarity search backend
            embedding_client: EmbeddingClient (async embed_query)
        """
        self._vector_store = vector_store
        self._embedding_client = embedding_client

    async def retrieve(
        self,
        scope: RetrievalScope,
        query: str,
        limit: int = 5,
        similarity_threshold: float | None = None,
    ) -> list[RetrievedChunk]:
        """
        Retrieve the chunks most similar to a query within a scope.

        Args:
            scope: Mandatory owner/collection filter
            query: Query text
            limit: Maximum number of results
            similarity_threshold: Minimum score to keep a result

        Returns:
            list[RetrievedChunk]: Results ordered by descending score

        Raises:
            RetrievalFailedError: Query embedding or vector search failed
        """
        try:
            query_embedding = await self._embedding_client.embed_query(query)
        except Exception as e:
            logger.error(
                f"{__name__}:retrieve - Query embedding failed",
                extra={"owner_id": scope.owner_id, "error_type": type(e).__name__},
            )
            raise RetrievalFailedError(f"RAG retrieval failed: {e}", cause=e) from e

        try:
            results = await self._vector_store.similarity_search(
                query_embedding,
                scope,
                limit=limit,
                similarity_threshold=similarity_threshold,
            )
        except Exception as e:
            logger.error(
                f"{__name__}:retrieve - Vector search failed",
                extra={"owner_id": scope.owner_id, "error_type": type(e).__name__},
            )
            raise RetrievalFailedError(f"RAG retrieval failed: {e}", cause=e) from e

        logger.info(
            f"{__name__}:retrieve - Retrieved chunks",
            extra={
                "owner_id": scope.owner_id,
                "collection_id": str(scope.collection_id),
                "limit": limit,
                "returned": len(results),
            },
        )
        return results
