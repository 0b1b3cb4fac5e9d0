"""
Batch embedding task.

Embeds one batch of chunk candidates with concurrent calls and waits
for every call to finish before reporting.

Dependencies: asyncio, study_rag.boundary.embeddings
System role: Embedding stage of document ingestion
"""

import asyncio
import logging

from study_rag.core.document_processing.models.chunk import ChunkCandidate
from study_rag.core.exceptions import EmbeddingBatchFailedError

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Embed chunk candidates one batch at a time."""

    def __init__(self, embedding_client) -> None:
        """
        Initialize embedding task.

        Args:
            embedding_client: EmbeddingClient (or compatible) with async embed(text)
        """
        self._client = embedding_client

    async def embed_batch(
        self,
        batch: list[ChunkCandidate],
        batch_index: int,
        document_id: str | None = None,
    ) -> list[list[float]]:
        """
        Embed every candidate of a batch concurrently.

        Args:
            batch: Candidates to embed
            batch_index: 0-based batch position (error context)
            document_id: Document being embedded (error context)

        Returns:
            list[list[float]]: Vectors aligned with batch order

        Raises:
            EmbeddingBatchFailedError: Any call in the batch failed
        """
        results = await asyncio.gather(
            *(self._client.embed(candidate.text) for candidate in batch),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            first = failures[0]
            logger.error(
                f"{__name__}:embed_batch - Embedding batch failed",
                extra={
                    "document_id": document_id,
                    "batch_index": batch_index,
                    "failed_calls": len(failures),
                    "error_type": type(first).__name__,
                },
            )
            raise EmbeddingBatchFailedError(
                f"Embedding failed for batch {batch_index}: {first}",
                batch_index=batch_index,
                document_id=document_id,
                details={"failed_calls": len(failures)},
            ) from first

        return list(results)
