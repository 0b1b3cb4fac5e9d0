"""
Embedding client.

Async facade over a LangChain Embeddings provider. Each call embeds one
text; the blocking provider call runs in a worker thread so a batch of
calls can proceed concurrently.

Dependencies: langchain_core
System role: Embedding collaborator for the ingestion pipeline and retriever
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings

from study_rag.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Produce fixed-length document and query vectors."""

    def __init__(
        self,
        embeddings: Embeddings,
        model_id: str,
        dimension: int | None = None,
        max_input_chars: int = 8000,
    ) -> None:
        """
        Initialize client.

        Args:
            embeddings: LangChain embeddings provider
            model_id: Identifier recorded on every persisted chunk
            dimension: Expected vector length (unchecked when None)
            max_input_chars: Input is truncated to this many characters
        """
        self._embeddings = embeddings
        self.model_id = model_id
        self.dimension = dimension
        self._max_input_chars = max_input_chars

    def _prepare(self, text: str) -> str:
        return text[: self._max_input_chars]

    def _check(self, vector: list[float]) -> list[float]:
        if self.dimension is not None and len(vector) != self.dimension:
            raise EmbeddingError(
                f"Expected {self.dimension}-dim embedding, got {len(vector)}",
                details={"model": self.model_id},
            )
        return [float(v) for v in vector]

    async def embed(self, text: str) -> list[float]:
        """
        Embed a document chunk.

        Args:
            text: Chunk text

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: Vector has the wrong length
            Exception: Provider errors propagate unchanged
        """
        vectors = await asyncio.to_thread(
            self._embeddings.embed_documents, [self._prepare(text)]
        )
        if not vectors:
            raise EmbeddingError(
                "Provider returned no embedding", details={"model": self.model_id}
            )
        return self._check(vectors[0])

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a search query using the provider's query path.

        Args:
            text: Query text

        Returns:
            list[float]: Embedding vector
        """
        vector = await asyncio.to_thread(
            self._embeddings.embed_query, self._prepare(text)
        )
        return self._check(vector)
