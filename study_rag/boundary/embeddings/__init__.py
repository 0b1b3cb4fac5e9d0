"""Embedding provider boundary."""

from study_rag.boundary.embeddings.embedding_client import EmbeddingClient
from study_rag.boundary.embeddings.factory import create_embedding_client

__all__ = ["EmbeddingClient", "create_embedding_client"]
