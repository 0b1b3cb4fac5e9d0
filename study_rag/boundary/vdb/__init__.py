"""Vector search boundary."""

from study_rag.boundary.vdb.chunk_vector_store import ChunkVectorStore, cosine_scores
from study_rag.boundary.vdb.vector_schemas import RetrievalScope, RetrievedChunk

__all__ = ["ChunkVectorStore", "RetrievalScope", "RetrievedChunk", "cosine_scores"]
