"""
Embedding client factory.

Builds the production EmbeddingClient from settings.

Dependencies: study_rag.configs, langchain_google_genai
System role: Composition root for the embedding collaborator
"""

import logging

from study_rag.boundary.embeddings.embedding_client import EmbeddingClient
from study_rag.configs.embeddings import EmbeddingSettings

logger = logging.getLogger(__name__)


def create_embedding_client(settings: EmbeddingSettings | None = None) -> EmbeddingClient:
    """
    Create an EmbeddingClient backed by Google Gemini embeddings.

    Args:
        settings: Embedding settings (loaded from environment if None)

    Returns:
        EmbeddingClient: Client with dimension checking enabled
    """
    # Deferred so importing the package does not require provider credentials
    from study_rag.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings

    settings = settings or EmbeddingSettings()
    kwargs = {}
    if settings.api_key:
        kwargs["google_api_key"] = settings.api_key

    embeddings = FixedDimensionEmbeddings(
        model=settings.model,
        output_dimensionality=settings.dimension,
        **kwargs,
    )
    logger.info(
        f"{__name__}:create_embedding_client - Created client",
        extra={"model": settings.model, "dimension": settings.dimension},
    )
    return EmbeddingClient(
        embeddings=embeddings,
        model_id=settings.model,
        dimension=settings.dimension,
        max_input_chars=settings.max_input_chars,
    )
