"""
Embedding provider configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding client configuration for ingestion and retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Embedding model configuration (Google Gemini by default)."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDINGS_",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID (gemini-embedding-001 supports 1024-dim)",
    )
    dimension: int = Field(
        default=1024,
        description="Fixed embedding vector dimension stored on every chunk",
    )
    max_input_chars: int = Field(
        default=8000,
        description="Input text is truncated to this many characters per call",
    )
    api_key: str | None = Field(
        default=None,
        description="Google API key (falls back to GOOGLE_API_KEY when unset)",
    )
