"""
Configuration settings for the document ingestion pipeline.

Provides environment-based configuration for extraction, chunking,
embedding batches and progress tracking.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=2000,
        gt=0,
        description="Target chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Characters shared between consecutive chunks",
    )

    # Embedding settings
    batch_size: int = Field(
        default=5,
        gt=0,
        description="Chunks embedded concurrently per batch",
    )
    progress_interval: int = Field(
        default=10,
        gt=0,
        description="Persist progress at least every N processed chunks",
    )

    # Extraction settings
    min_content_length: int = Field(
        default=10,
        ge=1,
        description="Extracted text shorter than this is rejected",
    )

    # Scoping
    namespace_prefix: str = Field(
        default="user_",
        description="Prefix joined with the owner id to form a chunk namespace",
    )

    # Workers
    worker_count: int = Field(
        default=2,
        gt=0,
        description="Background ingestion workers",
    )

    max_error_length: int = Field(
        default=2000,
        gt=0,
        description="Persisted error messages are truncated to this length",
    )

    @model_validator(mode="after")
    def _overlap_below_size(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self


@lru_cache
def get_ingestion_settings() -> IngestionSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        IngestionSettings: Singleton settings loaded from environment
    """
    return IngestionSettings()
