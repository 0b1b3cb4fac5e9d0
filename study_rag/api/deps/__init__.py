"""FastAPI dependencies."""

from study_rag.api.deps.dependencies import (
    ServiceCache,
    get_ingestion_service,
    get_service_cache,
)

__all__ = ["ServiceCache", "get_ingestion_service", "get_service_cache"]
