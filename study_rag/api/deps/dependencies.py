"""
Dependency injection container.

Factory functions for FastAPI dependencies. Process-wide collaborators
(storage, embedding client, pipeline, worker pool) are built lazily and
cached; services are built per request around the request's session.

Dependencies: study_rag.configs, study_rag.application, study_rag.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from study_rag.application.services import IngestionService
from study_rag.boundary.db import get_async_db, get_async_session_factory
from study_rag.configs import get_settings
from study_rag.core.document_processing.configs import get_ingestion_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._storage = None
        self._embedding_client = None
        self._pipeline = None
        self._worker_pool = None

    @property
    def storage(self):
        """Get cached S3 document storage."""
        if self._storage is None:
            from study_rag.boundary.storage import S3DocumentStorage

            storage_settings = get_settings().storage
            self._storage = S3DocumentStorage(
                bucket=storage_settings.bucket,
                region=storage_settings.region,
                presigned_url_expiry=storage_settings.presigned_url_expiry,
                fetch_timeout=storage_settings.fetch_timeout,
            )
        return self._storage

    @property
    def embedding_client(self):
        """Get cached embedding client."""
        if self._embedding_client is None:
            from study_rag.boundary.embeddings import create_embedding_client

            self._embedding_client = create_embedding_client(get_settings().embeddings)
        return self._embedding_client

    @property
    def pipeline(self):
        """Get cached ingestion pipeline."""
        if self._pipeline is None:
            from study_rag.core.document_processing import IngestionPipeline

            self._pipeline = IngestionPipeline(
                session_factory=get_async_session_factory(),
                storage=self.storage,
                embedding_client=self.embedding_client,
                settings=get_ingestion_settings(),
            )
        return self._pipeline

    @property
    def worker_pool(self):
        """Get cached ingestion worker pool."""
        if self._worker_pool is None:
            from study_rag.workers import IngestionWorkerPool

            self._worker_pool = IngestionWorkerPool(
                self.pipeline,
                worker_count=get_ingestion_settings().worker_count,
            )
        return self._worker_pool

    async def aclose(self) -> None:
        """Stop workers, close clients and clear all cached instances."""
        if self._worker_pool is not None:
            await self._worker_pool.stop()
        if self._storage is not None:
            await self._storage.aclose()
        self._storage = None
        self._embedding_client = None
        self._pipeline = None
        self._worker_pool = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_ingestion_service(db: AsyncSession = Depends(get_async_db)) -> IngestionService:
    """
    Get ingestion service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        IngestionService: Ingestion service instance
    """
    cache = get_service_cache()
    return IngestionService(
        db=db,
        worker_pool=cache.worker_pool,
        embedding_client=cache.embedding_client,
        settings=get_ingestion_settings(),
    )
