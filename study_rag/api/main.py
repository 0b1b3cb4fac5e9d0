"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, study_rag.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from study_rag.api.deps.dependencies import get_service_cache
from study_rag.boundary.db.create_tables import create_all_tables
from study_rag.configs import get_settings
from study_rag.observability import configure_logging
from study_rag.observability.middleware import RequestLoggingMiddleware
from .routers import (
    collections_router,
    health_router,
    ingestion_router,
    retrieval_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Creates tables, starts the ingestion workers on startup and stops
    them on shutdown.
    """
    logger = logging.getLogger("uvicorn")

    # Startup
    configure_logging(get_settings().log_level)
    await create_all_tables()
    cache = get_service_cache()
    cache.worker_pool.start()
    logger.info("Ingestion worker pool started")

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Study RAG API",
        description="Study document ingestion and scoped retrieval for RAG chat",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(ingestion_router, prefix="/api/v1")
    app.include_router(retrieval_router, prefix="/api/v1")
    app.include_router(collections_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "study_rag.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
