"""API routers."""

from .collections import router as collections_router
from .health import router as health_router
from .ingestion import router as ingestion_router
from .retrieval import router as retrieval_router

__all__ = [
    "collections_router",
    "health_router",
    "ingestion_router",
    "retrieval_router",
]
