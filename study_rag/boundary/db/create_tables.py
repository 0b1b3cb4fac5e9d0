"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, study_rag.configs
System role: Database schema initialization

Usage:
    python -m study_rag.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from study_rag.boundary.db.base import Base
from study_rag.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from study_rag.boundary.db.models.document_model import DocumentModel  # noqa: F401
from study_rag.boundary.db.models.processing_status_model import ProcessingStatusModel  # noqa: F401
from study_rag.boundary.db.models.chunk_model import ChunkModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: issues CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Args:
        engine: Engine to use (defaults to the configured async engine)

    Raises:
        SQLAlchemyError: If database connection or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables created")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Args:
        engine: Engine to use (defaults to the configured async engine)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - Tables dropped")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
