"""
Application services.

Exports: IngestionService
"""

from study_rag.application.services.ingestion_service import IngestionService

__all__ = ["IngestionService"]
