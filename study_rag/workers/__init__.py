"""
Background workers.

Exports: IngestionWorkerPool
"""

from study_rag.workers.ingestion_worker import IngestionWorkerPool

__all__ = ["IngestionWorkerPool"]
