"""
Task modules for document ingestion pipeline.

Exports: DownloadTask, TextExtractor, ChunkingTask, EmbeddingTask, SavingTask
"""

from .chunking_task import ChunkingTask
from .download_task import DownloadTask
from .embedding_task import EmbeddingTask
from .extraction_task import DocumentFormat, TextExtractor, clean_text, resolve_format
from .saving_task import SavingTask

__all__ = [
    "DownloadTask",
    "TextExtractor",
    "DocumentFormat",
    "clean_text",
    "resolve_format",
    "ChunkingTask",
    "EmbeddingTask",
    "SavingTask",
]
