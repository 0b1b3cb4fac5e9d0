"""File storage boundary."""

from study_rag.boundary.storage.s3_client import S3DocumentStorage

__all__ = ["S3DocumentStorage"]
