"""
Exception hierarchy for the study document RAG service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class StudyRagException(Exception):
    """Base exception for all study RAG application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentProcessingError(StudyRagException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        self.document_id = document_id
        super().__init__(message, details)


class NoReadableContentError(DocumentProcessingError):
    """Raised when extraction yields too little text to index."""

    def __init__(
        self,
        document_id: str | None = None,
        content_length: int = 0,
        min_length: int = 10,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["content_length"] = content_length
        details["min_length"] = min_length
        self.content_length = content_length
        super().__init__(
            "No readable text content could be extracted from the document",
            document_id,
            details,
        )


class FileNotFoundInStorageError(DocumentProcessingError):
    """Raised when storage has no download URL for a file reference."""

    def __init__(
        self,
        file_ref: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["file_ref"] = file_ref
        self.file_ref = file_ref
        super().__init__(f"File not found in storage: {file_ref}", document_id, details)


class EmbeddingError(DocumentProcessingError):
    """Raised when a single embedding call fails or returns a malformed vector."""

    pass


class EmbeddingBatchFailedError(EmbeddingError):
    """Raised when any embedding call within a batch fails."""

    def __init__(
        self,
        message: str,
        batch_index: int,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize batch failure.

        Args:
            message: Error message (usually the first failing call's message)
            batch_index: 0-based index of the failed batch
            document_id: Document being embedded
            details: Additional context
        """
        details = details or {}
        details["batch_index"] = batch_index
        self.batch_index = batch_index
        super().__init__(message, document_id, details)


class DocumentNotFoundError(DocumentProcessingError):
    """Raised when a document cannot be found."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Document not found: {document_id}", document_id, details)


class ContentMissingError(DocumentProcessingError):
    """Raised when a document has no extracted content to chunk."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"Document has no extracted content: {document_id}", document_id, details
        )


class IngestionInProgressError(DocumentProcessingError):
    """Raised when ingestion is triggered for a document already processing."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"Ingestion already in progress for document: {document_id}",
            document_id,
            details,
        )


class IngestionCancelledError(DocumentProcessingError):
    """Recorded when a run is interrupted before reaching a terminal status."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("Ingestion cancelled", document_id, details)


class StorageError(StudyRagException):
    """Raised when file storage operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (presign, fetch)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class VectorStoreError(StudyRagException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (search, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class RetrievalFailedError(StudyRagException):
    """Raised when query embedding or scoped search fails."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval error.

        Args:
            message: Error message
            cause: Underlying exception
            details: Additional context
        """
        details = details or {}
        if cause is not None:
            details["cause"] = type(cause).__name__
        self.cause = cause
        super().__init__(message, details)
