"""
Fixed-window text chunking task.

Splits cleaned text into overlapping character windows. Output depends
only on the text and the two size parameters, so re-runs reproduce
identical chunks.

Dependencies: pydantic (ChunkCandidate)
System role: Chunking stage of document ingestion
"""

from study_rag.core.document_processing.models.chunk import ChunkCandidate


class ChunkingTask:
    """Split text into overlapping fixed-size windows."""

    def __init__(self, chunk_size: int = 2000, chunk_overlap: int = 200) -> None:
        """
        Initialize chunking task with window configuration.

        Args:
            chunk_size: Window length in characters
            chunk_overlap: Characters shared by adjacent windows

        Raises:
            ValueError: chunk_size is not positive or overlap is outside [0, chunk_size)
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    @property
    def step(self) -> int:
        """Distance between consecutive window starts."""
        return self._chunk_size - self._chunk_overlap

    def chunk(self, text: str) -> list[ChunkCandidate]:
        """
        Split text into ordered chunk candidates.

        The last window is truncated to the remaining text.

        Args:
            text: Cleaned text

        Returns:
            list[ChunkCandidate]: Candidates with contiguous chunk_index from 0
        """
        candidates: list[ChunkCandidate] = []
        start = 0
        length = len(text)
        while start < length:
            end = min(start + self._chunk_size, length)
            candidates.append(
                ChunkCandidate(
                    text=text[start:end],
                    chunk_index=len(candidates),
                    start_index=start,
                )
            )
            if end == length:
                break
            start += self.step
        return candidates
