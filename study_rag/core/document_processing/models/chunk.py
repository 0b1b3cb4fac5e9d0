"""
Chunk candidate model for the ingestion pipeline.

A positioned slice of cleaned text produced by the chunker, before it
is embedded and persisted.

Dependencies: pydantic
System role: Data structure passed from chunking to embedding
"""

from pydantic import BaseModel, Field


class ChunkCandidate(BaseModel):
    """Positioned chunk of text awaiting embedding."""

    text: str = Field(description="Chunk text content")
    chunk_index: int = Field(ge=0, description="0-based position in the sequence")
    start_index: int = Field(ge=0, description="Offset of the first character in the source text")

    @property
    def end_index(self) -> int:
        """Offset one past the last character."""
        return self.start_index + len(self.text)
