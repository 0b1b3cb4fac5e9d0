"""
Study document ingestion and retrieval service.

Turns uploaded study material into chunked, embedded knowledge and answers
scoped similarity queries against it for the RAG chat workflow.
"""

__version__ = "0.1.0"
