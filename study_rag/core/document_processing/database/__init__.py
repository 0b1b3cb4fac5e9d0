"""Ingestion status persistence."""
