"""Application layer: services used by the API."""
