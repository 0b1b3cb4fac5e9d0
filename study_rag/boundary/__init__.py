"""External system adapters: database, file storage, embeddings, vector search."""
