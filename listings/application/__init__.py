"""Application layer: DTOs and services (use cases over repositories and the cache)."""
