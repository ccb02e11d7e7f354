"""
Photo Service package for the Photo Sharing backend.

This package serves the read-heavy photo APIs (category previews,
leaderboards) on top of a document-store repository. It provides:

- app.main: API surface for photo reads, health and metrics.
- app.caching: the cache contract and its in-memory implementation.
- app.repositories: the repository contract and its caching decorator.
- app.contracts: data contracts exchanged with the repository.

Guidelines:
- One cache instance per process, owned by the service and passed down.
- Cache only reads; writes go straight to the repository.
"""
