"""Infrastructure layer: database pool, repositories and storage adapters."""
