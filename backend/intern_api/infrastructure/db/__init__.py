"""Database infrastructure (connection pool)."""

from .pool import check_database, close_pool, get_pool, init_pool, is_pool_initialized

__all__ = ["check_database", "close_pool", "get_pool", "init_pool", "is_pool_initialized"]
