"""SQLite storage implementations."""

from reorder.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from reorder.infrastructure.storage.sqlite.part_store import SQLitePartStore

# Aliases used by the application lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instance
_part_store: SQLitePartStore | None = None


async def get_part_store() -> SQLitePartStore:
    """Get singleton part store instance."""
    global _part_store
    if _part_store is None:
        _part_store = SQLitePartStore()
    return _part_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_connection_pool",
    "close_connection_pool",
    # Store
    "SQLitePartStore",
    "get_part_store",
]
