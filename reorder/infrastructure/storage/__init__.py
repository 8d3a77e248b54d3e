"""Storage infrastructure implementations."""

from reorder.infrastructure.storage.sqlite import (
    SQLitePartStore,
    close_pool,
    get_connection,
    get_part_store,
    get_pool,
    get_transaction,
)

__all__ = [
    "SQLitePartStore",
    "get_part_store",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
