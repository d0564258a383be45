"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.lot_store import SQLiteLotStore

# Type aliases for convenience
LotStore = SQLiteLotStore

# Aliases used by the application lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_lot_store: SQLiteLotStore | None = None


async def get_lot_store() -> SQLiteLotStore:
    """Get singleton lot store instance."""
    global _lot_store
    if _lot_store is None:
        _lot_store = SQLiteLotStore()
    return _lot_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteLotStore",
    "LotStore",
    # Factory functions
    "get_lot_store",
]
