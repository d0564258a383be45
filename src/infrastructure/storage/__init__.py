"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteLotStore,
    close_pool,
    get_connection,
    get_lot_store,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteLotStore",
    "get_lot_store",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
