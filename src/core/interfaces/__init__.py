"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.lot_store import ILotStore

__all__ = [
    # Storage interfaces
    "ILotStore",
]
