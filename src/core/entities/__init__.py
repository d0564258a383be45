"""Core domain entities."""

from src.core.entities.dispatch import Allocation, LotMutation, OrderLine, StockIntent
from src.core.entities.lot import Lot, LotStatus
from src.core.entities.movement import Movement, MovementSpec, MovementType

__all__ = [
    # Lot entities
    "Lot",
    "LotStatus",
    # Movement entities
    "Movement",
    "MovementSpec",
    "MovementType",
    # Dispatch entities
    "Allocation",
    "LotMutation",
    "OrderLine",
    "StockIntent",
]
