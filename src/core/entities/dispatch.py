"""Allocation results and stock intents produced by the core services."""

from dataclasses import dataclass
from typing import Any

from src.core.entities.lot import Lot, LotStatus
from src.core.entities.movement import Movement


@dataclass(frozen=True)
class Allocation:
    """Portion of a dispatch request satisfied from one lot."""

    lot: Lot  # snapshot at decision time
    quantity_taken: int

    @property
    def lot_id(self) -> str | None:
        return self.lot.id

    @property
    def remaining(self) -> int:
        return self.lot.quantity - self.quantity_taken


@dataclass(frozen=True)
class OrderLine:
    """One product and quantity of a multi-line order."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class LotMutation:
    """New field values for a lot, plus the quantity the core last saw."""

    quantity: int
    location_id: str | None
    status: LotStatus
    expected_quantity: int

    def to_fields(self) -> dict[str, Any]:
        return {
            "quantity": self.quantity,
            "location_id": self.location_id,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class StockIntent:
    """
    One lot mutation paired with the movement describing it.

    Intents are the unit a store must apply atomically: the mutation and
    its movement commit together or not at all.
    """

    lot_id: str
    mutation: LotMutation
    movement: Movement
