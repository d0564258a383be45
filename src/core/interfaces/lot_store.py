"""Abstract interface for lot storage."""

from abc import ABC, abstractmethod
from typing import Any

from src.core.entities.dispatch import StockIntent
from src.core.entities.lot import Lot
from src.core.entities.movement import Movement


class ILotStore(ABC):
    """
    Interface for lot and movement persistence.

    Implementations must apply a batch of stock intents atomically and
    reject a lot update whose last-seen quantity no longer matches.
    """

    @abstractmethod
    async def create_lot(
        self, lot: Lot, movement: Movement | None = None
    ) -> tuple[Lot, Movement | None]:
        """Insert a lot and, if given, its reception movement in one transaction."""
        pass

    @abstractmethod
    async def get_lot(self, lot_id: str) -> Lot | None:
        """Get lot by ID."""
        pass

    @abstractmethod
    async def fetch_lots_for_product(self, product_id: str) -> list[Lot]:
        """Get lots of a product that still hold stock (quantity > 0)."""
        pass

    @abstractmethod
    async def fetch_all_lots(
        self, limit: int | None = None, offset: int = 0
    ) -> list[Lot]:
        """Get every lot, including empty ones."""
        pass

    @abstractmethod
    async def persist_lot_mutation(
        self,
        lot_id: str,
        fields: dict[str, Any],
        expected_quantity: int | None = None,
    ) -> None:
        """Update lot fields, optionally conditioned on its current quantity."""
        pass

    @abstractmethod
    async def append_movement(self, movement: Movement) -> Movement:
        """Record a movement; returns it with its assigned ID."""
        pass

    @abstractmethod
    async def apply_intents(self, intents: list[StockIntent]) -> list[Movement]:
        """Apply lot mutations and append their movements as one unit."""
        pass

    @abstractmethod
    async def get_movements(self, lot_id: str, limit: int = 100) -> list[Movement]:
        """Get movements for a lot, newest first."""
        pass
