"""Lot queries: listing, single lot lookup and movement history."""

from src.application.dto.responses import LotListResponse, LotResponse, MovementResponse
from src.config import get_logger
from src.core.entities.lot import Lot
from src.core.entities.movement import Movement
from src.core.exceptions import LotNotFoundError
from src.core.interfaces.lot_store import ILotStore
from src.core.services.fifo import order_by_fifo

logger = get_logger(__name__)


class ListLotsUseCase:
    """List stored lots, in insertion or FIFO order."""

    def __init__(self, lot_store: ILotStore | None = None):
        self._lot_store = lot_store

    async def _get_lot_store(self) -> ILotStore:
        if self._lot_store is None:
            from src.infrastructure.storage.sqlite import get_lot_store
            self._lot_store = await get_lot_store()
        return self._lot_store

    async def execute(
        self,
        fifo: bool = False,
        product_id: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Lot]:
        """
        List lots.

        Args:
            fifo: Order by FIFO priority instead of insertion order.
            product_id: Only lots of this product.
            limit: Max lots returned (all when None).
            offset: Lots to skip after ordering.
        """
        store = await self._get_lot_store()
        lots = await store.fetch_all_lots()
        if product_id is not None:
            lots = [lot for lot in lots if lot.product_id == product_id]
        if fifo:
            lots = order_by_fifo(lots)

        end = None if limit is None else offset + limit
        return lots[offset:end]

    async def get(self, lot_id: str) -> Lot:
        store = await self._get_lot_store()
        lot = await store.get_lot(lot_id)
        if lot is None:
            raise LotNotFoundError(lot_id)
        return lot

    async def movements(self, lot_id: str, limit: int = 100) -> list[Movement]:
        """Movement history for a lot, newest first."""
        await self.get(lot_id)
        store = await self._get_lot_store()
        return await store.get_movements(lot_id, limit=limit)

    def to_response(self, lots: list[Lot]) -> LotListResponse:
        return LotListResponse(
            items=[LotResponse.from_lot(lot) for lot in lots],
            total=len(lots),
        )

    @staticmethod
    def movements_to_response(movements: list[Movement]) -> list[MovementResponse]:
        return [MovementResponse.from_movement(m) for m in movements]
