"""List Dispatch Queue Use Case: the lots that should leave next."""

from src.application.dto.responses import LotListResponse, LotResponse
from src.config import WarehouseSettings, get_logger, get_settings
from src.core.entities.lot import Lot
from src.core.interfaces.lot_store import ILotStore
from src.core.services.fifo import next_to_dispatch

logger = get_logger(__name__)


class ListDispatchQueueUseCase:
    """FIFO-ordered lots with stock, optionally narrowed to one category."""

    def __init__(
        self,
        lot_store: ILotStore | None = None,
        settings: WarehouseSettings | None = None,
    ):
        self._lot_store = lot_store
        self._settings = settings

    async def _get_lot_store(self) -> ILotStore:
        if self._lot_store is None:
            from src.infrastructure.storage.sqlite import get_lot_store
            self._lot_store = await get_lot_store()
        return self._lot_store

    async def execute(self, category: str | None = None, limit: int | None = None) -> list[Lot]:
        """
        Build the dispatch queue.

        Args:
            category: Only lots of this category (all when None).
            limit: Max lots returned (defaults to settings.dispatch_queue_limit).
        """
        settings = self._settings or get_settings().warehouse
        if limit is None:
            limit = settings.dispatch_queue_limit

        store = await self._get_lot_store()
        queue = next_to_dispatch(await store.fetch_all_lots(), category=category, limit=limit)

        logger.debug("dispatch_queue_listed", category=category, size=len(queue))
        return queue

    def to_response(self, lots: list[Lot]) -> LotListResponse:
        return LotListResponse(
            items=[LotResponse.from_lot(lot) for lot in lots],
            total=len(lots),
        )
