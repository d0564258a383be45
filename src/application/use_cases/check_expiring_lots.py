"""
Check Expiring Lots Use Case.

Scans every lot with stock and reports those expiring within a
configurable window, soonest first.
"""

from dataclasses import dataclass, field
from datetime import date

from src.application.dto.responses import ExpiringLotsResponse, LotResponse
from src.config import WarehouseSettings, get_logger, get_settings
from src.core.entities.lot import Lot
from src.core.interfaces.lot_store import ILotStore
from src.core.services.expiration import expiring_within

logger = get_logger(__name__)


@dataclass
class ExpiringLotsResult:
    """Result of an expiring lot check."""

    days_threshold: int
    as_of: date
    lots: list[Lot] = field(default_factory=list)


class CheckExpiringLotsUseCase:
    """Use case for listing lots that expire soon."""

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

    async def execute(
        self,
        days_threshold: int | None = None,
        as_of: date | None = None,
    ) -> ExpiringLotsResult:
        """
        Find lots expiring within the window.

        Args:
            days_threshold: Days to look ahead (defaults to settings.expiring_days).
            as_of: Reference date (defaults to today).

        Returns:
            ExpiringLotsResult with lots ordered by days left.
        """
        settings = self._settings or get_settings().warehouse
        if days_threshold is None:
            days_threshold = settings.expiring_days
        as_of = as_of or date.today()

        store = await self._get_lot_store()
        lots = await store.fetch_all_lots()
        expiring = expiring_within(lots, days_threshold, as_of)

        logger.info(
            "expiring_lots_checked",
            scanned=len(lots),
            expiring=len(expiring),
            days_threshold=days_threshold,
        )
        return ExpiringLotsResult(days_threshold=days_threshold, as_of=as_of, lots=expiring)

    def to_response(self, result: ExpiringLotsResult) -> ExpiringLotsResponse:
        """Convert result to API response."""
        return ExpiringLotsResponse(
            days_threshold=result.days_threshold,
            as_of=result.as_of,
            items=[LotResponse.from_lot(lot, result.as_of) for lot in result.lots],
            total=len(result.lots),
        )
