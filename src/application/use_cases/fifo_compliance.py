"""FIFO Compliance Use Case: expiration exposure across the warehouse."""

from dataclasses import dataclass
from datetime import date

from src.application.dto.responses import FifoComplianceResponse
from src.config import get_logger
from src.core.interfaces.lot_store import ILotStore
from src.core.services.expiration import FifoComplianceMetrics, fifo_compliance_metric

logger = get_logger(__name__)


@dataclass
class FifoComplianceResult:
    as_of: date
    metrics: FifoComplianceMetrics


class FifoComplianceUseCase:
    """Compute FIFO compliance metrics over all stored lots."""

    def __init__(self, lot_store: ILotStore | None = None):
        self._lot_store = lot_store

    async def _get_lot_store(self) -> ILotStore:
        if self._lot_store is None:
            from src.infrastructure.storage.sqlite import get_lot_store
            self._lot_store = await get_lot_store()
        return self._lot_store

    async def execute(self, as_of: date | None = None) -> FifoComplianceResult:
        as_of = as_of or date.today()
        store = await self._get_lot_store()
        metrics = fifo_compliance_metric(await store.fetch_all_lots(), as_of)

        logger.info(
            "fifo_compliance_computed",
            dated=metrics.dated_lot_count,
            expired=metrics.expired_count,
            compliance=metrics.compliance_percentage,
        )
        return FifoComplianceResult(as_of=as_of, metrics=metrics)

    def to_response(self, result: FifoComplianceResult) -> FifoComplianceResponse:
        return FifoComplianceResponse.from_metrics(result.metrics, result.as_of)
