"""Receive Lot Use Case: new lot plus its reception movement."""

from dataclasses import dataclass

from src.application.dto.requests import ReceiveLotRequest
from src.application.dto.responses import (
    LotResponse,
    MovementResponse,
    ReceiveLotResponse,
)
from src.config import WarehouseSettings, get_logger, get_settings
from src.core.entities.lot import Lot
from src.core.entities.movement import Movement, MovementType
from src.core.interfaces.lot_store import ILotStore
from src.core.services.movement_recorder import derive_status

logger = get_logger(__name__)


@dataclass
class ReceiveLotResult:
    """Result of receiving a lot."""

    lot: Lot
    movement: Movement | None


class ReceiveLotUseCase:
    """
    Register a lot arriving at the warehouse.

    The lot is stored with its quantity-derived status. A reception
    movement is written in the same transaction whenever units arrived;
    an empty lot is registered without one.
    """

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

    def _get_settings(self) -> WarehouseSettings:
        if self._settings is None:
            self._settings = get_settings().warehouse
        return self._settings

    async def execute(self, request: ReceiveLotRequest) -> ReceiveLotResult:
        """Execute receive lot use case."""
        logger.info(
            "receive_lot_started",
            product_id=request.product_id,
            quantity=request.quantity,
            location=request.location_id,
        )

        settings = self._get_settings()
        store = await self._get_lot_store()

        fields = {
            "product_id": request.product_id,
            "product_name": request.product_name,
            "category": request.category,
            "quantity": request.quantity,
            "location_id": request.location_id,
            "lot_number": request.lot_number,
            "expiration_date": request.expiration_date,
            "status": derive_status(
                request.quantity, settings.threshold_for(request.product_id)
            ),
        }
        if request.received_date is not None:
            fields["received_date"] = request.received_date
        lot = Lot(**fields)

        movement = None
        if request.quantity > 0:
            movement = Movement(
                movement_type=MovementType.RECEPTION,
                to_location_id=request.location_id,
                quantity=request.quantity,
                performed_by=request.performed_by or settings.default_performer,
                notes=request.notes or "Initial reception",
            )

        lot, movement = await store.create_lot(lot, movement)

        logger.info(
            "receive_lot_complete",
            lot_id=lot.id,
            status=lot.status.value,
        )
        return ReceiveLotResult(lot=lot, movement=movement)

    def to_response(self, result: ReceiveLotResult) -> ReceiveLotResponse:
        """Convert result to API response."""
        return ReceiveLotResponse(
            lot=LotResponse.from_lot(result.lot),
            movement=(
                MovementResponse.from_movement(result.movement)
                if result.movement is not None
                else None
            ),
        )
