"""Apply Movement Use Case: reception, dispatch, transfer, return or adjustment on one lot."""

from dataclasses import dataclass

from src.application.dto.requests import ApplyMovementRequest
from src.application.dto.responses import (
    ApplyMovementResponse,
    LotResponse,
    MovementResponse,
)
from src.config import get_logger, get_settings
from src.core.entities.lot import Lot
from src.core.entities.movement import Movement
from src.core.services.movement_recorder import MovementRecorderService

logger = get_logger(__name__)


@dataclass
class ApplyMovementResult:
    """Result of applying a movement."""

    lot: Lot
    movement: Movement


class ApplyMovementUseCase:
    """Apply a single movement to a stored lot and record it."""

    def __init__(
        self,
        recorder: MovementRecorderService | None = None,
    ):
        self._recorder = recorder

    async def _get_recorder(self) -> MovementRecorderService:
        if self._recorder is None:
            from src.application.services import get_movement_recorder_service

            self._recorder = await get_movement_recorder_service()
        return self._recorder

    async def execute(self, lot_id: str, request: ApplyMovementRequest) -> ApplyMovementResult:
        """Execute apply movement use case."""
        logger.info(
            "apply_movement_started",
            lot_id=lot_id,
            type=request.movement_type.value,
            quantity=request.quantity,
        )

        recorder = await self._get_recorder()
        spec = request.to_spec(get_settings().warehouse.default_performer)
        lot, movement = await recorder.record(lot_id, spec)

        return ApplyMovementResult(lot=lot, movement=movement)

    def to_response(self, result: ApplyMovementResult) -> ApplyMovementResponse:
        """Convert result to API response."""
        return ApplyMovementResponse(
            lot=LotResponse.from_lot(result.lot),
            movement=MovementResponse.from_movement(result.movement),
        )
