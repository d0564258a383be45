"""
Movement Recorder / Status Recalculator.

The one place where a movement turns into a new lot quantity, location and
status. Reception, returns, transfers, adjustments and FIFO dispatch all go
through apply_movement so the low-stock rule exists exactly once.
"""

from __future__ import annotations

from src.config import WarehouseSettings, get_logger, get_settings
from src.core.entities.dispatch import LotMutation, StockIntent
from src.core.entities.lot import Lot, LotStatus, utcnow
from src.core.entities.movement import Movement, MovementSpec, MovementType
from src.core.exceptions import (
    InvalidQuantityError,
    LotNotFoundError,
    MissingLocationError,
    StockUnderflowError,
)
from src.core.interfaces.lot_store import ILotStore

logger = get_logger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 10

# Movement types whose quantity is a delta that must move something
_DELTA_TYPES = {MovementType.RECEPTION, MovementType.DISPATCH, MovementType.RETURN}


def derive_status(
    quantity: int, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
) -> LotStatus:
    """Quantity-derived status; ignores expiration."""
    if quantity <= 0:
        return LotStatus.OUT_OF_STOCK
    if quantity < low_stock_threshold:
        return LotStatus.LOW_STOCK
    return LotStatus.IN_STOCK


def apply_movement(
    lot: Lot,
    movement: Movement,
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> Lot:
    """
    Compute the lot that results from a movement.

    Pure: the input lot is not modified and nothing is persisted.

    Raises:
        InvalidQuantityError: reception/dispatch/return of zero units.
        StockUnderflowError: dispatch larger than the lot holds.
    """
    if movement.movement_type in _DELTA_TYPES and movement.quantity <= 0:
        raise InvalidQuantityError(
            movement.quantity, f"{movement.movement_type.value} must move at least one unit"
        )

    quantity = lot.quantity
    location_id = lot.location_id

    kind = movement.movement_type
    if kind == MovementType.RECEPTION:
        quantity += movement.quantity
        location_id = movement.to_location_id or lot.location_id
    elif kind == MovementType.DISPATCH:
        if movement.quantity > lot.quantity:
            raise StockUnderflowError(lot.id, lot.quantity, movement.quantity)
        quantity -= movement.quantity
    elif kind == MovementType.TRANSFER:
        location_id = movement.to_location_id or lot.location_id
    elif kind == MovementType.RETURN:
        quantity += movement.quantity
    elif kind.is_absolute:
        # Stock-count correction
        quantity = movement.quantity

    return lot.model_copy(
        update={
            "quantity": quantity,
            "location_id": location_id,
            "status": derive_status(quantity, low_stock_threshold),
            "updated_at": utcnow(),
        }
    )


def build_intent(
    lot: Lot,
    movement: Movement,
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> tuple[Lot, StockIntent]:
    """Apply a movement and package the result for the store."""
    if lot.id is None:
        raise LotNotFoundError("<unsaved>")

    updated = apply_movement(lot, movement, low_stock_threshold)
    intent = StockIntent(
        lot_id=lot.id,
        mutation=LotMutation(
            quantity=updated.quantity,
            location_id=updated.location_id,
            status=updated.status,
            expected_quantity=lot.quantity,
        ),
        movement=movement.model_copy(update={"lot_id": lot.id}),
    )
    return updated, intent


class MovementRecorderService:
    """Applies one movement to a stored lot and records it."""

    def __init__(
        self,
        lot_store: ILotStore,
        settings: WarehouseSettings | None = None,
    ) -> None:
        self._store = lot_store
        self._settings = settings or get_settings().warehouse

    async def record(self, lot_id: str, spec: MovementSpec) -> tuple[Lot, Movement]:
        """
        Apply a movement to a lot and persist both.

        Dispatches default their origin to the lot's location, so an unlocated
        lot can only be dispatched with an explicit origin. Returns need a
        located lot and restock into that location unless told otherwise.

        Returns:
            The updated lot and the stored movement.
        """
        lot = await self._store.get_lot(lot_id)
        if lot is None:
            raise LotNotFoundError(lot_id)

        movement = spec.to_movement(lot_id)
        if spec.movement_type == MovementType.DISPATCH and movement.from_location_id is None:
            if not lot.has_location:
                raise MissingLocationError(lot_id, lot.product_id)
            movement = movement.model_copy(update={"from_location_id": lot.location_id})
        elif spec.movement_type == MovementType.RETURN:
            if not lot.has_location:
                raise MissingLocationError(lot_id, lot.product_id)
            if movement.to_location_id is None:
                movement = movement.model_copy(update={"to_location_id": lot.location_id})
        elif spec.movement_type == MovementType.TRANSFER and movement.from_location_id is None:
            movement = movement.model_copy(update={"from_location_id": lot.location_id})

        threshold = self._settings.threshold_for(lot.product_id)
        updated, intent = build_intent(lot, movement, threshold)
        stored = await self._store.apply_intents([intent])

        logger.info(
            "movement_recorded",
            lot_id=lot_id,
            type=spec.movement_type.value,
            qty=spec.quantity,
            new_qty=updated.quantity,
            status=updated.status.value,
        )
        return updated, stored[0]
