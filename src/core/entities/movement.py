"""Movement domain entities: the audit trail of every lot change."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.lot import utcnow


class MovementType(str, Enum):
    """Types of lot movements."""

    RECEPTION = "reception"
    DISPATCH = "dispatch"
    TRANSFER = "transfer"
    RETURN = "return"
    ADJUSTMENT = "adjustment"

    @property
    def is_absolute(self) -> bool:
        """Adjustments set the quantity outright; every other type is a delta."""
        return self is MovementType.ADJUSTMENT


class Movement(BaseModel):
    """Immutable record of a quantity or location change."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    lot_id: str | None = None  # None when the lot is unknown to this store
    movement_type: MovementType
    from_location_id: str | None = None
    to_location_id: str | None = None
    quantity: int = Field(..., ge=0)  # magnitude, never negative
    performed_by: str = "System"
    reference_code: str | None = None  # e.g. order number
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow)


class MovementSpec(BaseModel):
    """What a caller asks to apply to a lot; becomes a Movement once bound to it."""

    movement_type: MovementType
    quantity: int = Field(..., ge=0)
    from_location_id: str | None = None
    to_location_id: str | None = None
    performed_by: str = "System"
    reference_code: str | None = None
    notes: str | None = None

    def to_movement(self, lot_id: str | None) -> Movement:
        return Movement(
            lot_id=lot_id,
            movement_type=self.movement_type,
            from_location_id=self.from_location_id,
            to_location_id=self.to_location_id,
            quantity=self.quantity,
            performed_by=self.performed_by,
            reference_code=self.reference_code,
            notes=self.notes,
        )
