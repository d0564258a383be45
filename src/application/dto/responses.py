"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from src.config import get_settings
from src.core.entities.dispatch import Allocation
from src.core.entities.lot import Lot
from src.core.entities.movement import Movement
from src.core.services.expiration import (
    FifoComplianceMetrics,
    classify,
    days_until_expiration,
    effective_status,
)


class LotResponse(BaseModel):
    """Lot response DTO with its read-time expiration view."""

    id: str
    product_id: str
    product_name: str
    category: str
    quantity: int
    location_id: str | None = None
    lot_number: str | None = None
    received_date: date
    expiration_date: date | None = None
    status: str = Field(..., description="Quantity-derived stored status")
    effective_status: str = Field(..., description="Status with the expired overlay applied")
    days_until_expiration: int | None = None
    expiration_risk: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_lot(cls, lot: Lot, as_of: date | None = None) -> "LotResponse":
        windows = get_settings().warehouse
        return cls(
            id=lot.id,  # type: ignore[arg-type]
            product_id=lot.product_id,
            product_name=lot.product_name,
            category=lot.category,
            quantity=lot.quantity,
            location_id=lot.location_id,
            lot_number=lot.lot_number,
            received_date=lot.received_date,
            expiration_date=lot.expiration_date,
            status=lot.status.value,
            effective_status=effective_status(lot, as_of).value,
            days_until_expiration=(
                days_until_expiration(lot.expiration_date, as_of)
                if lot.expiration_date
                else None
            ),
            expiration_risk=classify(
                lot, as_of, windows.critical_days, windows.warning_days
            ).value,
            created_at=lot.created_at,
            updated_at=lot.updated_at,
        )


class MovementResponse(BaseModel):
    """Movement response DTO."""

    id: int
    lot_id: str | None = None
    movement_type: str
    from_location_id: str | None = None
    to_location_id: str | None = None
    quantity: int
    performed_by: str
    reference_code: str | None = None
    notes: str | None = None
    created_at: datetime

    @classmethod
    def from_movement(cls, movement: Movement) -> "MovementResponse":
        return cls(
            id=movement.id,  # type: ignore[arg-type]
            lot_id=movement.lot_id,
            movement_type=movement.movement_type.value,
            from_location_id=movement.from_location_id,
            to_location_id=movement.to_location_id,
            quantity=movement.quantity,
            performed_by=movement.performed_by,
            reference_code=movement.reference_code,
            notes=movement.notes,
            created_at=movement.created_at,
        )


class LotListResponse(BaseModel):
    """Paginated lot listing."""

    items: list[LotResponse]
    total: int


class ReceiveLotResponse(BaseModel):
    """Response for lot reception."""

    lot: LotResponse
    movement: MovementResponse | None = None  # None when nothing was received


class ApplyMovementResponse(BaseModel):
    """Response for a movement applied to a lot."""

    lot: LotResponse
    movement: MovementResponse


class AllocationResponse(BaseModel):
    """Units taken from one lot by a dispatch."""

    lot_id: str
    lot_number: str | None = None
    location_id: str | None = None
    expiration_date: date | None = None
    quantity_taken: int
    remaining_quantity: int

    @classmethod
    def from_allocation(cls, allocation: Allocation) -> "AllocationResponse":
        lot = allocation.lot
        return cls(
            lot_id=lot.id,  # type: ignore[arg-type]
            lot_number=lot.lot_number,
            location_id=lot.location_id,
            expiration_date=lot.expiration_date,
            quantity_taken=allocation.quantity_taken,
            remaining_quantity=allocation.remaining,
        )


class DispatchResponse(BaseModel):
    """Response for a FIFO dispatch."""

    product_id: str
    quantity: int
    reference_code: str | None = None
    allocations: list[AllocationResponse]


class OrderLineResponse(BaseModel):
    """Allocations made for one product of an order."""

    product_id: str
    quantity: int
    allocations: list[AllocationResponse]


class DispatchOrderResponse(BaseModel):
    """Response for a multi-line order dispatch."""

    reference_code: str
    lines: list[OrderLineResponse]


class ExpiringLotsResponse(BaseModel):
    """Lots expiring within a window."""

    days_threshold: int
    as_of: date
    items: list[LotResponse]
    total: int


class FifoComplianceResponse(BaseModel):
    """FIFO compliance metrics."""

    as_of: date
    expiring_in_7: int
    expiring_in_14_exclusive_of_7: int
    expired_count: int
    dated_lot_count: int
    compliance_percentage: int

    @classmethod
    def from_metrics(cls, metrics: FifoComplianceMetrics, as_of: date) -> "FifoComplianceResponse":
        return cls(
            as_of=as_of,
            expiring_in_7=metrics.expiring_in_7,
            expiring_in_14_exclusive_of_7=metrics.expiring_in_14_exclusive_of_7,
            expired_count=metrics.expired_count,
            dated_lot_count=metrics.dated_lot_count,
            compliance_percentage=metrics.compliance_percentage,
        )


class ProviderHealthResponse(BaseModel):
    """Health of a single backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_INVENTORY)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict | None = Field(default=None, description="Structured error context")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
