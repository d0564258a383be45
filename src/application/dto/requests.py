"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date

from pydantic import BaseModel, Field

from src.core.entities.movement import MovementSpec, MovementType


class ReceiveLotRequest(BaseModel):
    """Request to receive a new lot into the warehouse."""

    product_id: str = Field(..., min_length=1, description="Logical product ID")
    product_name: str = Field(default="", description="Product display name")
    category: str = Field(default="", description="Product category")
    quantity: int = Field(..., ge=0, description="Units received")
    location_id: str | None = Field(default=None, description="Storage location")
    lot_number: str | None = Field(default=None, description="Supplier batch code")
    received_date: date | None = Field(
        default=None, description="Reception date (defaults to today)"
    )
    expiration_date: date | None = Field(default=None, description="Expiration date")
    performed_by: str | None = Field(default=None, description="Operator")
    notes: str | None = Field(default=None, description="Additional notes")


class ApplyMovementRequest(BaseModel):
    """Request to apply a movement to an existing lot."""

    movement_type: MovementType = Field(..., description="reception, dispatch, transfer, return or adjustment")
    quantity: int = Field(
        ...,
        ge=0,
        description="Units moved; for adjustments the counted quantity",
    )
    from_location_id: str | None = Field(default=None, description="Origin location")
    to_location_id: str | None = Field(default=None, description="Destination location")
    performed_by: str | None = Field(default=None, description="Operator")
    reference_code: str | None = Field(default=None, description="Order or document reference")
    notes: str | None = Field(default=None, description="Additional notes")

    def to_spec(self, default_performer: str) -> MovementSpec:
        return MovementSpec(
            movement_type=self.movement_type,
            quantity=self.quantity,
            from_location_id=self.from_location_id,
            to_location_id=self.to_location_id,
            performed_by=self.performed_by or default_performer,
            reference_code=self.reference_code,
            notes=self.notes,
        )


class DispatchRequest(BaseModel):
    """Request to dispatch a product using FIFO lot selection."""

    product_id: str = Field(..., min_length=1, description="Product to dispatch")
    quantity: int = Field(..., gt=0, description="Units needed")
    performed_by: str | None = Field(default=None, description="Operator")
    reference_code: str | None = Field(
        default=None, description="Order number", examples=["ORD-2023-0042"]
    )
    notes: str | None = Field(default=None, description="Movement notes")


class OrderLineRequest(BaseModel):
    """One line of an order to dispatch."""

    product_id: str = Field(..., min_length=1, description="Product to dispatch")
    quantity: int = Field(..., gt=0, description="Units needed")


class DispatchOrderRequest(BaseModel):
    """Request to dispatch every line of an order by FIFO, all or nothing."""

    reference_code: str = Field(
        ..., min_length=1, description="Order number", examples=["ORD-2023-0042"]
    )
    lines: list[OrderLineRequest] = Field(..., min_length=1, description="Order lines")
    performed_by: str | None = Field(default=None, description="Operator")
    notes: str | None = Field(default=None, description="Movement notes")
