"""Lot domain entities."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(UTC)


class LotStatus(str, Enum):
    """Stock state of a lot."""

    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"
    EXPIRED = "expired"
    RESERVED = "reserved"


class Lot(BaseModel):
    """A physical batch of a product with its own quantity, location and expiry."""

    id: str | None = None
    product_id: str
    product_name: str = ""
    category: str = ""
    quantity: int = Field(default=0, ge=0)
    location_id: str | None = None  # None = unassigned
    lot_number: str | None = None
    received_date: date = Field(default_factory=date.today)
    expiration_date: date | None = None
    status: LotStatus = LotStatus.OUT_OF_STOCK
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def has_location(self) -> bool:
        return bool(self.location_id)

    @property
    def is_dated(self) -> bool:
        """True when the lot takes part in expiration ordering and reporting."""
        return self.expiration_date is not None
