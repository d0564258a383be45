"""
Domain exceptions for the warehouse engine.

Every error carries a machine-readable code and a details dict so callers
(order workflows, the HTTP layer) can decide on backorder, partial
fulfillment or a user-visible failure without parsing messages.
"""

from typing import Any


class WarehouseError(Exception):
    """Base exception for all warehouse errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(WarehouseError):
    """Base exception for storage operations."""

    pass


class LotNotFoundError(StorageError):
    """Lot not found in storage."""

    def __init__(self, lot_id: str):
        super().__init__(
            f"Lot not found: {lot_id}",
            code="LOT_NOT_FOUND",
            details={"lot_id": lot_id},
        )


class ConcurrentModificationError(StorageError):
    """A lot changed between the read and the conditional write."""

    def __init__(self, lot_id: str, expected_quantity: int):
        super().__init__(
            f"Lot {lot_id} was modified concurrently "
            f"(expected quantity {expected_quantity})",
            code="CONCURRENT_MODIFICATION",
            details={"lot_id": lot_id, "expected_quantity": expected_quantity},
        )


# Inventory Exceptions
class InventoryError(WarehouseError):
    """Base exception for stock allocation and movement rules."""

    pass


class OutOfStockError(InventoryError):
    """No lot with stock exists for the product."""

    def __init__(self, product_id: str):
        super().__init__(
            f"No inventory found for product {product_id}",
            code="OUT_OF_STOCK",
            details={"product_id": product_id},
        )


class InsufficientInventoryError(InventoryError):
    """Lots exist but their total falls short of the request."""

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient inventory for product {product_id}. "
            f"Requested: {requested}, Available: {available}",
            code="INSUFFICIENT_INVENTORY",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )

    @property
    def requested(self) -> int:
        return self.details["requested"]

    @property
    def available(self) -> int:
        return self.details["available"]


class MissingLocationError(InventoryError):
    """A lot selected for a movement has no storage location."""

    def __init__(self, lot_id: str, product_id: str):
        super().__init__(
            f"Lot {lot_id} of product {product_id} has no location assigned",
            code="MISSING_LOCATION",
            details={"lot_id": lot_id, "product_id": product_id},
        )


class InvalidQuantityError(InventoryError):
    """Requested or applied quantity is out of range."""

    def __init__(self, quantity: int, reason: str = "must be positive"):
        super().__init__(
            f"Invalid quantity {quantity}: {reason}",
            code="INVALID_QUANTITY",
            details={"quantity": quantity, "reason": reason},
        )


class StockUnderflowError(InventoryError):
    """A dispatch would take a lot below zero."""

    def __init__(self, lot_id: str | None, on_hand: int, requested: int):
        super().__init__(
            f"Dispatch of {requested} from lot {lot_id} exceeds on-hand quantity {on_hand}",
            code="STOCK_UNDERFLOW",
            details={"lot_id": lot_id, "on_hand": on_hand, "requested": requested},
        )


# Validation Exceptions
class ValidationError(WarehouseError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ConfigurationError(WarehouseError):
    """Configuration error."""

    pass
