"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers. Tests swap any of these
through app.dependency_overrides.
"""

from functools import lru_cache

from src.application.use_cases import (
    ApplyMovementUseCase,
    CheckExpiringLotsUseCase,
    DispatchOrderUseCase,
    DispatchStockUseCase,
    FifoComplianceUseCase,
    ListDispatchQueueUseCase,
    ListLotsUseCase,
    ReceiveLotUseCase,
)
from src.config import Settings, get_settings


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Lot use case dependencies
def get_receive_lot_use_case() -> ReceiveLotUseCase:
    """Get receive lot use case."""
    return ReceiveLotUseCase()


def get_list_lots_use_case() -> ListLotsUseCase:
    """Get lot query use case."""
    return ListLotsUseCase()


def get_apply_movement_use_case() -> ApplyMovementUseCase:
    """Get apply movement use case."""
    return ApplyMovementUseCase()


# Dispatch use case dependencies
def get_dispatch_stock_use_case() -> DispatchStockUseCase:
    """Get FIFO dispatch use case."""
    return DispatchStockUseCase()


def get_dispatch_order_use_case() -> DispatchOrderUseCase:
    """Get order dispatch use case."""
    return DispatchOrderUseCase()


def get_dispatch_queue_use_case() -> ListDispatchQueueUseCase:
    """Get dispatch queue use case."""
    return ListDispatchQueueUseCase()


# Report use case dependencies
def get_expiring_lots_use_case() -> CheckExpiringLotsUseCase:
    """Get expiring lots use case."""
    return CheckExpiringLotsUseCase()


def get_fifo_compliance_use_case() -> FifoComplianceUseCase:
    """Get FIFO compliance use case."""
    return FifoComplianceUseCase()
