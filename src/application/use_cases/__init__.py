"""Application use cases."""

from src.application.use_cases.apply_movement import ApplyMovementResult, ApplyMovementUseCase
from src.application.use_cases.check_expiring_lots import (
    CheckExpiringLotsUseCase,
    ExpiringLotsResult,
)
from src.application.use_cases.dispatch_order import DispatchOrderResult, DispatchOrderUseCase
from src.application.use_cases.dispatch_stock import DispatchStockResult, DispatchStockUseCase
from src.application.use_cases.fifo_compliance import FifoComplianceResult, FifoComplianceUseCase
from src.application.use_cases.list_dispatch_queue import ListDispatchQueueUseCase
from src.application.use_cases.list_lots import ListLotsUseCase
from src.application.use_cases.receive_lot import ReceiveLotResult, ReceiveLotUseCase

__all__ = [
    "ApplyMovementUseCase",
    "ApplyMovementResult",
    "CheckExpiringLotsUseCase",
    "ExpiringLotsResult",
    "DispatchOrderUseCase",
    "DispatchOrderResult",
    "DispatchStockUseCase",
    "DispatchStockResult",
    "FifoComplianceUseCase",
    "FifoComplianceResult",
    "ListDispatchQueueUseCase",
    "ListLotsUseCase",
    "ReceiveLotUseCase",
    "ReceiveLotResult",
]
