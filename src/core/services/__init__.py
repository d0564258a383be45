"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.dispatch_allocator import DispatchAllocatorService, plan_allocations
from src.core.services.expiration import (
    ExpirationRisk,
    FifoComplianceMetrics,
    classify,
    days_until_expiration,
    effective_status,
    expiring_within,
    fifo_compliance_metric,
)
from src.core.services.fifo import next_to_dispatch, order_by_fifo
from src.core.services.movement_recorder import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    MovementRecorderService,
    apply_movement,
    build_intent,
    derive_status,
)

__all__ = [
    # FIFO Ordering
    "order_by_fifo",
    "next_to_dispatch",
    # Expiration Classifier
    "ExpirationRisk",
    "FifoComplianceMetrics",
    "classify",
    "days_until_expiration",
    "effective_status",
    "expiring_within",
    "fifo_compliance_metric",
    # Movement Recorder
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "MovementRecorderService",
    "apply_movement",
    "build_intent",
    "derive_status",
    # Dispatch Allocator
    "DispatchAllocatorService",
    "plan_allocations",
]
