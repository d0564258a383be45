"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from src.application.dto.requests import (
    ApplyMovementRequest,
    DispatchOrderRequest,
    DispatchRequest,
    ReceiveLotRequest,
)
from src.application.dto.responses import (
    AllocationResponse,
    ApplyMovementResponse,
    DispatchOrderResponse,
    DispatchResponse,
    ErrorResponse,
    ExpiringLotsResponse,
    FifoComplianceResponse,
    HealthResponse,
    LotListResponse,
    LotResponse,
    MovementResponse,
    ProviderHealthResponse,
    ReceiveLotResponse,
)
from src.application.services import (
    get_dispatch_allocator_service,
    get_movement_recorder_service,
    reset_services,
)
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

__all__ = [
    # Request DTOs
    "ApplyMovementRequest",
    "DispatchOrderRequest",
    "DispatchRequest",
    "ReceiveLotRequest",
    # Response DTOs
    "AllocationResponse",
    "ApplyMovementResponse",
    "DispatchOrderResponse",
    "DispatchResponse",
    "ErrorResponse",
    "ExpiringLotsResponse",
    "FifoComplianceResponse",
    "HealthResponse",
    "LotListResponse",
    "LotResponse",
    "MovementResponse",
    "ProviderHealthResponse",
    "ReceiveLotResponse",
    # Use Cases
    "ApplyMovementUseCase",
    "CheckExpiringLotsUseCase",
    "DispatchOrderUseCase",
    "DispatchStockUseCase",
    "FifoComplianceUseCase",
    "ListDispatchQueueUseCase",
    "ListLotsUseCase",
    "ReceiveLotUseCase",
    # Service factories
    "get_dispatch_allocator_service",
    "get_movement_recorder_service",
    "reset_services",
]
