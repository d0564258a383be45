"""Data transfer objects for the API boundary."""

from src.application.dto.requests import (
    ApplyMovementRequest,
    DispatchOrderRequest,
    DispatchRequest,
    OrderLineRequest,
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
    OrderLineResponse,
    ProviderHealthResponse,
    ReceiveLotResponse,
)

__all__ = [
    # Requests
    "ApplyMovementRequest",
    "DispatchOrderRequest",
    "DispatchRequest",
    "OrderLineRequest",
    "ReceiveLotRequest",
    # Responses
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
    "OrderLineResponse",
    "ProviderHealthResponse",
    "ReceiveLotResponse",
]
