"""Dispatch Stock Use Case: FIFO allocation across a product's lots."""

from dataclasses import dataclass

from src.application.dto.requests import DispatchRequest
from src.application.dto.responses import AllocationResponse, DispatchResponse
from src.config import get_logger
from src.core.entities.dispatch import Allocation
from src.core.services.dispatch_allocator import DispatchAllocatorService

logger = get_logger(__name__)


@dataclass
class DispatchStockResult:
    """Result of a FIFO dispatch."""

    product_id: str
    quantity: int
    reference_code: str | None
    allocations: list[Allocation]


class DispatchStockUseCase:
    """Dispatch a product, oldest-expiring lots first."""

    def __init__(
        self,
        allocator: DispatchAllocatorService | None = None,
    ):
        self._allocator = allocator

    async def _get_allocator(self) -> DispatchAllocatorService:
        if self._allocator is None:
            from src.application.services import get_dispatch_allocator_service

            self._allocator = await get_dispatch_allocator_service()
        return self._allocator

    async def execute(self, request: DispatchRequest) -> DispatchStockResult:
        """Execute dispatch use case."""
        logger.info(
            "dispatch_started",
            product_id=request.product_id,
            quantity=request.quantity,
            reference=request.reference_code,
        )

        allocator = await self._get_allocator()
        allocations = await allocator.dispatch_by_fifo(
            product_id=request.product_id,
            quantity_needed=request.quantity,
            performed_by=request.performed_by,
            reference_code=request.reference_code,
            notes=request.notes,
        )

        return DispatchStockResult(
            product_id=request.product_id,
            quantity=request.quantity,
            reference_code=request.reference_code,
            allocations=allocations,
        )

    def to_response(self, result: DispatchStockResult) -> DispatchResponse:
        """Convert result to API response."""
        return DispatchResponse(
            product_id=result.product_id,
            quantity=result.quantity,
            reference_code=result.reference_code,
            allocations=[AllocationResponse.from_allocation(a) for a in result.allocations],
        )
