"""Dispatch Order Use Case: ship every line of an order from FIFO lots."""

from dataclasses import dataclass

from src.application.dto.requests import DispatchOrderRequest
from src.application.dto.responses import (
    AllocationResponse,
    DispatchOrderResponse,
    OrderLineResponse,
)
from src.config import get_logger
from src.core.entities.dispatch import Allocation, OrderLine
from src.core.services.dispatch_allocator import DispatchAllocatorService

logger = get_logger(__name__)


@dataclass
class DispatchOrderResult:
    """Result of an order dispatch."""

    reference_code: str
    allocations: dict[str, list[Allocation]]


class DispatchOrderUseCase:
    """Dispatch a multi-line order; one failing line cancels the whole order."""

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

    async def execute(self, request: DispatchOrderRequest) -> DispatchOrderResult:
        """Execute order dispatch use case."""
        logger.info(
            "order_dispatch_started",
            reference=request.reference_code,
            lines=len(request.lines),
        )

        lines = [
            OrderLine(product_id=line.product_id, quantity=line.quantity)
            for line in request.lines
        ]
        allocator = await self._get_allocator()
        allocations = await allocator.dispatch_order(
            lines,
            performed_by=request.performed_by,
            reference_code=request.reference_code,
            notes=request.notes,
        )

        return DispatchOrderResult(
            reference_code=request.reference_code,
            allocations=allocations,
        )

    def to_response(self, result: DispatchOrderResult) -> DispatchOrderResponse:
        """Convert result to API response."""
        return DispatchOrderResponse(
            reference_code=result.reference_code,
            lines=[
                OrderLineResponse(
                    product_id=product_id,
                    quantity=sum(a.quantity_taken for a in allocations),
                    allocations=[AllocationResponse.from_allocation(a) for a in allocations],
                )
                for product_id, allocations in result.allocations.items()
            ],
        )
