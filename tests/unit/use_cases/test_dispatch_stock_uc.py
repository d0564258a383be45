"""Tests for DispatchStockUseCase."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import DispatchRequest
from src.application.use_cases.dispatch_stock import DispatchStockUseCase
from src.core.entities.dispatch import Allocation
from src.core.entities.lot import Lot
from src.core.exceptions import InsufficientInventoryError
from src.core.services.dispatch_allocator import DispatchAllocatorService


@pytest.fixture
def mock_allocator():
    return AsyncMock(spec=DispatchAllocatorService)


@pytest.fixture
def use_case(mock_allocator):
    return DispatchStockUseCase(allocator=mock_allocator)


class TestDispatchStockUseCase:
    async def test_passes_request_to_allocator(self, use_case, mock_allocator):
        mock_allocator.dispatch_by_fifo.return_value = []
        request = DispatchRequest(
            product_id="PROD-1", quantity=7, performed_by="bob", reference_code="ORD-1"
        )

        await use_case.execute(request)

        mock_allocator.dispatch_by_fifo.assert_awaited_once_with(
            product_id="PROD-1",
            quantity_needed=7,
            performed_by="bob",
            reference_code="ORD-1",
            notes=None,
        )

    async def test_response_lists_allocations(self, use_case, mock_allocator):
        lot = Lot(
            id="L1",
            product_id="PROD-1",
            quantity=5,
            location_id="A-01",
            lot_number="LN-1",
            expiration_date=date(2023, 6, 20),
        )
        mock_allocator.dispatch_by_fifo.return_value = [Allocation(lot=lot, quantity_taken=5)]

        result = await use_case.execute(DispatchRequest(product_id="PROD-1", quantity=5))
        response = use_case.to_response(result)

        assert response.product_id == "PROD-1"
        assert response.quantity == 5
        assert len(response.allocations) == 1
        allocation = response.allocations[0]
        assert allocation.lot_id == "L1"
        assert allocation.quantity_taken == 5
        assert allocation.remaining_quantity == 0
        assert allocation.location_id == "A-01"

    async def test_errors_propagate(self, use_case, mock_allocator):
        mock_allocator.dispatch_by_fifo.side_effect = InsufficientInventoryError("PROD-1", 20, 15)
        with pytest.raises(InsufficientInventoryError):
            await use_case.execute(DispatchRequest(product_id="PROD-1", quantity=20))
