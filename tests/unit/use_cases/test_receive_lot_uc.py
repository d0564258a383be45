"""Tests for ReceiveLotUseCase."""

from datetime import date

import pytest

from src.application.dto.requests import ReceiveLotRequest
from src.application.use_cases.receive_lot import ReceiveLotUseCase
from src.config import WarehouseSettings
from src.core.entities.lot import LotStatus
from src.core.entities.movement import MovementType


@pytest.fixture
def use_case(memory_store):
    return ReceiveLotUseCase(lot_store=memory_store, settings=WarehouseSettings())


class TestReceiveLotUseCase:
    async def test_creates_lot_with_reception_movement(self, use_case, memory_store):
        request = ReceiveLotRequest(
            product_id="PROD-1",
            product_name="Greek Yogurt",
            category="Dairy",
            quantity=24,
            location_id="A-01",
            lot_number="LN-001",
            expiration_date=date(2023, 7, 1),
            performed_by="alice",
        )

        result = await use_case.execute(request)

        assert result.lot.id is not None
        assert result.lot.status == LotStatus.IN_STOCK
        assert result.movement is not None
        assert result.movement.movement_type == MovementType.RECEPTION
        assert result.movement.quantity == 24
        assert result.movement.to_location_id == "A-01"
        assert result.movement.performed_by == "alice"
        assert result.movement.lot_id == result.lot.id
        assert len(memory_store.movements) == 1

    async def test_small_lot_is_low_stock(self, use_case):
        result = await use_case.execute(ReceiveLotRequest(product_id="PROD-1", quantity=3))
        assert result.lot.status == LotStatus.LOW_STOCK

    async def test_empty_lot_has_no_movement(self, use_case, memory_store):
        result = await use_case.execute(ReceiveLotRequest(product_id="PROD-1", quantity=0))
        assert result.lot.status == LotStatus.OUT_OF_STOCK
        assert result.movement is None
        assert memory_store.movements == []

    async def test_received_date_defaults_to_today(self, use_case):
        result = await use_case.execute(ReceiveLotRequest(product_id="PROD-1", quantity=10))
        assert result.lot.received_date == date.today()

    async def test_product_threshold_override(self, memory_store):
        use_case = ReceiveLotUseCase(
            lot_store=memory_store,
            settings=WarehouseSettings(low_stock_overrides={"BULK": 100}),
        )
        result = await use_case.execute(ReceiveLotRequest(product_id="BULK", quantity=60))
        assert result.lot.status == LotStatus.LOW_STOCK

    async def test_response(self, use_case):
        result = await use_case.execute(
            ReceiveLotRequest(product_id="PROD-1", quantity=12, location_id="A-01")
        )
        response = use_case.to_response(result)
        assert response.lot.quantity == 12
        assert response.movement is not None
        assert response.movement.movement_type == "reception"
