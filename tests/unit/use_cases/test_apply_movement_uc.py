"""Tests for ApplyMovementUseCase."""

from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import ApplyMovementRequest
from src.application.use_cases.apply_movement import ApplyMovementUseCase
from src.core.entities.lot import Lot, LotStatus
from src.core.entities.movement import Movement, MovementType
from src.core.exceptions import LotNotFoundError
from src.core.services.movement_recorder import MovementRecorderService


@pytest.fixture
def mock_recorder():
    return AsyncMock(spec=MovementRecorderService)


@pytest.fixture
def use_case(mock_recorder):
    return ApplyMovementUseCase(recorder=mock_recorder)


class TestApplyMovementUseCase:
    async def test_builds_spec_with_default_performer(self, use_case, mock_recorder):
        lot = Lot(id="L1", product_id="P", quantity=14, status=LotStatus.IN_STOCK)
        movement = Movement(id=1, lot_id="L1", movement_type=MovementType.RECEPTION, quantity=5)
        mock_recorder.record.return_value = (lot, movement)

        request = ApplyMovementRequest(movement_type=MovementType.RECEPTION, quantity=5)
        result = await use_case.execute("L1", request)

        lot_id, spec = mock_recorder.record.call_args[0]
        assert lot_id == "L1"
        assert spec.movement_type == MovementType.RECEPTION
        assert spec.quantity == 5
        assert spec.performed_by == "System"
        assert result.lot.quantity == 14

    async def test_response(self, use_case, mock_recorder):
        lot = Lot(id="L1", product_id="P", quantity=2, status=LotStatus.LOW_STOCK)
        movement = Movement(id=3, lot_id="L1", movement_type=MovementType.DISPATCH, quantity=12)
        mock_recorder.record.return_value = (lot, movement)

        result = await use_case.execute(
            "L1", ApplyMovementRequest(movement_type=MovementType.DISPATCH, quantity=12)
        )
        response = use_case.to_response(result)

        assert response.lot.status == "low-stock"
        assert response.movement.id == 3
        assert response.movement.movement_type == "dispatch"

    async def test_lot_not_found(self, use_case, mock_recorder):
        mock_recorder.record.side_effect = LotNotFoundError("nope")
        with pytest.raises(LotNotFoundError):
            await use_case.execute(
                "nope", ApplyMovementRequest(movement_type=MovementType.RETURN, quantity=1)
            )
