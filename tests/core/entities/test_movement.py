"""Tests for Movement entities and dispatch value objects."""

import pytest
from pydantic import ValidationError

from src.core.entities import (
    Allocation,
    Lot,
    LotMutation,
    LotStatus,
    Movement,
    MovementSpec,
    MovementType,
)


class TestMovementType:
    def test_values(self):
        assert [t.value for t in MovementType] == [
            "reception",
            "dispatch",
            "transfer",
            "return",
            "adjustment",
        ]

    def test_only_adjustment_is_absolute(self):
        assert MovementType.ADJUSTMENT.is_absolute is True
        assert not any(t.is_absolute for t in MovementType if t is not MovementType.ADJUSTMENT)


class TestMovement:
    def test_defaults(self):
        m = Movement(movement_type=MovementType.DISPATCH, quantity=5)
        assert m.id is None
        assert m.lot_id is None
        assert m.performed_by == "System"
        assert m.created_at.tzinfo is not None

    def test_is_frozen(self):
        m = Movement(movement_type=MovementType.DISPATCH, quantity=5)
        with pytest.raises(ValidationError):
            m.quantity = 10  # type: ignore[misc]

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Movement(movement_type=MovementType.RECEPTION, quantity=-3)


class TestMovementSpec:
    def test_to_movement_binds_lot(self):
        spec = MovementSpec(
            movement_type=MovementType.TRANSFER,
            quantity=0,
            to_location_id="B-02",
            performed_by="alice",
            reference_code="TR-1",
        )
        m = spec.to_movement("lot-1")
        assert m.lot_id == "lot-1"
        assert m.movement_type == MovementType.TRANSFER
        assert m.to_location_id == "B-02"
        assert m.performed_by == "alice"
        assert m.reference_code == "TR-1"


class TestAllocation:
    def test_remaining(self):
        lot = Lot(id="L1", product_id="P", quantity=30)
        allocation = Allocation(lot=lot, quantity_taken=12)
        assert allocation.lot_id == "L1"
        assert allocation.remaining == 18


class TestLotMutation:
    def test_to_fields_serializes_status(self):
        mutation = LotMutation(
            quantity=4, location_id="A-01", status=LotStatus.LOW_STOCK, expected_quantity=9
        )
        assert mutation.to_fields() == {
            "quantity": 4,
            "location_id": "A-01",
            "status": "low-stock",
        }
