"""Tests for Lot entities."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.core.entities.lot import Lot, LotStatus


class TestLotStatus:
    def test_values_match_stored_strings(self):
        assert LotStatus.IN_STOCK.value == "in-stock"
        assert LotStatus.LOW_STOCK.value == "low-stock"
        assert LotStatus.OUT_OF_STOCK.value == "out-of-stock"
        assert LotStatus.EXPIRED.value == "expired"
        assert LotStatus.RESERVED.value == "reserved"

    def test_from_string(self):
        assert LotStatus("low-stock") is LotStatus.LOW_STOCK


class TestLot:
    def test_defaults(self):
        lot = Lot(product_id="PROD-1")
        assert lot.id is None
        assert lot.quantity == 0
        assert lot.location_id is None
        assert lot.expiration_date is None
        assert lot.status == LotStatus.OUT_OF_STOCK
        assert lot.received_date == date.today()

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Lot(product_id="PROD-1", quantity=-1)

    def test_has_location(self):
        assert Lot(product_id="P", location_id="A-01").has_location is True
        assert Lot(product_id="P").has_location is False
        assert Lot(product_id="P", location_id="").has_location is False

    def test_is_dated(self):
        assert Lot(product_id="P", expiration_date=date(2024, 1, 1)).is_dated is True
        assert Lot(product_id="P").is_dated is False

    def test_timestamps_are_timezone_aware(self):
        lot = Lot(product_id="P")
        assert lot.created_at.tzinfo is not None
        assert lot.updated_at.tzinfo is not None
