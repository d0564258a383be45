"""Pytest configuration and fixtures."""

import itertools
from collections.abc import AsyncGenerator
from datetime import date, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.main import app
from src.core.entities import Lot, LotStatus, Movement, StockIntent
from src.core.exceptions import ConcurrentModificationError, LotNotFoundError
from src.core.interfaces import ILotStore

TODAY = date(2023, 10, 15)


class InMemoryLotStore(ILotStore):
    """Dict-backed lot store with the same conditional-write rules as SQLite."""

    def __init__(self, lots: list[Lot] | None = None):
        self.lots: dict[str, Lot] = {}
        self.movements: list[Movement] = []
        self.apply_calls = 0
        self._ids = itertools.count(1)
        for lot in lots or []:
            self.lots[lot.id] = lot  # type: ignore[index]

    async def create_lot(self, lot, movement=None):
        lot = lot.model_copy(update={"id": lot.id or f"lot-{len(self.lots) + 1}"})
        self.lots[lot.id] = lot  # type: ignore[index]
        stored = None
        if movement is not None:
            stored = self._store_movement(movement.model_copy(update={"lot_id": lot.id}))
        return lot, stored

    async def get_lot(self, lot_id):
        return self.lots.get(lot_id)

    async def fetch_lots_for_product(self, product_id):
        return [
            lot for lot in self.lots.values()
            if lot.product_id == product_id and lot.quantity > 0
        ]

    async def fetch_all_lots(self, limit=None, offset=0):
        lots = list(self.lots.values())[offset:]
        return lots if limit is None else lots[:limit]

    async def persist_lot_mutation(self, lot_id, fields: dict[str, Any], expected_quantity=None):
        self._check(lot_id, expected_quantity)
        self.lots[lot_id] = self.lots[lot_id].model_copy(update=fields)

    async def append_movement(self, movement):
        return self._store_movement(movement)

    async def apply_intents(self, intents: list[StockIntent]):
        self.apply_calls += 1
        for intent in intents:
            self._check(intent.lot_id, intent.mutation.expected_quantity)
        stored = []
        for intent in intents:
            self.lots[intent.lot_id] = self.lots[intent.lot_id].model_copy(
                update={
                    "quantity": intent.mutation.quantity,
                    "location_id": intent.mutation.location_id,
                    "status": intent.mutation.status,
                }
            )
            stored.append(self._store_movement(intent.movement))
        return stored

    async def get_movements(self, lot_id, limit=100):
        found = [m for m in self.movements if m.lot_id == lot_id]
        return list(reversed(found))[:limit]

    def _check(self, lot_id: str, expected_quantity: int | None) -> None:
        if lot_id not in self.lots:
            raise LotNotFoundError(lot_id)
        if expected_quantity is not None and self.lots[lot_id].quantity != expected_quantity:
            raise ConcurrentModificationError(lot_id, expected_quantity)

    def _store_movement(self, movement: Movement) -> Movement:
        stored = movement.model_copy(update={"id": next(self._ids)})
        self.movements.append(stored)
        return stored

    def total_quantity(self, product_id: str) -> int:
        return sum(lot.quantity for lot in self.lots.values() if lot.product_id == product_id)


def make_lot(
    lot_id: str,
    quantity: int = 50,
    expires_in: int | None = 30,
    product_id: str = "PROD-1",
    location_id: str | None = "A-01",
    category: str = "Dairy",
    status: LotStatus = LotStatus.IN_STOCK,
    as_of: date = TODAY,
) -> Lot:
    """Build a stored lot expiring `expires_in` days after `as_of` (undated when None)."""
    return Lot(
        id=lot_id,
        product_id=product_id,
        product_name="Greek Yogurt",
        category=category,
        quantity=quantity,
        location_id=location_id,
        lot_number=f"LN-{lot_id}",
        received_date=as_of - timedelta(days=5),
        expiration_date=None if expires_in is None else as_of + timedelta(days=expires_in),
        status=status,
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def lot_factory():
    return make_lot


@pytest.fixture
def memory_store() -> InMemoryLotStore:
    return InMemoryLotStore()


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Service singletons must not leak between tests."""
    from src.application.services import reset_services

    reset_services()
    yield
    reset_services()


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store_factory():
    """Build an in-memory store seeded with lots."""
    return InMemoryLotStore
