"""Tests for SQLite lot store."""

import asyncio
from datetime import date
from unittest.mock import patch

import aiosqlite
import pytest

from src.config import WarehouseSettings
from src.core.entities.dispatch import LotMutation, StockIntent
from src.core.entities.lot import Lot, LotStatus
from src.core.entities.movement import Movement, MovementType
from src.core.exceptions import (
    ConcurrentModificationError,
    InsufficientInventoryError,
    LotNotFoundError,
)
from src.core.services.dispatch_allocator import DispatchAllocatorService


def _lot(quantity: int = 20, expiration: date | None = date(2023, 6, 20), **kwargs) -> Lot:
    fields = {
        "product_id": "PROD-1",
        "product_name": "Greek Yogurt",
        "category": "Dairy",
        "quantity": quantity,
        "location_id": "A-01",
        "lot_number": "LN-001",
        "received_date": date(2023, 6, 1),
        "expiration_date": expiration,
        "status": LotStatus.IN_STOCK if quantity >= 10 else LotStatus.LOW_STOCK,
    }
    fields.update(kwargs)
    return Lot(**fields)


def _dispatch_intent(lot: Lot, take: int, expected: int | None = None) -> StockIntent:
    remaining = lot.quantity - take
    return StockIntent(
        lot_id=lot.id,  # type: ignore[arg-type]
        mutation=LotMutation(
            quantity=remaining,
            location_id=lot.location_id,
            status=LotStatus.OUT_OF_STOCK if remaining == 0 else LotStatus.LOW_STOCK,
            expected_quantity=lot.quantity if expected is None else expected,
        ),
        movement=Movement(
            lot_id=lot.id,
            movement_type=MovementType.DISPATCH,
            from_location_id=lot.location_id,
            quantity=take,
        ),
    )


class TestCreateLot:
    async def test_create_assigns_id_and_round_trips(self, lot_store):
        lot, movement = await lot_store.create_lot(_lot())

        assert lot.id is not None
        assert movement is None

        fetched = await lot_store.get_lot(lot.id)
        assert fetched is not None
        assert fetched.product_id == "PROD-1"
        assert fetched.quantity == 20
        assert fetched.status == LotStatus.IN_STOCK
        assert fetched.expiration_date == date(2023, 6, 20)
        assert fetched.received_date == date(2023, 6, 1)

    async def test_create_with_reception_movement(self, lot_store):
        reception = Movement(
            movement_type=MovementType.RECEPTION, to_location_id="A-01", quantity=20
        )
        lot, movement = await lot_store.create_lot(_lot(), reception)

        assert movement is not None
        assert movement.id is not None
        assert movement.lot_id == lot.id

        history = await lot_store.get_movements(lot.id)
        assert [m.movement_type for m in history] == [MovementType.RECEPTION]

    async def test_undated_lot(self, lot_store):
        lot, _ = await lot_store.create_lot(_lot(expiration=None))
        fetched = await lot_store.get_lot(lot.id)
        assert fetched.expiration_date is None

    async def test_get_missing_lot(self, lot_store):
        assert await lot_store.get_lot("missing") is None


class TestFetchLots:
    async def test_for_product_excludes_empty_and_other_products(self, lot_store):
        full, _ = await lot_store.create_lot(_lot())
        await lot_store.create_lot(_lot(quantity=0, status=LotStatus.OUT_OF_STOCK))
        await lot_store.create_lot(_lot(product_id="PROD-2"))

        lots = await lot_store.fetch_lots_for_product("PROD-1")
        assert [lot.id for lot in lots] == [full.id]

    async def test_all_lots_in_insertion_order(self, lot_store):
        ids = [(await lot_store.create_lot(_lot(quantity=q)))[0].id for q in (5, 0, 30)]

        assert [lot.id for lot in await lot_store.fetch_all_lots()] == ids
        assert [lot.id for lot in await lot_store.fetch_all_lots(limit=2)] == ids[:2]
        assert [lot.id for lot in await lot_store.fetch_all_lots(offset=1)] == ids[1:]

    async def test_unparseable_expiration_logged(self, lot_store, initialized_db):
        lot, _ = await lot_store.create_lot(_lot())
        async with aiosqlite.connect(initialized_db) as conn:
            await conn.execute(
                "UPDATE lots SET expiration_date = ? WHERE id = ?", ("20/06/2023", lot.id)
            )
            await conn.commit()

        with patch("src.infrastructure.storage.sqlite.lot_store.logger") as mock_logger:
            fetched = await lot_store.get_lot(lot.id)

        assert fetched.expiration_date is None
        mock_logger.warning.assert_called_once_with(
            "lot_bad_expiration_date", lot_id=lot.id, value="20/06/2023"
        )


class TestPersistLotMutation:
    async def test_updates_fields(self, lot_store):
        lot, _ = await lot_store.create_lot(_lot())

        await lot_store.persist_lot_mutation(
            lot.id, {"quantity": 4, "status": LotStatus.LOW_STOCK, "location_id": "B-02"}
        )

        fetched = await lot_store.get_lot(lot.id)
        assert fetched.quantity == 4
        assert fetched.status == LotStatus.LOW_STOCK
        assert fetched.location_id == "B-02"

    async def test_expected_quantity_mismatch(self, lot_store):
        lot, _ = await lot_store.create_lot(_lot())

        with pytest.raises(ConcurrentModificationError):
            await lot_store.persist_lot_mutation(lot.id, {"quantity": 1}, expected_quantity=19)

        assert (await lot_store.get_lot(lot.id)).quantity == 20

    async def test_missing_lot(self, lot_store):
        with pytest.raises(LotNotFoundError):
            await lot_store.persist_lot_mutation("missing", {"quantity": 1})

    async def test_rejects_unknown_columns(self, lot_store):
        lot, _ = await lot_store.create_lot(_lot())
        with pytest.raises(ValueError):
            await lot_store.persist_lot_mutation(lot.id, {"product_id": "PROD-9"})


class TestApplyIntents:
    async def test_applies_mutations_and_movements(self, lot_store):
        a, _ = await lot_store.create_lot(_lot(quantity=5))
        b, _ = await lot_store.create_lot(_lot(quantity=10))

        stored = await lot_store.apply_intents([_dispatch_intent(a, 5), _dispatch_intent(b, 2)])

        assert len(stored) == 2
        assert all(m.id is not None for m in stored)
        assert (await lot_store.get_lot(a.id)).quantity == 0
        assert (await lot_store.get_lot(a.id)).status == LotStatus.OUT_OF_STOCK
        assert (await lot_store.get_lot(b.id)).quantity == 8
        assert len(await lot_store.get_movements(a.id)) == 1
        assert len(await lot_store.get_movements(b.id)) == 1

    async def test_stale_intent_rolls_back_whole_batch(self, lot_store):
        a, _ = await lot_store.create_lot(_lot(quantity=5))
        b, _ = await lot_store.create_lot(_lot(quantity=10))

        with pytest.raises(ConcurrentModificationError):
            await lot_store.apply_intents(
                [_dispatch_intent(a, 5), _dispatch_intent(b, 2, expected=11)]
            )

        assert (await lot_store.get_lot(a.id)).quantity == 5
        assert (await lot_store.get_lot(b.id)).quantity == 10
        assert await lot_store.get_movements(a.id) == []

    async def test_empty_batch(self, lot_store):
        assert await lot_store.apply_intents([]) == []


class TestMovements:
    async def test_append_and_history_newest_first(self, lot_store):
        lot, _ = await lot_store.create_lot(_lot())
        first = await lot_store.append_movement(
            Movement(lot_id=lot.id, movement_type=MovementType.TRANSFER, quantity=20)
        )
        second = await lot_store.append_movement(
            Movement(lot_id=lot.id, movement_type=MovementType.ADJUSTMENT, quantity=18)
        )

        history = await lot_store.get_movements(lot.id)
        assert [m.id for m in history] == [second.id, first.id]
        assert history[0].movement_type == MovementType.ADJUSTMENT

    async def test_history_limit(self, lot_store):
        lot, _ = await lot_store.create_lot(_lot())
        for _ in range(3):
            await lot_store.append_movement(
                Movement(lot_id=lot.id, movement_type=MovementType.TRANSFER, quantity=20)
            )
        assert len(await lot_store.get_movements(lot.id, limit=2)) == 2

    async def test_movement_for_unknown_lot_allowed(self, lot_store):
        movement = await lot_store.append_movement(
            Movement(movement_type=MovementType.RECEPTION, quantity=3)
        )
        assert movement.lot_id is None
        assert movement.id is not None


class TestConcurrentDispatch:
    async def test_parallel_dispatches_never_oversell(self, lot_store):
        await lot_store.create_lot(_lot(quantity=5, expiration=date(2023, 6, 20)))
        await lot_store.create_lot(_lot(quantity=10, expiration=date(2023, 6, 25)))

        # Separate services: no shared lock, only the conditional writes protect the lots
        services = [DispatchAllocatorService(lot_store, WarehouseSettings()) for _ in range(6)]
        results = await asyncio.gather(
            *(service.dispatch_by_fifo("PROD-1", 4) for service in services),
            return_exceptions=True,
        )

        succeeded = [r for r in results if not isinstance(r, Exception)]
        for failure in (r for r in results if isinstance(r, Exception)):
            assert isinstance(failure, (ConcurrentModificationError, InsufficientInventoryError))

        remaining = sum(lot.quantity for lot in await lot_store.fetch_all_lots())
        assert remaining == 15 - 4 * len(succeeded)
        assert remaining >= 0
        assert 1 <= len(succeeded) <= 3

        movements = []
        for lot in await lot_store.fetch_all_lots():
            movements.extend(await lot_store.get_movements(lot.id))
        assert sum(m.quantity for m in movements) == 4 * len(succeeded)

    async def test_shared_service_serializes(self, lot_store):
        await lot_store.create_lot(_lot(quantity=5, expiration=date(2023, 6, 20)))
        await lot_store.create_lot(_lot(quantity=10, expiration=date(2023, 6, 25)))

        service = DispatchAllocatorService(lot_store, WarehouseSettings())
        results = await asyncio.gather(
            *(service.dispatch_by_fifo("PROD-1", 4) for _ in range(5)),
            return_exceptions=True,
        )

        assert sum(1 for r in results if not isinstance(r, Exception)) == 3
        remaining = sum(lot.quantity for lot in await lot_store.fetch_all_lots())
        assert remaining == 3
