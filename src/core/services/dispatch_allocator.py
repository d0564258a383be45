"""
Dispatch Allocator.

Given a demand for a product, walks its lots in FIFO order and takes what
it needs from each. Either the full quantity is allocated and persisted,
or nothing is written and an error says why. Multi-line orders get the
same guarantee across every product they name.
"""

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import AsyncExitStack, asynccontextmanager

from src.config import WarehouseSettings, get_logger, get_settings
from src.core.entities.dispatch import Allocation, OrderLine, StockIntent
from src.core.entities.lot import Lot
from src.core.entities.movement import Movement, MovementType
from src.core.exceptions import (
    InsufficientInventoryError,
    InvalidQuantityError,
    MissingLocationError,
    OutOfStockError,
)
from src.core.interfaces.lot_store import ILotStore
from src.core.services.fifo import order_by_fifo
from src.core.services.movement_recorder import build_intent

logger = get_logger(__name__)


def plan_allocations(ordered_lots: Sequence[Lot], quantity_needed: int) -> list[Allocation]:
    """
    Take min(lot.quantity, remaining) from each lot until demand is met.

    Lots must already be in consumption order. Stops early once nothing
    remains; may return less than needed if the lots run out, so callers
    check availability first.
    """
    allocations: list[Allocation] = []
    remaining = quantity_needed

    for lot in ordered_lots:
        if remaining <= 0:
            break
        if lot.quantity <= 0:
            continue

        take = min(lot.quantity, remaining)
        allocations.append(Allocation(lot=lot, quantity_taken=take))
        remaining -= take

    return allocations


def merge_order_lines(lines: Sequence[OrderLine]) -> list[OrderLine]:
    """Sum quantities of lines naming the same product, first appearance wins the position."""
    totals: dict[str, int] = {}
    for line in lines:
        if line.quantity <= 0:
            raise InvalidQuantityError(line.quantity)
        totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity
    return [OrderLine(product_id=pid, quantity=qty) for pid, qty in totals.items()]


class DispatchAllocatorService:
    """
    FIFO dispatch against a lot store.

    Allocation for a product is serialized behind a per-product lock, and the
    store rejects any lot update whose quantity moved since it was read, so
    two dispatches can never both consume the same units. Share one instance
    per process for the lock to mean anything.
    """

    def __init__(
        self,
        lot_store: ILotStore,
        settings: WarehouseSettings | None = None,
    ) -> None:
        self._store = lot_store
        self._settings = settings or get_settings().warehouse
        # product_id -> lock, and how many tasks hold or wait on it
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @asynccontextmanager
    async def _product_lock(self, product_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(product_id, asyncio.Lock())
        self._lock_users[product_id] = self._lock_users.get(product_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[product_id] -= 1
            if self._lock_users[product_id] == 0:
                del self._lock_users[product_id]
                del self._locks[product_id]

    @asynccontextmanager
    async def _products_locked(self, product_ids: Sequence[str]) -> AsyncIterator[None]:
        # Sorted acquisition keeps overlapping orders from deadlocking
        async with AsyncExitStack() as stack:
            for product_id in sorted(set(product_ids)):
                await stack.enter_async_context(self._product_lock(product_id))
            yield

    async def dispatch_by_fifo(
        self,
        product_id: str,
        quantity_needed: int,
        performed_by: str | None = None,
        reference_code: str | None = None,
        notes: str | None = None,
    ) -> list[Allocation]:
        """
        Allocate and dispatch quantity_needed units of a product.

        Args:
            product_id: Product to dispatch.
            quantity_needed: Units requested, must be positive.
            performed_by: Operator recorded on each movement.
            reference_code: e.g. the order number, copied to each movement.
            notes: Movement notes; a FIFO note is generated when omitted.

        Returns:
            One Allocation per lot touched, in FIFO order.

        Raises:
            InvalidQuantityError: quantity_needed <= 0.
            OutOfStockError: the product has no lot with stock.
            InsufficientInventoryError: total stock is below the request.
            MissingLocationError: a lot to be touched has no location.
        """
        if quantity_needed <= 0:
            raise InvalidQuantityError(quantity_needed)

        async with self._products_locked([product_id]):
            allocations = await self._plan(product_id, quantity_needed)
            intents = [
                self._intent_for(allocation, performed_by, reference_code, notes)
                for allocation in allocations
            ]
            await self._store.apply_intents(intents)

        logger.info(
            "dispatch_completed",
            product_id=product_id,
            quantity=quantity_needed,
            lots=[a.lot_id for a in allocations],
            reference=reference_code,
        )
        return allocations

    async def dispatch_order(
        self,
        lines: Sequence[OrderLine],
        performed_by: str | None = None,
        reference_code: str | None = None,
        notes: str | None = None,
    ) -> dict[str, list[Allocation]]:
        """
        Dispatch every line of an order by FIFO, all or nothing.

        Lines naming the same product are merged. Every line is planned and
        checked before anything is written; the movements of the whole order
        go to the store in one batch under the order's reference code.

        Returns:
            Allocations per product, in line order.

        Raises:
            InvalidQuantityError: the order is empty or a line quantity <= 0.
            OutOfStockError, InsufficientInventoryError, MissingLocationError:
                as for dispatch_by_fifo, for the first line that fails.
        """
        if not lines:
            raise InvalidQuantityError(0, "order has no lines")
        merged = merge_order_lines(lines)

        async with self._products_locked([line.product_id for line in merged]):
            plans: dict[str, list[Allocation]] = {}
            for line in merged:
                plans[line.product_id] = await self._plan(line.product_id, line.quantity)

            intents = [
                self._intent_for(allocation, performed_by, reference_code, notes)
                for allocations in plans.values()
                for allocation in allocations
            ]
            await self._store.apply_intents(intents)

        logger.info(
            "order_dispatched",
            reference=reference_code,
            lines=len(merged),
            lots=[a.lot_id for allocations in plans.values() for a in allocations],
        )
        return plans

    async def _plan(self, product_id: str, quantity_needed: int) -> list[Allocation]:
        """Read, check and allocate one product; writes nothing. Caller holds the lock."""
        lots = [
            lot
            for lot in await self._store.fetch_lots_for_product(product_id)
            if lot.quantity > 0
        ]
        if not lots:
            raise OutOfStockError(product_id)

        available = sum(lot.quantity for lot in lots)
        if available < quantity_needed:
            raise InsufficientInventoryError(product_id, quantity_needed, available)

        allocations = plan_allocations(order_by_fifo(lots), quantity_needed)

        for allocation in allocations:
            if not allocation.lot.has_location:
                raise MissingLocationError(allocation.lot_id or "<unsaved>", product_id)
        return allocations

    def _intent_for(
        self,
        allocation: Allocation,
        performed_by: str | None,
        reference_code: str | None,
        notes: str | None,
    ) -> StockIntent:
        lot = allocation.lot
        if notes is None:
            notes = (
                f"Dispatched for order {reference_code} (FIFO)"
                if reference_code
                else "Dispatched (FIFO)"
            )

        movement = Movement(
            lot_id=lot.id,
            movement_type=MovementType.DISPATCH,
            from_location_id=lot.location_id,
            quantity=allocation.quantity_taken,
            performed_by=performed_by or self._settings.default_performer,
            reference_code=reference_code,
            notes=notes,
        )
        _, intent = build_intent(lot, movement, self._settings.threshold_for(lot.product_id))
        return intent
