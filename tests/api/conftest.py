"""Fixtures wiring the API to real use cases over an in-memory lot store."""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import dependencies as deps
from src.api.main import app
from src.application.use_cases import (
    ApplyMovementUseCase,
    CheckExpiringLotsUseCase,
    DispatchOrderUseCase,
    DispatchStockUseCase,
    FifoComplianceUseCase,
    ListDispatchQueueUseCase,
    ListLotsUseCase,
    ReceiveLotUseCase,
)
from src.config import WarehouseSettings
from src.core.entities import LotStatus
from src.core.services.dispatch_allocator import DispatchAllocatorService
from src.core.services.movement_recorder import MovementRecorderService


@pytest.fixture
def api_store(store_factory, lot_factory):
    """Two yogurt lots and one undated cheese lot, relative to the real today."""
    today = date.today()
    return store_factory(
        [
            lot_factory("L1", quantity=5, expires_in=10, as_of=today, status=LotStatus.LOW_STOCK),
            lot_factory("L2", quantity=10, expires_in=3, as_of=today),
            lot_factory(
                "L3",
                quantity=40,
                expires_in=None,
                product_id="PROD-2",
                category="Cheese",
                as_of=today,
            ),
        ]
    )


@pytest.fixture
async def wired_client(api_store) -> AsyncGenerator[AsyncClient, None]:
    settings = WarehouseSettings()
    allocator = DispatchAllocatorService(api_store, settings)
    recorder = MovementRecorderService(api_store, settings)

    overrides = {
        deps.get_receive_lot_use_case: lambda: ReceiveLotUseCase(api_store, settings),
        deps.get_list_lots_use_case: lambda: ListLotsUseCase(api_store),
        deps.get_apply_movement_use_case: lambda: ApplyMovementUseCase(recorder),
        deps.get_dispatch_stock_use_case: lambda: DispatchStockUseCase(allocator),
        deps.get_dispatch_order_use_case: lambda: DispatchOrderUseCase(allocator),
        deps.get_dispatch_queue_use_case: lambda: ListDispatchQueueUseCase(api_store, settings),
        deps.get_expiring_lots_use_case: lambda: CheckExpiringLotsUseCase(api_store, settings),
        deps.get_fifo_compliance_use_case: lambda: FifoComplianceUseCase(api_store),
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)
