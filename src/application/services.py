"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.config import get_settings
from src.core.services import DispatchAllocatorService, MovementRecorderService

if TYPE_CHECKING:
    from src.core.interfaces import ILotStore


# Singleton service instances
_dispatch_allocator_service: DispatchAllocatorService | None = None
_movement_recorder_service: MovementRecorderService | None = None


async def get_dispatch_allocator_service(
    lot_store: "ILotStore | None" = None,
) -> DispatchAllocatorService:
    """
    Get or create the DispatchAllocatorService instance.

    The singleton matters here: its per-product locks only serialize
    dispatches that go through the same instance.

    Args:
        lot_store: Optional lot store override (bypasses the singleton)

    Returns:
        Configured DispatchAllocatorService
    """
    global _dispatch_allocator_service

    if lot_store is not None:
        return DispatchAllocatorService(lot_store, get_settings().warehouse)

    if _dispatch_allocator_service is None:
        # Lazy import infrastructure to avoid circular imports
        from src.infrastructure.storage.sqlite import get_lot_store

        _dispatch_allocator_service = DispatchAllocatorService(
            lot_store=await get_lot_store(),
            settings=get_settings().warehouse,
        )

    return _dispatch_allocator_service


async def get_movement_recorder_service(
    lot_store: "ILotStore | None" = None,
) -> MovementRecorderService:
    """
    Get or create the MovementRecorderService instance.

    Args:
        lot_store: Optional lot store override (bypasses the singleton)

    Returns:
        Configured MovementRecorderService
    """
    global _movement_recorder_service

    if lot_store is not None:
        return MovementRecorderService(lot_store, get_settings().warehouse)

    if _movement_recorder_service is None:
        from src.infrastructure.storage.sqlite import get_lot_store

        _movement_recorder_service = MovementRecorderService(
            lot_store=await get_lot_store(),
            settings=get_settings().warehouse,
        )

    return _movement_recorder_service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _dispatch_allocator_service, _movement_recorder_service
    _dispatch_allocator_service = None
    _movement_recorder_service = None
