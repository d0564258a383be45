"""
FIFO ordering.

For perishable goods "first in" means first to expire: the lot expected to
spoil soonest is the one offered for dispatch first. Received date is not
a tiebreak; undated lots come after every dated one.
"""

from collections.abc import Iterable
from datetime import date

from src.core.entities.lot import Lot


def _fifo_key(lot: Lot) -> tuple[int, date]:
    if not lot.is_dated:
        return (1, date.max)
    return (0, lot.expiration_date)


def order_by_fifo(lots: Iterable[Lot]) -> list[Lot]:
    """
    Order lots by consumption priority.

    Earliest expiration first, undated lots last. The sort is stable, so
    ties (and undated lots) keep their input order.

    Args:
        lots: Snapshot of lots; not modified.

    Returns:
        New list in FIFO order.
    """
    return sorted(lots, key=_fifo_key)


def next_to_dispatch(
    lots: Iterable[Lot],
    category: str | None = None,
    limit: int = 10,
) -> list[Lot]:
    """Lots with stock that should leave the warehouse next."""
    candidates = [
        lot
        for lot in lots
        if lot.quantity > 0 and (category is None or lot.category == category)
    ]
    return order_by_fifo(candidates)[:limit]
