"""
Expiration classifier.

Day counts are whole calendar days between the expiration date and the
reference date, so a lot expiring tomorrow is 1 day out and one that
expired yesterday is -1.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from src.core.entities.lot import Lot, LotStatus

CRITICAL_DAYS = 3
WARNING_DAYS = 7


class ExpirationRisk(str, Enum):
    """Risk bucket of a lot relative to a reference date."""

    EXPIRED = "expired"
    CRITICAL = "critical"
    WARNING = "warning"
    NORMAL = "normal"


@dataclass(frozen=True)
class FifoComplianceMetrics:
    """Expiration counts over lots that still hold stock."""

    expiring_in_7: int
    expiring_in_14_exclusive_of_7: int
    expired_count: int
    dated_lot_count: int
    compliance_percentage: int


def _as_date(value: date | datetime) -> date:
    # datetime is a date subclass; subtracting the two raises TypeError
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until_expiration(
    expiration_date: date | datetime, as_of: date | datetime | None = None
) -> int:
    """Calendar days from as_of (default today) to expiration; negative once past."""
    reference = _as_date(as_of) if as_of is not None else date.today()
    return (_as_date(expiration_date) - reference).days


def classify(
    lot: Lot,
    as_of: date | datetime | None = None,
    critical_days: int = CRITICAL_DAYS,
    warning_days: int = WARNING_DAYS,
) -> ExpirationRisk:
    """
    Bucket a lot by time left before it expires.

    <= 0 days is expired, 1..critical_days critical, up to warning_days
    warning, anything later (or undated) normal. Depends only on the
    expiration date and as_of.
    """
    if not lot.is_dated:
        return ExpirationRisk.NORMAL

    days = days_until_expiration(lot.expiration_date, as_of)
    if days <= 0:
        return ExpirationRisk.EXPIRED
    if days <= critical_days:
        return ExpirationRisk.CRITICAL
    if days <= warning_days:
        return ExpirationRisk.WARNING
    return ExpirationRisk.NORMAL


def expiring_within(
    lots: Iterable[Lot],
    days_threshold: int = WARNING_DAYS,
    as_of: date | datetime | None = None,
) -> list[Lot]:
    """
    Lots with stock that expire between as_of and as_of + days_threshold.

    Already-expired lots (negative days) are left out. Sorted by days left,
    ties in input order.
    """
    window: list[tuple[int, Lot]] = []
    for lot in lots:
        if lot.quantity <= 0 or not lot.is_dated:
            continue
        days = days_until_expiration(lot.expiration_date, as_of)
        if 0 <= days <= days_threshold:
            window.append((days, lot))

    window.sort(key=lambda pair: pair[0])
    return [lot for _, lot in window]


def _round_percentage(numerator: int, denominator: int) -> int:
    # Half-up, matching how the dashboard rounds percentages
    return (200 * numerator + denominator) // (2 * denominator)


def fifo_compliance_metric(
    lots: Iterable[Lot],
    as_of: date | datetime | None = None,
) -> FifoComplianceMetrics:
    """
    Summarize expiration exposure of stocked, dated lots.

    compliance_percentage is the share of dated lots that have not expired,
    100 when no lot carries an expiration date.
    """
    expiring_7 = 0
    expiring_14 = 0
    expired = 0
    dated = 0

    for lot in lots:
        if lot.quantity <= 0 or not lot.is_dated:
            continue
        dated += 1
        days = days_until_expiration(lot.expiration_date, as_of)
        if days <= 0:
            expired += 1
        elif days <= 7:
            expiring_7 += 1
        elif days <= 14:
            expiring_14 += 1

    compliance = 100 if dated == 0 else _round_percentage(dated - expired, dated)

    return FifoComplianceMetrics(
        expiring_in_7=expiring_7,
        expiring_in_14_exclusive_of_7=expiring_14,
        expired_count=expired,
        dated_lot_count=dated,
        compliance_percentage=compliance,
    )


def effective_status(lot: Lot, as_of: date | datetime | None = None) -> LotStatus:
    """
    Status to display: expired overrides the stored, quantity-derived status.

    Expiration is a read-time overlay and is never written back by the core.
    """
    if lot.is_dated and days_until_expiration(lot.expiration_date, as_of) < 0:
        return LotStatus.EXPIRED
    return lot.status
