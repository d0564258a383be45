"""Expiration and FIFO compliance reports."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_expiring_lots_use_case, get_fifo_compliance_use_case
from src.application.dto.responses import ExpiringLotsResponse, FifoComplianceResponse
from src.application.use_cases.check_expiring_lots import CheckExpiringLotsUseCase
from src.application.use_cases.fifo_compliance import FifoComplianceUseCase

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/expiring", response_model=ExpiringLotsResponse)
async def expiring_lots(
    days: int | None = Query(default=None, ge=0, le=365, description="Look-ahead window"),
    as_of: date | None = None,
    use_case: CheckExpiringLotsUseCase = Depends(get_expiring_lots_use_case),
) -> ExpiringLotsResponse:
    """Lots with stock expiring within the window, soonest first."""
    result = await use_case.execute(days_threshold=days, as_of=as_of)
    return use_case.to_response(result)


@router.get("/fifo-compliance", response_model=FifoComplianceResponse)
async def fifo_compliance(
    as_of: date | None = None,
    use_case: FifoComplianceUseCase = Depends(get_fifo_compliance_use_case),
) -> FifoComplianceResponse:
    """Expiration exposure and share of dated lots still sellable."""
    result = await use_case.execute(as_of=as_of)
    return use_case.to_response(result)
