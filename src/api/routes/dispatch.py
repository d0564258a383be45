"""FIFO dispatch endpoints."""

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import (
    get_dispatch_order_use_case,
    get_dispatch_queue_use_case,
    get_dispatch_stock_use_case,
)
from src.application.dto.requests import DispatchOrderRequest, DispatchRequest
from src.application.dto.responses import (
    DispatchOrderResponse,
    DispatchResponse,
    ErrorResponse,
    LotListResponse,
)
from src.application.use_cases.dispatch_order import DispatchOrderUseCase
from src.application.use_cases.dispatch_stock import DispatchStockUseCase
from src.application.use_cases.list_dispatch_queue import ListDispatchQueueUseCase

router = APIRouter(prefix="/api/dispatch", tags=["dispatch"])


@router.post(
    "",
    response_model=DispatchResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def dispatch_stock(
    request: DispatchRequest,
    use_case: DispatchStockUseCase = Depends(get_dispatch_stock_use_case),
) -> DispatchResponse:
    """
    Dispatch a product from its lots in FIFO order.

    All-or-nothing: on 409/422 no lot has been touched.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/order",
    response_model=DispatchOrderResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def dispatch_order(
    request: DispatchOrderRequest,
    use_case: DispatchOrderUseCase = Depends(get_dispatch_order_use_case),
) -> DispatchOrderResponse:
    """
    Dispatch every line of an order under its order number.

    All lines are checked before any lot is touched; the first failing line
    is reported and nothing is written.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/queue", response_model=LotListResponse)
async def dispatch_queue(
    category: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
    use_case: ListDispatchQueueUseCase = Depends(get_dispatch_queue_use_case),
) -> LotListResponse:
    """Lots that should be dispatched next."""
    lots = await use_case.execute(category=category, limit=limit)
    return use_case.to_response(lots)
