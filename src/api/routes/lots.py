"""Lot endpoints: reception, listing and movements."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_apply_movement_use_case,
    get_list_lots_use_case,
    get_receive_lot_use_case,
)
from src.application.dto.requests import ApplyMovementRequest, ReceiveLotRequest
from src.application.dto.responses import (
    ApplyMovementResponse,
    ErrorResponse,
    LotListResponse,
    LotResponse,
    MovementResponse,
    ReceiveLotResponse,
)
from src.application.use_cases.apply_movement import ApplyMovementUseCase
from src.application.use_cases.list_lots import ListLotsUseCase
from src.application.use_cases.receive_lot import ReceiveLotUseCase

router = APIRouter(prefix="/api/lots", tags=["lots"])


@router.post(
    "",
    response_model=ReceiveLotResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def receive_lot(
    request: ReceiveLotRequest,
    use_case: ReceiveLotUseCase = Depends(get_receive_lot_use_case),
) -> ReceiveLotResponse:
    """Receive a new lot and record its reception movement."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=LotListResponse)
async def list_lots(
    fifo: bool = Query(default=False, description="Order by FIFO priority"),
    product_id: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: ListLotsUseCase = Depends(get_list_lots_use_case),
) -> LotListResponse:
    """List lots with their effective status."""
    lots = await use_case.execute(fifo=fifo, product_id=product_id, limit=limit, offset=offset)
    return use_case.to_response(lots)


@router.get(
    "/{lot_id}",
    response_model=LotResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_lot(
    lot_id: str,
    use_case: ListLotsUseCase = Depends(get_list_lots_use_case),
) -> LotResponse:
    """Get a single lot."""
    return LotResponse.from_lot(await use_case.get(lot_id))


@router.get(
    "/{lot_id}/movements",
    response_model=list[MovementResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_movements(
    lot_id: str,
    limit: int = Query(default=100, ge=1, le=1000),
    use_case: ListLotsUseCase = Depends(get_list_lots_use_case),
) -> list[MovementResponse]:
    """Get the movement history of a lot, newest first."""
    movements = await use_case.movements(lot_id, limit=limit)
    return use_case.movements_to_response(movements)


@router.post(
    "/{lot_id}/movements",
    response_model=ApplyMovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def apply_movement(
    lot_id: str,
    request: ApplyMovementRequest,
    use_case: ApplyMovementUseCase = Depends(get_apply_movement_use_case),
) -> ApplyMovementResponse:
    """Apply a reception, dispatch, transfer, return or adjustment to a lot."""
    result = await use_case.execute(lot_id, request)
    return use_case.to_response(result)
