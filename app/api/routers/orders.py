# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.exceptions import (
    EmptyCartError,
    InsufficientStockError,
    InvalidOrderStatusTransitionError,
    MarketplaceError,
    OrderNotFoundError,
    ProductNotFoundError,
)
from app.domain.schemas import ErrorOut, OrderOut, OrderStatusIn, PlaceOrderOut
from app.services.order_service import OrderService
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@router.post(
    "/",
    response_model=PlaceOrderOut,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
def place_order(
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    """
    Składa zamówienie z koszyka klienta.
    Koszyk znika, stan magazynu maleje, status zamówienia "pending".
    """
    svc = get_service(db)
    try:
        return svc.place_order(user_id)
    except (EmptyCartError, InsufficientStockError, ProductNotFoundError) as e:
        return _error(400, str(e))
    except MarketplaceError as e:
        return _error(500, str(e))
    except Exception as e:
        logger.exception(f"Unexpected error placing order for user {user_id}: {e}")
        return _error(500, "Failed to place Order!")


@router.get("/", response_model=List[OrderOut])
def list_orders(
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    return get_service(db).list_orders(user_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    """
    Pobiera szczegóły zamówienia.
    """
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{order_id}/status", response_model=OrderOut)
def change_status(
    order_id: int,
    payload: OrderStatusIn,
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.change_status(order_id, payload.status.value)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidOrderStatusTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
