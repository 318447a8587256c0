#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.exceptions import CartItemNotFoundError, ProductNotFoundError, ProductUnavailableError
from app.domain.schemas import (
    ItemIn,
    QuantityIn,
    CartOut,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session):
    return CartService(db)


@router.get("/", response_model=CartOut)
def get_cart(
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    cart = svc.get_cart(user_id)
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return cart


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_item(
            user_id=user_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (ProductUnavailableError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/items/{product_id}", response_model=CartOut)
def change_quantity(
    product_id: int,
    payload: QuantityIn,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        cart = svc.change_quantity(user_id, product_id, payload.quantity)
    except CartItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return cart


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        cart = svc.remove_item(user_id, product_id)
    except CartItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return cart
