# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal
from decimal import Decimal
from datetime import datetime

from app.data.models.order import OrderStatus


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(1, gt=0, description="Ilość produktu (musi być > 0)")


class QuantityIn(BaseModel):
    """Schema dla zmiany ilości; 0 usuwa pozycję z koszyka."""

    quantity: int = Field(..., ge=0, description="Nowa ilość produktu")


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    product_id: int
    name: str
    quantity: int
    price: Decimal


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int
    items: List[CartItemOut]
    amount: Decimal
    item_count: int

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Schema dla tworzenia użytkownika."""

    name: str = Field(..., min_length=1, max_length=100, description="Imię użytkownika")
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    role: Literal["customer", "artisan", "manager", "admin"] = "customer"


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class PlaceOrderOut(BaseModel):
    """Schema dla złożonego zamówienia (response)."""

    success: bool
    message: str
    order_id: int
    order_total: Decimal
    item_count: int


class ErrorOut(BaseModel):
    success: bool = False
    message: str


class OrderItemOut(BaseModel):
    """Zamrożona kopia produktu w zamówieniu."""

    product_id: int | None
    name: str
    category: str
    material: str
    image: str
    description: str
    old_price: Decimal
    new_price: Decimal
    quantity: int


class OrderOut(BaseModel):
    """Schema dla zamówienia (response)."""

    id: int
    user_id: int
    status: str
    total_amount: Decimal
    item_count: int
    purchased_at: datetime
    items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)


class OrderStatusIn(BaseModel):
    status: OrderStatus
