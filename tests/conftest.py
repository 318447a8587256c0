"""
Pytest configuration and fixtures for tests.

Every test gets its own SQLite file database built with the same engine
factory the service uses, so transactions behave like in development.
"""

import os

# Settings are read at import time, configure them before any app import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["SQLITE_BUSY_TIMEOUT"] = "15"

from decimal import Decimal
from itertools import count
from unittest.mock import Mock

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from app.data.database import Base, make_engine
from app.data.models import (
    CartItemModel,
    CartModel,
    OrderModel,
    ProductModel,
    ProductStatus,
    UserModel,
)
from app.services.notification_service import NotificationService


class Seeder:
    """Writes and reads fixture data in short sessions of its own."""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self._seq = count(1)

    def user(self, name: str = "Customer", role: str = "customer") -> int:
        n = next(self._seq)
        with self.session_factory() as s:
            user = UserModel(name=f"{name} {n}", email=f"user{n}@example.com", role=role)
            s.add(user)
            s.commit()
            return user.id

    def product(
        self,
        quantity: int = 10,
        new_price: str = "100.00",
        old_price: str | None = None,
        name: str | None = None,
        status: str = ProductStatus.APPROVED.value,
        is_valid: bool = True,
    ) -> int:
        n = next(self._seq)
        with self.session_factory() as s:
            product = ProductModel(
                name=name or f"Handwoven Basket {n}",
                category="Home Decor",
                material="Bamboo",
                image=f"https://cdn.example.com/products/{n}.jpg",
                description="Handmade by local artisans",
                old_price=Decimal(old_price) if old_price else Decimal(new_price) + Decimal("10.00"),
                new_price=Decimal(new_price),
                quantity=quantity,
                status=status,
                is_valid=is_valid,
            )
            s.add(product)
            s.commit()
            return product.id

    def cart(self, user_id: int, lines: list[tuple[int, int]]) -> int:
        with self.session_factory() as s:
            cart = CartModel(user_id=user_id)
            s.add(cart)
            s.flush()
            for product_id, quantity in lines:
                s.add(CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity))
            s.commit()
            return cart.id

    def stock(self, product_id: int) -> int:
        with self.session_factory() as s:
            return s.get(ProductModel, product_id).quantity

    def update_product(self, product_id: int, **values) -> None:
        with self.session_factory() as s:
            product = s.get(ProductModel, product_id)
            for key, value in values.items():
                setattr(product, key, value)
            s.commit()

    def cart_lines(self, user_id: int) -> dict[int, int] | None:
        with self.session_factory() as s:
            cart = s.execute(select(CartModel).where(CartModel.user_id == user_id)).scalar_one_or_none()
            if cart is None:
                return None
            return {i.product_id: i.quantity for i in cart.items}

    def order_count(self) -> int:
        with self.session_factory() as s:
            return s.execute(select(func.count(OrderModel.id))).scalar_one()


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine(tmp_path):
    """SQLite file database with the service's engine setup."""
    engine = make_engine(f"sqlite:///{tmp_path / 'marketplace.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seed(session_factory):
    return Seeder(session_factory)


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def notifier():
    """Notifier stand-in so no Celery task is queued."""
    notifier = Mock(spec=NotificationService)
    notifier.send_order_notification.return_value = True
    return notifier
