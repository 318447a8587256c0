# app/services/order_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.database import transaction
from app.data.models.order import OrderModel, OrderStatus
from app.data.models.order_item import OrderItemModel
from app.domain.exceptions import (
    EmptyCartError,
    CartDeletionError,
    InsufficientStockError,
    InvalidOrderStatusTransitionError,
    OrderNotFoundError,
    TransactionConflictError,
)
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.services.notification_service import NotificationService
from app.services.pricing import compute_pricing
from app.utils.logging import get_logger

logger = get_logger(__name__)

# dozwolone przejscia statusu, delivered i cancelled sa koncowe
STATUS_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    place_order to jedna transakcja: koszyk -> walidacja stanu -> ceny ->
    zmniejszenie stanu -> zamowienie -> usuniecie koszyka.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.notification_service = notification_service or NotificationService()

    def place_order(self, user_id: int) -> Dict[str, Any]:
        """
        Use Case: Złożenie zamówienia z koszyka klienta.

        Albo wszystko jest zapisane, albo nic: blad w dowolnym kroku cofa
        zmiany stanu magazynu, zamowienie i usuniecie koszyka.
        Bledy bazy (lock timeout, deadlock) -> TransactionConflictError.
        """
        logger.info(f"Placing order for user {user_id}")

        try:
            with transaction(self.db):
                order = self._place_order(user_id)
        except SQLAlchemyError as e:
            logger.error(f"Order for user {user_id} rolled back, storage error: {e}")
            raise TransactionConflictError(str(e)) from e
        except Exception as e:
            logger.warning(f"Order for user {user_id} rolled back: {e}")
            raise

        logger.info(f"Order {order.id} committed for user {user_id}, total {order.total_amount}")

        self.notification_service.send_order_notification(user_id, order.id, order.total_amount)

        return {
            "success": True,
            "message": "Order placed successfully!",
            "order_id": order.id,
            "order_total": order.total_amount,
            "item_count": order.item_count,
        }

    def _place_order(self, user_id: int) -> OrderModel:
        cart = self.carts.get_cart_by_user(user_id)

        if not cart or not cart.items:
            raise EmptyCartError(user_id)

        # stala kolejnosc blokad wierszy, dwa koszyki z tymi samymi produktami nie zrobia deadlocka
        items = sorted(cart.items, key=lambda i: i.product_id)

        #walidacja stanu, wszystkie pozycje zanim cokolwiek zmniejszymy
        for item in items:
            product = self.products.get_stock_for_update(item.product_id)
            if product.quantity < item.quantity:
                raise InsufficientStockError(
                    product_id=product.id,
                    requested=item.quantity,
                    available=product.quantity,
                    name=product.name,
                )

        pricing = compute_pricing((item.product.new_price, item.quantity) for item in items)

        # ponowne sprawdzenie w samym UPDATE, nie polegamy tylko na walidacji wyzej
        for item in items:
            remaining = self.products.decrement_stock(item.product_id, item.quantity)
            logger.info(f"Product {item.product_id}: -{item.quantity}, remaining {remaining}")

        order = OrderModel(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            total_amount=pricing.total,
            item_count=len(items),
            purchased_at=datetime.now(timezone.utc),
            items=[self._snapshot(item) for item in items],
        )
        self.repo.create_order(order)

        if not self.carts.delete_cart(user_id):
            raise CartDeletionError(user_id)

        return order

    @staticmethod
    def _snapshot(item) -> OrderItemModel:
        #kopia pol produktu, pozniejsze zmiany produktu nie ruszaja zamowienia
        product = item.product
        return OrderItemModel(
            product_id=product.id,
            name=product.name,
            category=product.category,
            material=product.material,
            image=product.image,
            description=product.description,
            old_price=product.old_price,
            new_price=product.new_price,
            quantity=item.quantity,
        )

    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        """
        Use Case: Pobranie zamówienia (Query).
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise OrderNotFoundError(order_id)

        if order.user_id != user_id:
            raise PermissionError("Access to this order is denied")

        return self._to_dict(order)

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return [self._to_dict(o) for o in self.repo.list_orders_by_user(user_id)]

    def change_status(self, order_id: int, status: str) -> Dict[str, Any]:
        requested = OrderStatus(status)

        with transaction(self.db):
            order = self.repo.get_order(order_id)
            if not order:
                raise OrderNotFoundError(order_id)

            current = OrderStatus(order.status)
            if requested not in STATUS_TRANSITIONS[current]:
                raise InvalidOrderStatusTransitionError(order_id, current.value, requested.value)

            self.repo.update_order_status(order_id, requested.value)

        logger.info(f"Order {order_id} status {current.value} -> {requested.value}")
        return self._to_dict(order)

    @staticmethod
    def _to_dict(order: OrderModel) -> Dict[str, Any]:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status,
            "total_amount": order.total_amount,
            "item_count": order.item_count,
            "purchased_at": order.purchased_at,
            "items": [
                {
                    "product_id": i.product_id,
                    "name": i.name,
                    "category": i.category,
                    "material": i.material,
                    "image": i.image,
                    "description": i.description,
                    "old_price": i.old_price,
                    "new_price": i.new_price,
                    "quantity": i.quantity,
                }
                for i in order.items
            ],
        }
