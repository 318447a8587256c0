from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.orm import Session
from app.data.database import transaction
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.product import ProductStatus
from app.domain.exceptions import CartItemNotFoundError, ProductNotFoundError, ProductUnavailableError
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)

class CartService:
    """
    Prosta implementacja cqrs i proste use case dla domeny cart
    commands (add, change, remove) modyfikuja stan
    query (get) tylko odczyt
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any] | None:
        cart = self.repo.get_cart_by_user(user_id)

        if not cart:
            return None

        items = cart.items
        amount = sum((i.product.new_price * i.quantity for i in items), Decimal("0.00"))

        #dict przyksztalcany w jsona
        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "items": [
                {
                    "product_id": i.product_id,
                    "name": i.product.name,
                    "quantity": i.quantity,
                    "price": i.product.new_price,
                }
                for i in items
            ],
            "amount": amount,
            "item_count": len(items),
        }

    #commands
    def add_item(self, user_id: int, product_id: int, quantity: int = 1) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        with transaction(self.db):
            product = self.products.get_product(product_id)

            if not product:
                raise ProductNotFoundError(product_id)

            if product.status != ProductStatus.APPROVED.value or not product.is_valid:
                raise ProductUnavailableError(product_id, product.status)

            #koszyk tworzony przy pierwszym dodaniu
            cart = self.repo.get_cart_by_user(user_id)
            if not cart:
                cart = self.repo.create_cart(CartModel(user_id=user_id))
                logger.info(f"Utworzono nowy koszyk {cart.id} dla użytkownika {user_id}")

            existing_item = self.repo.get_cart_item(cart.id, product_id)

            if existing_item:
                logger.info(
                    f"Produkt {product_id} już jest w koszyku, zwiekszam ilosc "
                    f"z {existing_item.quantity} do {existing_item.quantity + quantity}"
                )
                existing_item.quantity += quantity
                self.repo.add_cart_item(existing_item)
            else:
                logger.info(f"Dodaje nowy produkt {product_id} do koszyka {cart.id}")
                self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        product_id=product_id,
                        quantity=quantity,
                    )
                )

        return self.get_cart(user_id)

    def change_quantity(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        # quantity <= 0 usuwa pozycje
        if quantity <= 0:
            return self.remove_item(user_id, product_id)

        with transaction(self.db):
            cart = self.repo.get_cart_by_user(user_id)
            item = self.repo.get_cart_item(cart.id, product_id) if cart else None

            if not item:
                raise CartItemNotFoundError(user_id, product_id)

            item.quantity = quantity
            self.repo.add_cart_item(item)

        logger.info(f"Produkt {product_id} w koszyku uzytkownika {user_id}: ilosc {quantity}")
        return self.get_cart(user_id)

    def remove_item(self, user_id: int, product_id: int) -> Dict[str, Any]:
        with transaction(self.db):
            cart = self.repo.get_cart_by_user(user_id)

            if not cart or not self.repo.delete_cart_item(cart.id, product_id):
                raise CartItemNotFoundError(user_id, product_id)

        logger.info(f"Usuwanie produktu {product_id} z koszyka uzytkownika {user_id}")
        return self.get_cart(user_id)
