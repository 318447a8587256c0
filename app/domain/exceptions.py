"""
Domain exceptions for the marketplace order service.

Every error carries a human-readable message (shown to the customer) and a
``details`` dict with the ids involved, so routers can map them to status
codes and logs keep the context.
"""


class MarketplaceError(Exception):
    """Base exception for all marketplace errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


# =====================================================
# CART
# =====================================================
class CartError(MarketplaceError):
    """Base exception for cart-related errors."""
    pass


class EmptyCartError(CartError):
    """Raised when the customer has no cart or the cart has no line items."""

    def __init__(self, user_id: int):
        super().__init__("Cart is empty!", details={"user_id": user_id})
        self.user_id = user_id


class CartDeletionError(CartError):
    """Raised when the cart could not be removed after the order was written."""

    def __init__(self, user_id: int):
        super().__init__(
            "Failed to remove cart after order placement",
            details={"user_id": user_id},
        )
        self.user_id = user_id


class CartItemNotFoundError(CartError):
    """Raised when a product is not in the customer's cart."""

    def __init__(self, user_id: int, product_id: int):
        super().__init__(
            f"Product {product_id} is not in the cart",
            details={"user_id": user_id, "product_id": product_id},
        )
        self.user_id = user_id
        self.product_id = product_id


# =====================================================
# PRODUCT / STOCK
# =====================================================
class ProductError(MarketplaceError):
    """Base exception for product-related errors."""
    pass


class ProductNotFoundError(ProductError):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found", details={"product_id": product_id})
        self.product_id = product_id


class ProductUnavailableError(ProductError):
    """Raised when a product is not approved for sale or was invalidated."""

    def __init__(self, product_id: int, status: str):
        super().__init__(
            f"Product {product_id} is not available for purchase",
            details={"product_id": product_id, "status": status},
        )
        self.product_id = product_id
        self.status = status


class InsufficientStockError(ProductError):
    """Raised when a product has fewer units available than requested."""

    def __init__(self, product_id: int, requested: int, available: int, name: str | None = None):
        label = name or f"#{product_id}"
        super().__init__(
            f"Insufficient stock for product: {label} (requested {requested}, available {available})",
            details={"product_id": product_id, "requested": requested, "available": available},
        )
        self.product_id = product_id
        self.name = name
        self.requested = requested
        self.available = available


# =====================================================
# ORDER
# =====================================================
class OrderError(MarketplaceError):
    """Base exception for order-related errors."""
    pass


class OrderNotFoundError(OrderError):
    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found", details={"order_id": order_id})
        self.order_id = order_id


class InvalidOrderStatusTransitionError(OrderError):
    def __init__(self, order_id: int, current: str, requested: str):
        super().__init__(
            f"Order {order_id} cannot move from '{current}' to '{requested}'",
            details={"order_id": order_id, "current": current, "requested": requested},
        )
        self.order_id = order_id
        self.current = current
        self.requested = requested


class TransactionConflictError(OrderError):
    """
    Raised when the storage layer could not commit the unit of work
    (lock timeout, deadlock, serialization failure). Nothing was persisted,
    so the whole call is safe to retry.
    """

    def __init__(self, reason: str):
        super().__init__(
            "Something went wrong while placing the order, please try again",
            details={"reason": reason},
        )
        self.reason = reason
