# storefront/domain/errors.py


class CartError(Exception):
    """Base class for cart and checkout failures."""


class InvalidCart(CartError):
    def __init__(self, cart_id: str):
        super().__init__(f"Invalid cart: {cart_id}")
        self.cart_id = cart_id


class EmptyCart(CartError):
    def __init__(self, cart_id: str):
        super().__init__(f"Cart is empty: {cart_id}")
        self.cart_id = cart_id


class PersistenceError(CartError):
    """Store operation failed (connectivity, constraint violation, unsupported dialect)."""


class GatewayError(CartError):
    """Payment provider call failed or was refused."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
