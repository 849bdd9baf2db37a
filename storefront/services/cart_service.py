# storefront/services/cart_service.py
from typing import Any, Dict, Iterable

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.money import Money
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use cases for the Cart domain.
    Commands (add, remove, increase, decrease) modify state, the query (get)
    only reads. Every command returns the freshly read cart.
    A cart id is never "not found": the first reference creates an empty cart.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    # =====================================================
    # TOTALS
    # =====================================================
    @staticmethod
    def unit_total(item: CartItemModel) -> Money:
        return Money.of(item.price)

    @staticmethod
    def line_total(item: CartItemModel) -> Money:
        return Money.of(item.price * item.quantity)

    @staticmethod
    def sub_total(items: Iterable[CartItemModel]) -> Money:
        return Money.of(sum(i.price * i.quantity for i in items))

    @staticmethod
    def total_items(items: Iterable[CartItemModel]) -> int:
        # rows at quantity 0 count as 0, same as in sub_total
        return sum(i.quantity for i in items)

    # =====================================================
    # QUERY
    # =====================================================
    def get_cart(self, cart_id: str) -> Dict[str, Any]:
        cart = self.repo.find_or_create(cart_id)
        items = list(cart.items)

        return {
            "id": cart.id,
            "items": [
                {
                    "id": i.id,
                    "name": i.name,
                    "description": i.description,
                    "image": i.image,
                    "quantity": i.quantity,
                    "unit_total": self.unit_total(i),
                    "line_total": self.line_total(i),
                }
                for i in items
            ],
            "total_items": self.total_items(items),
            "sub_total": self.sub_total(items),
        }

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_item(
        self,
        cart_id: str,
        item_id: str,
        name: str,
        price: int,
        description: str | None = None,
        image: str | None = None,
        quantity: int | None = None,
    ) -> Dict[str, Any]:
        """
        Use Case: add an item (create-or-merge).

        The first add fixes name/description/image/price. Adding the same item
        id again only accumulates quantity, the new catalog fields are dropped.
        """
        delta = quantity or 1

        logger.info(f"Adding item {item_id} x{delta} to cart {cart_id}")
        self.repo.upsert_item(
            cart_id,
            item_id,
            {
                "name": name,
                "description": description,
                "image": image,
                "price": price,
            },
            quantity_delta=delta,
        )

        return self.get_cart(cart_id)

    def remove_item(self, cart_id: str, item_id: str) -> Dict[str, Any]:
        removed = self.repo.remove_item(cart_id, item_id)
        logger.info(f"Removed item {item_id} from cart {cart_id} (rows: {removed})")
        return self.get_cart(cart_id)

    def increase_cart_item(self, cart_id: str, item_id: str) -> Dict[str, Any]:
        touched = self.repo.adjust_quantity(cart_id, item_id, 1)
        if not touched:
            logger.info(f"Increase skipped, item {item_id} not in cart {cart_id}")
        return self.get_cart(cart_id)

    def decrease_cart_item(self, cart_id: str, item_id: str) -> Dict[str, Any]:
        # quantity may end at 0, the row stays until removed explicitly
        touched = self.repo.adjust_quantity(cart_id, item_id, -1)
        if not touched:
            logger.info(f"Decrease skipped for item {item_id} in cart {cart_id}")
        return self.get_cart(cart_id)
