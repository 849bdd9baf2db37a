# storefront/repos/cart_repo.py
from typing import Any, Dict, List

from sqlalchemy import select, update, delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import PersistenceError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# dialects with a native INSERT ... ON CONFLICT
_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepo:
    """
    Cart/CartItem storage. Every quantity change is a single statement
    (upsert or conditional update), the session is committed per write.
    """

    def __init__(self, db: Session):
        self.db = db

    def _insert(self, model):
        dialect = self.db.get_bind().dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            raise PersistenceError(f"Atomic upsert not supported for dialect {dialect}")
        return insert(model)

    def _write(self, stmt):
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Cart store write failed: {e}")
            raise PersistenceError(str(e)) from e
        # reads after a write must not be served from the identity map
        self.db.expire_all()
        return result

    def _read(self, stmt):
        try:
            return self.db.execute(stmt)
        except SQLAlchemyError as e:
            # a failed statement aborts the transaction, the session must be reset
            self.db.rollback()
            logger.error(f"Cart store read failed: {e}")
            raise PersistenceError(str(e)) from e

    def _ensure_cart(self, cart_id: str) -> None:
        stmt = self._insert(CartModel).values(id=cart_id).on_conflict_do_nothing(
            index_elements=[CartModel.id]
        )
        self._write(stmt)

    def get_cart(self, cart_id: str) -> CartModel | None:
        return self._read(
            select(CartModel)
            .where(CartModel.id == cart_id)
            .options(selectinload(CartModel.items))
        ).scalar_one_or_none()

    def find_or_create(self, cart_id: str) -> CartModel:
        self._ensure_cart(cart_id)
        return self.get_cart(cart_id)

    def list_items(self, cart_id: str) -> List[CartItemModel]:
        return list(
            self._read(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def upsert_item(
        self,
        cart_id: str,
        item_id: str,
        fields: Dict[str, Any],
        quantity_delta: int = 1,
    ) -> None:
        """
        Insert the item with quantity=quantity_delta, or add quantity_delta to
        the existing row. Catalog fields of an existing row are left as they are.
        """
        self._ensure_cart(cart_id)

        stmt = self._insert(CartItemModel).values(
            id=item_id,
            cart_id=cart_id,
            name=fields["name"],
            description=fields.get("description"),
            image=fields.get("image"),
            price=fields["price"],
            quantity=quantity_delta,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[CartItemModel.id, CartItemModel.cart_id],
            set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
        )
        self._write(stmt)

    def remove_item(self, cart_id: str, item_id: str) -> int:
        result = self._write(
            delete(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.id == item_id,
            )
        )
        return result.rowcount

    def adjust_quantity(self, cart_id: str, item_id: str, delta: int) -> int:
        """
        quantity += delta as one conditional UPDATE. A negative delta only hits
        rows holding at least -delta, so the quantity cannot drop below zero.
        Returns the number of rows touched (0 when the item is missing).
        """
        conditions = [
            CartItemModel.cart_id == cart_id,
            CartItemModel.id == item_id,
        ]
        if delta < 0:
            conditions.append(CartItemModel.quantity >= -delta)

        result = self._write(
            update(CartItemModel)
            .where(*conditions)
            .values(quantity=CartItemModel.quantity + delta)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
