# storefront/data/models/cart_item.py
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    # (id, cart_id) is the identity, the same item id can live in many carts
    id = Column(String, primary_key=True)
    cart_id = Column(String, ForeignKey("carts.id", ondelete="CASCADE"), primary_key=True)

    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    image = Column(String, nullable=True)

    price = Column(Integer, nullable=False)  # minor units (cents)
    quantity = Column(Integer, nullable=False, default=1)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_cart_items_quantity"),)
