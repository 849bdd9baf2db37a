# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List

from storefront.domain.money import Money


class AddItemIn(BaseModel):
    """Schema for adding an item to a cart (cart id comes from the path)."""

    id: str = Field(..., min_length=1, description="Item id, unique within the cart")
    name: str = Field(..., min_length=1, description="Display name")
    description: str | None = None
    image: str | None = None
    price: int = Field(..., ge=0, description="Unit price in minor units (cents)")
    quantity: int | None = Field(default=1, gt=0, description="Quantity to add (defaults to 1)")


class CartItemOut(BaseModel):
    """Line item in a cart (response)."""

    id: str
    name: str
    description: str | None = None
    image: str | None = None
    quantity: int
    unit_total: Money
    line_total: Money


class CartOut(BaseModel):
    """Cart with derived totals (response)."""

    id: str
    items: List[CartItemOut]
    total_items: int
    sub_total: Money

    model_config = ConfigDict(from_attributes=True)


class CheckoutSessionIn(BaseModel):
    cart_id: str = Field(..., min_length=1)


class CheckoutSessionOut(BaseModel):
    id: str
    url: str | None = None


class PaymentLineItem(BaseModel):
    """One cart item as the payment provider sees it."""

    quantity: int
    unit_amount: int
    currency: str
    product_name: str
    product_description: str | None = None
    product_images: List[str] = Field(default_factory=list)


class RedirectUrls(BaseModel):
    success_url: str
    cancel_url: str
