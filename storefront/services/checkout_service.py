# storefront/services/checkout_service.py
from typing import Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import EmptyCart, InvalidCart
from storefront.domain.schemas import CheckoutSessionOut, PaymentLineItem, RedirectUrls
from storefront.repos.cart_repo import CartRepo
from storefront.services.payment_client import PaymentGateway
from storefront.utils.settings import CURRENCY_CODE, SITE_ORIGIN
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Turns a cart into a payment-provider checkout session.
    Kept apart from CartService: this is the only place with network I/O.
    """

    def __init__(
        self,
        db: Session,
        gateway: PaymentGateway,
        origin: str | None = None,
        currency_code: str = CURRENCY_CODE,
    ):
        self.repo = CartRepo(db)
        self.gateway = gateway
        self.origin = (origin or SITE_ORIGIN).rstrip("/")
        self.currency_code = currency_code

    def redirect_urls(self) -> RedirectUrls:
        # {CHECKOUT_SESSION_ID} is filled in by the provider
        return RedirectUrls(
            success_url=f"{self.origin}/thankyou?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{self.origin}/cart?cancelled=true",
        )

    def to_line_item(self, item: CartItemModel) -> PaymentLineItem:
        return PaymentLineItem(
            quantity=item.quantity,
            unit_amount=item.price,
            currency=self.currency_code,
            product_name=item.name,
            product_description=item.description or None,
            product_images=[item.image] if item.image else [],
        )

    def line_items(self, items: List[CartItemModel]) -> List[PaymentLineItem]:
        return [self.to_line_item(i) for i in items]

    def create_checkout_session(self, cart_id: str) -> Dict[str, str | None]:
        """
        Use Case: start checkout.

        1. cart must exist (no implicit creation here)
        2. cart must have items with a quantity above 0
        3. items -> payment line items
        4. one call to the gateway
        Nothing reaches the gateway until 1-3 pass.
        """
        cart = self.repo.get_cart(cart_id)

        if not cart:
            raise InvalidCart(cart_id)

        # rows decreased to 0 stay in the cart but are not bought
        items = [i for i in cart.items if i.quantity > 0]
        if not items:
            raise EmptyCart(cart_id)

        logger.info(f"Creating checkout session for cart {cart_id} ({len(items)} items)")

        session: CheckoutSessionOut = self.gateway.create_session(
            self.line_items(items),
            self.redirect_urls(),
            {"cartId": cart.id},
        )

        logger.info(f"Checkout session {session.id} created for cart {cart_id}")

        return {"id": session.id, "url": session.url}
