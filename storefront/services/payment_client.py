# storefront/services/payment_client.py
from typing import Any, Dict, List, Protocol
from uuid import uuid4

import stripe

from storefront.domain.errors import GatewayError
from storefront.domain.schemas import CheckoutSessionOut, PaymentLineItem, RedirectUrls
from storefront.utils.retry import http_retry
from storefront.utils.settings import PAYMENT_MAX_ATTEMPTS, STRIPE_API_URL, STRIPE_SECRET_KEY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# lets a local stripe-mock stand in for the real API
stripe.api_base = STRIPE_API_URL.rstrip("/")


class PaymentGateway(Protocol):
    def create_session(
        self,
        line_items: List[PaymentLineItem],
        redirect_urls: RedirectUrls,
        metadata: Dict[str, str],
    ) -> CheckoutSessionOut: ...


def is_transient(exc: BaseException) -> bool:
    # network trouble or a 5xx is worth another attempt, a 4xx is a final answer
    if isinstance(exc, stripe.APIConnectionError):
        return True
    return isinstance(exc, stripe.StripeError) and (exc.http_status or 0) >= 500


def to_stripe_line_item(item: PaymentLineItem) -> Dict[str, Any]:
    product_data: Dict[str, Any] = {
        "name": item.product_name,
        "images": list(item.product_images),
    }
    if item.product_description:
        product_data["description"] = item.product_description

    return {
        "quantity": item.quantity,
        "price_data": {
            "currency": item.currency.lower(),
            "unit_amount": item.unit_amount,
            "product_data": product_data,
        },
    }


class StripeClient:
    """Stripe Checkout through the official SDK."""

    def __init__(self, secret_key: str | None = None, max_attempts: int | None = None):
        self.secret_key = secret_key if secret_key is not None else STRIPE_SECRET_KEY
        # retry is opt-in; the idempotency key makes repeated creates safe
        self._create = http_retry(max_attempts or PAYMENT_MAX_ATTEMPTS, is_transient)(self._send)

    def _send(self, **params):
        logger.info("StripeClient checkout.Session.create")
        return stripe.checkout.Session.create(api_key=self.secret_key, **params)

    def create_session(
        self,
        line_items: List[PaymentLineItem],
        redirect_urls: RedirectUrls,
        metadata: Dict[str, str],
    ) -> CheckoutSessionOut:
        if not self.secret_key:
            raise GatewayError("Stripe secret key is not configured")

        try:
            session = self._create(
                mode="payment",
                success_url=redirect_urls.success_url,
                cancel_url=redirect_urls.cancel_url,
                line_items=[to_stripe_line_item(i) for i in line_items],
                metadata=metadata,
                idempotency_key=uuid4().hex,
            )
        except stripe.StripeError as e:
            message = e.user_message or str(e)
            logger.error(f"Stripe checkout session failed ({e.http_status}): {message}")
            raise GatewayError(message, status_code=e.http_status) from e

        return CheckoutSessionOut(id=session.id, url=session.url)
