"""
Tests for the Stripe client

stripe.checkout.Session.create is patched, nothing leaves the process.
"""
from types import SimpleNamespace
from unittest.mock import patch

import pytest
import stripe

from storefront.domain.errors import GatewayError
from storefront.domain.schemas import PaymentLineItem, RedirectUrls
from storefront.services.payment_client import StripeClient, is_transient, to_stripe_line_item

CREATE = "stripe.checkout.Session.create"

REDIRECTS = RedirectUrls(
    success_url="https://shop.example/thankyou?session_id={CHECKOUT_SESSION_ID}",
    cancel_url="https://shop.example/cart?cancelled=true",
)

MUG = PaymentLineItem(
    quantity=2,
    unit_amount=500,
    currency="USD",
    product_name="Mug",
    product_description="Blue mug",
    product_images=["https://img/mug.png"],
)
POSTER = PaymentLineItem(quantity=1, unit_amount=1200, currency="USD", product_name="Poster")


class TestLineItems:
    def test_nests_price_and_product_data(self):
        assert to_stripe_line_item(MUG) == {
            "quantity": 2,
            "price_data": {
                "currency": "usd",
                "unit_amount": 500,
                "product_data": {
                    "name": "Mug",
                    "description": "Blue mug",
                    "images": ["https://img/mug.png"],
                },
            },
        }

    def test_omits_missing_description(self):
        product = to_stripe_line_item(POSTER)["price_data"]["product_data"]

        assert "description" not in product
        assert product["images"] == []


class TestTransientErrors:
    def test_connection_and_server_errors_are_transient(self):
        assert is_transient(stripe.APIConnectionError("refused"))
        assert is_transient(stripe.APIError("boom", http_status=503))

    def test_client_errors_are_final(self):
        assert not is_transient(stripe.InvalidRequestError("bad", "currency", http_status=400))
        assert not is_transient(ValueError("not stripe"))


class TestStripeClient:
    def test_creates_session(self):
        client = StripeClient(secret_key="sk_test")
        created = SimpleNamespace(id="cs_1", url="https://checkout.stripe.test/cs_1")

        with patch(CREATE, return_value=created) as create:
            session = client.create_session([MUG, POSTER], REDIRECTS, {"cartId": "c1"})

        assert session.id == "cs_1"
        assert session.url == "https://checkout.stripe.test/cs_1"
        kwargs = create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test"
        assert kwargs["mode"] == "payment"
        assert kwargs["success_url"] == REDIRECTS.success_url
        assert kwargs["cancel_url"] == REDIRECTS.cancel_url
        assert kwargs["metadata"] == {"cartId": "c1"}
        assert kwargs["idempotency_key"]
        assert [li["price_data"]["product_data"]["name"] for li in kwargs["line_items"]] == ["Mug", "Poster"]

    def test_session_without_url(self):
        client = StripeClient(secret_key="sk_test")

        with patch(CREATE, return_value=SimpleNamespace(id="cs_1", url=None)):
            session = client.create_session([MUG], REDIRECTS, {"cartId": "c1"})

        assert session.url is None

    def test_missing_secret_key_fails_before_network(self):
        client = StripeClient(secret_key="")

        with patch(CREATE) as create:
            with pytest.raises(GatewayError):
                client.create_session([MUG], REDIRECTS, {"cartId": "c1"})

        create.assert_not_called()

    def test_client_error_is_not_retried(self):
        client = StripeClient(secret_key="sk_test", max_attempts=3)
        refused = stripe.InvalidRequestError("Invalid currency", "currency", http_status=400)

        with patch(CREATE, side_effect=refused) as create:
            with pytest.raises(GatewayError, match="Invalid currency") as exc:
                client.create_session([MUG], REDIRECTS, {"cartId": "c1"})

        assert exc.value.status_code == 400
        assert create.call_count == 1

    def test_connection_error_becomes_gateway_error(self):
        client = StripeClient(secret_key="sk_test", max_attempts=1)

        with patch(CREATE, side_effect=stripe.APIConnectionError("refused")) as create:
            with pytest.raises(GatewayError) as exc:
                client.create_session([MUG], REDIRECTS, {"cartId": "c1"})

        assert exc.value.status_code is None
        assert create.call_count == 1

    def test_server_error_is_retried_with_same_idempotency_key(self):
        client = StripeClient(secret_key="sk_test", max_attempts=2)
        created = SimpleNamespace(id="cs_2", url=None)

        with patch(CREATE, side_effect=[stripe.APIError("boom", http_status=503), created]) as create:
            session = client.create_session([MUG], REDIRECTS, {"cartId": "c1"})

        assert session.id == "cs_2"
        assert create.call_count == 2
        keys = {c.kwargs["idempotency_key"] for c in create.call_args_list}
        assert len(keys) == 1
