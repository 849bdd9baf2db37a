# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import EmptyCart, GatewayError, InvalidCart, PersistenceError
from storefront.domain.schemas import CheckoutSessionIn, CheckoutSessionOut
from storefront.services.checkout_service import CheckoutService
from storefront.services.payment_client import PaymentGateway, StripeClient

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_gateway() -> PaymentGateway:
    return StripeClient()


@router.post("/sessions", response_model=CheckoutSessionOut)
def create_checkout_session(
    payload: CheckoutSessionIn,
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_gateway),
):
    """
    Creates a payment-provider checkout session for the cart.
    """
    svc = CheckoutService(db=db, gateway=gateway)
    try:
        return svc.create_checkout_session(payload.cart_id)
    except InvalidCart as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EmptyCart as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GatewayError as e:
        # no provider status means it was never reached
        status_code = 503 if e.status_code is None else 502
        raise HTTPException(status_code=status_code, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
