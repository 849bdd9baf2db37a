# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import PersistenceError
from storefront.domain.schemas import AddItemIn, CartOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(cart_id: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_cart(cart_id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/{cart_id}/items", response_model=CartOut)
def add_item(cart_id: str, payload: AddItemIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_item(
            cart_id=cart_id,
            item_id=payload.id,
            name=payload.name,
            price=payload.price,
            description=payload.description,
            image=payload.image,
            quantity=payload.quantity,
        )
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.delete("/{cart_id}/items/{item_id}", response_model=CartOut)
def remove_item(cart_id: str, item_id: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.remove_item(cart_id, item_id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/{cart_id}/items/{item_id}/increase", response_model=CartOut)
def increase_cart_item(cart_id: str, item_id: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.increase_cart_item(cart_id, item_id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/{cart_id}/items/{item_id}/decrease", response_model=CartOut)
def decrease_cart_item(cart_id: str, item_id: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.decrease_cart_item(cart_id, item_id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
