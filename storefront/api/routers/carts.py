# storefront/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.errors import to_http
from storefront.data.database import get_db, get_store
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    CartItemIn,
    CartItemUpdate,
    CartItemOut,
    CartSummaryOut,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session = Depends(get_db), store=Depends(get_store)):
    return CartService(
        db=db,
        lock_service=store.lock_service,
        tax_rate=store.tax_rate,
    )


@router.get("/{cart_id}", response_model=List[CartItemOut])
def get_cart_items(cart_id: str, svc: CartService = Depends(get_service)):
    try:
        return svc.get_cart_items(cart_id)
    except StorefrontError as e:
        raise to_http(e)


@router.get("/{cart_id}/summary", response_model=CartSummaryOut)
def get_cart_summary(cart_id: str, svc: CartService = Depends(get_service)):
    try:
        return svc.get_cart_summary(cart_id)
    except StorefrontError as e:
        raise to_http(e)


@router.post("", response_model=CartItemOut, status_code=201)
def add_item(payload: CartItemIn, svc: CartService = Depends(get_service)):
    try:
        return svc.add_item(
            cart_id=payload.cart_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except StorefrontError as e:
        raise to_http(e)


@router.put("/{item_id}", response_model=CartItemOut)
def update_item(item_id: int, payload: CartItemUpdate, svc: CartService = Depends(get_service)):
    try:
        item = svc.update_quantity(item_id, payload.quantity)
    except StorefrontError as e:
        raise to_http(e)
    if item is None:
        # ilosc <= 0, pozycja usunieta
        return Response(status_code=204)
    return item


# przed /{item_id}, zeby "clear" nie wpadlo w sciezke pozycji
@router.delete("/clear/{cart_id}", status_code=204)
def clear_cart(cart_id: str, svc: CartService = Depends(get_service)):
    try:
        svc.clear_cart(cart_id)
    except StorefrontError as e:
        raise to_http(e)
    return Response(status_code=204)


@router.delete("/{item_id}", status_code=204)
def remove_item(item_id: int, svc: CartService = Depends(get_service)):
    try:
        svc.remove_item(item_id)
    except StorefrontError as e:
        raise to_http(e)
    return Response(status_code=204)
