# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.errors import to_http
from storefront.data.database import get_db, get_store
from storefront.domain.errors import StorefrontError, NotFoundError
from storefront.domain.schemas import OrderCreate, OrderOut
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session = Depends(get_db), store=Depends(get_store)):
    return OrderService(db, lock_service=store.lock_service, tax_rate=store.tax_rate)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(payload: OrderCreate, svc: OrderService = Depends(get_service)):
    """
    Tworzy zamowienie z pozycji koszyka i czysci koszyk.
    """
    try:
        return svc.create_order(payload.order, payload.items)
    except StorefrontError as e:
        raise to_http(e)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, svc: OrderService = Depends(get_service)):
    """
    Pobiera zamowienie z pozycjami i produktami.
    """
    try:
        order = svc.get_order(order_id)
    except StorefrontError as e:
        raise to_http(e)
    if order is None:
        raise to_http(NotFoundError(f"Order {order_id} not found"))
    return order
