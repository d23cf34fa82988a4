# storefront/services/order_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Any, List, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models import OrderModel, OrderItemModel, ProductModel
from storefront.data.models.order import ORDER_STATUS_PENDING
from storefront.domain import pricing
from storefront.domain.errors import ValidationError
from storefront.domain.schemas import OrderDraft, OrderItemIn
from storefront.repos.cart_repo import CartRepo
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import validate_quantity
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import CURRENCY, MAX_MONEY_AMOUNT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Przejscie koszyk -> zamowienie w jednej transakcji.
    """

    def __init__(self, db: Session, lock_service, tax_rate: Decimal):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.catalog = CatalogRepo(db)
        self.lock_service = lock_service
        self.tax_rate = tax_rate
        self.notification_service = NotificationService()

    def create_order(self, draft: OrderDraft, items: List[OrderItemIn]) -> Dict[str, Any]:
        """
        Use Case: Tworzenie zamowienia z koszyka.

        1. Waliduje pozycje i laczy je z katalogiem
        2. Zamraza ceny (cena z koszyka albo aktualna cena efektywna)
        3. Liczy subtotal / podatek / total
        4. W jednej transakcji: zamowienie + pozycje + czyszczenie koszyka
        5. Wysyla powiadomienie (celery)
        """
        if not items:
            raise ValidationError("Order must contain at least one item")
        for item in items:
            validate_quantity(item.quantity)

        products = self.catalog.require_products(i.product_id for i in items)

        # snapshot ceny w chwili zamowienia
        snapshot = [
            (
                item,
                item.price if item.price is not None else pricing.effective_price(products[item.product_id]),
            )
            for item in items
        ]

        subtotal = sum(pricing.line_total(price, item.quantity) for item, price in snapshot)
        tax = pricing.tax_amount(subtotal, self.tax_rate)
        total = subtotal + tax

        if total > MAX_MONEY_AMOUNT or any(price > MAX_MONEY_AMOUNT for _, price in snapshot):
            raise ValidationError(f"Order amounts cannot exceed {MAX_MONEY_AMOUNT}")

        if draft.total_amount is not None and draft.total_amount != total:
            raise ValidationError(
                f"Order total {draft.total_amount} does not match computed total {total}"
            )

        with self.lock_service.cart_lock(draft.cart_id):
            try:
                order = self.repo.create_order(
                    OrderModel(
                        cart_id=draft.cart_id,
                        customer_name=draft.customer_name,
                        customer_email=draft.customer_email,
                        customer_phone=draft.customer_phone,
                        shipping_address=draft.shipping_address,
                        status=ORDER_STATUS_PENDING,
                        subtotal=subtotal,
                        tax_amount=tax,
                        total_amount=total,
                        created_at=datetime.now(timezone.utc),
                    )
                )
                order_items = [
                    self.repo.add_order_item(
                        OrderItemModel(
                            order_id=order.id,
                            product_id=item.product_id,
                            quantity=item.quantity,
                            price=price,
                        )
                    )
                    for item, price in snapshot
                ]
                cleared = self.cart_repo.delete_cart_items(draft.cart_id)
                self.repo.commit()
            except SQLAlchemyError as e:
                self.repo.rollback()
                logger.error(f"Order creation for cart {draft.cart_id} rolled back: {e}")
                raise

        logger.info(
            f"Order {order.id} created from cart {draft.cart_id}: "
            f"{len(order_items)} items, total {total}, {cleared} cart rows cleared"
        )

        self.notification_service.send_order_notification(
            order.id, order.customer_email, pricing.format_money(total, CURRENCY)
        )

        return self._serialize(order, order_items, products)

    def get_order(self, order_id: int) -> Dict[str, Any] | None:
        """
        Use Case: Pobranie zamowienia (Query). None gdy nie istnieje.
        """
        order = self.repo.get_order(order_id)

        if not order:
            return None

        order_items = self.repo.list_order_items(order_id)
        products = self.catalog.require_products(i.product_id for i in order_items)

        return self._serialize(order, order_items, products)

    @staticmethod
    def _serialize(
        order: OrderModel,
        order_items: Iterable[OrderItemModel],
        products: Dict[int, ProductModel],
    ) -> Dict[str, Any]:
        return {
            "id": order.id,
            "cart_id": order.cart_id,
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "customer_phone": order.customer_phone,
            "shipping_address": order.shipping_address,
            "status": order.status,
            "subtotal": order.subtotal,
            "tax_amount": order.tax_amount,
            "total_amount": order.total_amount,
            "created_at": order.created_at,
            "items": [
                {
                    "id": i.id,
                    "order_id": i.order_id,
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "price": i.price,
                    "product": products[i.product_id],
                }
                for i in order_items
            ],
        }
