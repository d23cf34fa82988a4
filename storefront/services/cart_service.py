# storefront/services/cart_service.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from storefront.data.models import CartItemModel, ProductModel
from storefront.domain import pricing
from storefront.domain.errors import ValidationError, NotFoundError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.catalog_repo import CatalogRepo
from storefront.utils.settings import MAX_ITEM_QUANTITY, CURRENCY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CartLine:
    """Pozycja koszyka zlaczona z aktualnym produktem z katalogu."""

    item: CartItemModel
    product: ProductModel

    @property
    def quantity(self) -> int:
        return self.item.quantity


def validate_quantity(quantity: int) -> None:
    if quantity < 1 or quantity > MAX_ITEM_QUANTITY:
        raise ValidationError(f"Quantity must be between 1 and {MAX_ITEM_QUANTITY}, got {quantity}")


class CartService:
    """
    Use case'y dla koszyka.
    commands (add, update, remove, clear) zmieniaja stan i od razu commituja,
    query (get, summary) tylko odczyt, ceny zawsze z aktualnego katalogu
    """

    def __init__(self, db: Session, lock_service, tax_rate: Decimal):
        self.repo = CartRepo(db)
        self.catalog = CatalogRepo(db)
        self.lock_service = lock_service
        self.tax_rate = tax_rate

    #query - odczyt
    def get_lines(self, cart_id: str) -> List[CartLine]:
        items = self.repo.list_items(cart_id)
        products = self.catalog.require_products(i.product_id for i in items)
        return [CartLine(item=i, product=products[i.product_id]) for i in items]

    def get_cart_items(self, cart_id: str) -> List[Dict[str, Any]]:
        return [self._serialize(line) for line in self.get_lines(cart_id)]

    def get_cart_summary(self, cart_id: str) -> Dict[str, Any]:
        totals = pricing.summarize(self.get_lines(cart_id), self.tax_rate)
        return {
            "cart_id": cart_id,
            "item_count": totals.item_count,
            "subtotal": totals.subtotal,
            "tax_rate": self.tax_rate,
            "tax_amount": totals.tax,
            "total": totals.total,
            "currency": CURRENCY,
            "formatted_total": pricing.format_money(totals.total, CURRENCY),
        }

    #commands
    def add_item(self, cart_id: str, product_id: int, quantity: int = 1) -> Dict[str, Any]:
        validate_quantity(quantity)
        if not cart_id:
            raise ValidationError("cart_id is required")

        product = self.catalog.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")

        with self.lock_service.cart_lock(cart_id):
            existing = self.repo.find_item(cart_id, product_id)

            if existing:
                merged = existing.quantity + quantity
                validate_quantity(merged)
                logger.info(
                    f"Product {product_id} already in cart {cart_id}, "
                    f"quantity {existing.quantity} -> {merged}"
                )
                existing.quantity = merged
                item = existing
            else:
                logger.info(f"Adding product {product_id} to cart {cart_id}")
                item = self.repo.add_item(
                    CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity)
                )

            self.repo.commit()

        return self._serialize(CartLine(item=item, product=product))

    def update_quantity(self, item_id: int, quantity: int) -> Dict[str, Any] | None:
        # ilosc <= 0 to usuniecie pozycji, nigdy wiersz z zerowa iloscia
        if quantity <= 0:
            self.remove_item(item_id)
            return None

        item = self.repo.get_item(item_id)
        if not item:
            raise NotFoundError(f"Cart item {item_id} not found")

        validate_quantity(quantity)

        with self.lock_service.cart_lock(item.cart_id):
            logger.info(f"Cart item {item_id} quantity {item.quantity} -> {quantity}")
            item.quantity = quantity
            self.repo.commit()

        products = self.catalog.require_products([item.product_id])
        return self._serialize(CartLine(item=item, product=products[item.product_id]))

    def remove_item(self, item_id: int) -> None:
        item = self.repo.get_item(item_id)
        if not item:
            logger.info(f"Cart item {item_id} already absent, nothing to remove")
            return

        with self.lock_service.cart_lock(item.cart_id):
            self.repo.delete_item(item)
            self.repo.commit()

        logger.info(f"Cart item {item_id} removed from cart {item.cart_id}")

    def clear_cart(self, cart_id: str) -> int:
        with self.lock_service.cart_lock(cart_id):
            removed = self.repo.delete_cart_items(cart_id)
            self.repo.commit()

        logger.info(f"Cart {cart_id} cleared, {removed} items removed")
        return removed

    @staticmethod
    def _serialize(line: CartLine) -> Dict[str, Any]:
        #dict przeksztalcany w jsona przez response_model
        return {
            "id": line.item.id,
            "cart_id": line.item.cart_id,
            "product_id": line.item.product_id,
            "quantity": line.item.quantity,
            "product": line.product,
        }
