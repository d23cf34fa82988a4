# storefront/client/cart_context.py
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Hashable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from storefront.client.api_client import StorefrontClient
from storefront.client.cart_id_store import CartIdStore
from storefront.domain import pricing
from storefront.domain.errors import StorefrontError, ValidationError
from storefront.domain.schemas import CartItemOut, OrderCreate, OrderDraft, OrderItemIn, OrderOut
from storefront.utils.settings import TAX_RATE, CURRENCY, MAX_ITEM_QUANTITY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"


@dataclass(frozen=True)
class CartError:
    message: str
    code: Optional[str] = None


def _log_notification(notification: Notification) -> None:
    logger.info(f"[{notification.variant}] {notification.title}: {notification.description}")


class CartContext:
    """
    Lokalna kopia koszyka po stronie klienta.

    Po kazdej mutacji (add/update/remove/clear/place_order) zawsze pobiera
    caly koszyk od nowa zamiast latac stan lokalnie, wiec nigdy nie rozjezdza
    sie z serwerem (kosztem dodatkowego requestu).

    Dopoki mutacja trwa, is_loading blokuje kolejne, a is_updating(item_id)
    blokuje ponowne klikniecie na tej samej pozycji. Odrzucona mutacja
    zwraca False. Bledy sa lapane tutaj, trafiaja do `error` i do
    powiadomienia, a flagi zawsze sa zdejmowane w finally.
    """

    def __init__(
        self,
        client: StorefrontClient,
        cart_id_store: CartIdStore | None = None,
        tax_rate: Decimal = TAX_RATE,
        notify: Callable[[Notification], None] = _log_notification,
        currency: str = CURRENCY,
    ):
        self.client = client
        self.cart_id_store = cart_id_store or CartIdStore()
        self.tax_rate = Decimal(str(tax_rate))
        self.notify = notify
        self.currency = currency

        self.cart_id = ""
        self.cart_items: List[CartItemOut] = []
        self.error: Optional[CartError] = None
        self.is_initialized = False
        self.last_order: Optional[OrderOut] = None

        self._guard = threading.Lock()
        self._loading = False
        self._updating: set[Hashable] = set()

    # ---- stan ----
    @property
    def is_loading(self) -> bool:
        return self._loading

    def is_updating(self, item_id: int) -> bool:
        return item_id in self._updating

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.cart_items)

    def reset_error(self) -> None:
        self.error = None

    # ---- ceny, te same reguly co na serwerze ----
    def get_cart_total(self) -> int:
        return pricing.cart_total(self.cart_items)

    def get_tax_amount(self) -> int:
        return pricing.tax_amount(self.get_cart_total(), self.tax_rate)

    def get_final_total(self) -> int:
        return pricing.final_total(self.cart_items, self.tax_rate)

    def format_final_total(self) -> str:
        return pricing.format_money(self.get_final_total(), self.currency)

    # ---- odczyt ----
    def initialize(self) -> None:
        if not self.cart_id:
            self.cart_id = self.cart_id_store.get_or_create()
        self.fetch_cart_items()
        self.is_initialized = True

    def fetch_cart_items(self) -> bool:
        if not self._begin():
            return False
        try:
            self._refresh()
            return True
        except StorefrontError as e:
            self._fail("Failed to fetch cart items", e)
            return False
        finally:
            self._end()

    # ---- mutacje ----
    def add_to_cart(self, product_id: int, quantity: int = 1) -> bool:
        def action():
            self._validate_quantity(quantity)
            self.client.add_cart_item(self.cart_id, product_id, quantity)

        return self._mutate(
            action,
            failure="Failed to add item to cart",
            success=Notification("Added to cart", "Item successfully added to your cart"),
        )

    def update_quantity(self, item_id: int, quantity: int) -> bool:
        if quantity <= 0:
            return self.remove_item(item_id)

        def action():
            self._validate_quantity(quantity)
            self.client.update_cart_item(item_id, quantity)

        return self._mutate(action, failure="Failed to update item quantity", item_id=item_id)

    def remove_item(self, item_id: int) -> bool:
        return self._mutate(
            lambda: self.client.remove_cart_item(item_id),
            failure="Failed to remove item from cart",
            success=Notification("Removed from cart", "Item successfully removed from your cart"),
            item_id=item_id,
        )

    def clear_cart(self) -> bool:
        return self._mutate(
            lambda: self.client.clear_cart(self.cart_id),
            failure="Failed to clear cart",
        )

    def place_order(
        self,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
        shipping_address: str | None = None,
    ) -> Optional[OrderOut]:
        """
        Checkout: wysyla pozycje z zamrozonymi cenami i total policzony lokalnie,
        serwer odrzuci zamowienie jesli total sie nie zgadza.

        Zamowienie przyjete przez serwer jest zawsze zwracane, nawet gdy
        pozniejsze odswiezenie koszyka sie nie uda. Koszyk jest wtedy
        czyszczony lokalnie (serwer wyczyscil go w tej samej transakcji),
        zeby ponowny checkout nie wyslal tych samych pozycji drugi raz.
        """
        if not self._begin():
            logger.info("Checkout ignored, another cart mutation is still in flight")
            return None
        self.last_order = None
        try:
            try:
                if not self.cart_items:
                    raise ValidationError("Cart is empty")
                try:
                    payload = self._order_payload(customer_name, customer_email, customer_phone, shipping_address)
                except PydanticValidationError as e:
                    raise ValidationError(f"Invalid order details: {e}") from e
                order = self.client.create_order(payload)
            except StorefrontError as e:
                self._fail("Failed to place order", e)
                return None

            self.last_order = order
            self.cart_items = []
            try:
                self._refresh()
            except StorefrontError as e:
                self._fail(f"Order {order.id} placed, but the cart could not be refreshed", e)
        finally:
            self._end()

        self.notify(Notification("Order placed", "Your order has been received"))
        return order

    def _order_payload(self, customer_name, customer_email, customer_phone, shipping_address) -> OrderCreate:
        return OrderCreate(
            order=OrderDraft(
                cart_id=self.cart_id,
                customer_name=customer_name,
                customer_email=customer_email,
                customer_phone=customer_phone,
                shipping_address=shipping_address,
                total_amount=self.get_final_total(),
            ),
            items=[
                OrderItemIn(
                    product_id=i.product_id,
                    quantity=i.quantity,
                    price=pricing.effective_price(i.product),
                )
                for i in self.cart_items
            ],
        )

    # ---- wewnetrzne ----
    @staticmethod
    def _validate_quantity(quantity: int) -> None:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        if quantity > MAX_ITEM_QUANTITY:
            raise ValidationError(f"Quantity cannot exceed {MAX_ITEM_QUANTITY}")

    def _begin(self, item_id: Hashable | None = None) -> bool:
        with self._guard:
            if self._loading or (item_id is not None and item_id in self._updating):
                return False
            self._loading = True
            if item_id is not None:
                self._updating.add(item_id)
            return True

    def _end(self, item_id: Hashable | None = None) -> None:
        with self._guard:
            self._loading = False
            self._updating.discard(item_id)

    def _refresh(self) -> None:
        self.cart_items = self.client.get_cart_items(self.cart_id)

    def _fail(self, description: str, error: StorefrontError) -> None:
        logger.warning(f"{description}: {error}")
        self.error = CartError(message=str(error), code=error.code)
        self.notify(Notification("Error", description, "destructive"))

    def _mutate(
        self,
        action: Callable[[], None],
        failure: str,
        success: Notification | None = None,
        item_id: int | None = None,
    ) -> bool:
        if not self._begin(item_id):
            logger.info("Cart mutation ignored, another one is still in flight")
            return False
        try:
            action()
            self._refresh()
        except StorefrontError as e:
            self._fail(failure, e)
            return False
        finally:
            self._end(item_id)

        if success:
            self.notify(success)
        return True
