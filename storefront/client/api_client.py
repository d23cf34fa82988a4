# storefront/client/api_client.py
from typing import Any, List, Optional
from urllib.parse import quote

import requests
from requests import RequestException

from storefront.domain.errors import StorefrontError, TransientError
from storefront.domain.schemas import CartItemOut, CartSummaryOut, OrderCreate, OrderOut, ProductOut
from storefront.utils.retry import http_retry
from storefront.utils.settings import STOREFRONT_API_URL, HTTP_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# odpowiedzi bramki/przeciazenia traktujemy jak blad sieci
_TRANSIENT_STATUSES = {502, 503, 504}


class ApiError(StorefrontError):
    code = "API_ERROR"

    def __init__(self, status_code: int, message: str, code: str | None = None):
        super().__init__(message, code)
        self.status_code = status_code

    @classmethod
    def from_response(cls, resp) -> "ApiError":
        try:
            detail = resp.json().get("detail")
        except ValueError:
            detail = None
        if isinstance(detail, dict):
            return cls(resp.status_code, detail.get("message", ""), detail.get("code"))
        return cls(resp.status_code, str(detail or resp.text or resp.status_code))


class StorefrontClient:
    """
    Klient HTTP API sklepu. Odczyty (GET) sa ponawiane przez tenacity,
    mutacje nie, zeby nie dodac produktu dwa razy po timeoucie.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        session: Any = None,
    ):
        self.base_url = (base_url or STOREFRONT_API_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.info(f"StorefrontClient {method} {url}")

        try:
            resp = self.session.request(method, url, json=json, timeout=self.timeout)
        except RequestException as e:
            raise TransientError(f"{method} {path} failed: {e}") from e

        if resp.status_code in _TRANSIENT_STATUSES:
            raise TransientError(f"{method} {path} returned {resp.status_code}")
        if resp.status_code >= 400:
            raise ApiError.from_response(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    @http_retry()
    def list_products(self) -> List[ProductOut]:
        return [ProductOut.model_validate(p) for p in self._request("GET", "/api/products")]

    @http_retry()
    def get_cart_items(self, cart_id: str) -> List[CartItemOut]:
        data = self._request("GET", f"/api/cart/{quote(cart_id, safe='')}")
        return [CartItemOut.model_validate(i) for i in data]

    @http_retry()
    def get_cart_summary(self, cart_id: str) -> CartSummaryOut:
        data = self._request("GET", f"/api/cart/{quote(cart_id, safe='')}/summary")
        return CartSummaryOut.model_validate(data)

    def add_cart_item(self, cart_id: str, product_id: int, quantity: int = 1) -> CartItemOut:
        data = self._request(
            "POST",
            "/api/cart",
            json={"cartId": cart_id, "productId": product_id, "quantity": quantity},
        )
        return CartItemOut.model_validate(data)

    def update_cart_item(self, item_id: int, quantity: int) -> Optional[CartItemOut]:
        data = self._request("PUT", f"/api/cart/{item_id}", json={"quantity": quantity})
        return CartItemOut.model_validate(data) if data else None

    def remove_cart_item(self, item_id: int) -> None:
        self._request("DELETE", f"/api/cart/{item_id}")

    def clear_cart(self, cart_id: str) -> None:
        self._request("DELETE", f"/api/cart/clear/{quote(cart_id, safe='')}")

    def create_order(self, payload: OrderCreate) -> OrderOut:
        data = self._request(
            "POST",
            "/api/orders",
            json=payload.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return OrderOut.model_validate(data)

    @http_retry()
    def get_order(self, order_id: int) -> Optional[OrderOut]:
        try:
            data = self._request("GET", f"/api/orders/{order_id}")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise
        return OrderOut.model_validate(data)
