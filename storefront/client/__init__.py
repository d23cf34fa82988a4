from storefront.client.api_client import ApiError, StorefrontClient
from storefront.client.cart_context import CartContext, CartError, Notification
from storefront.client.cart_id_store import CartIdStore

__all__ = ["ApiError", "StorefrontClient", "CartContext", "CartError", "Notification", "CartIdStore"]
