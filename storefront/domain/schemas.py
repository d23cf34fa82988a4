# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from storefront.utils.settings import MAX_MONEY_AMOUNT


class ApiModel(BaseModel):
    """JSON w camelCase (cartId, productId), snake_case tez przyjmowany."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CategoryOut(ApiModel):
    id: int
    name: str
    slug: str
    image_url: Optional[str] = None


class ProductOut(ApiModel):
    id: int
    name: str
    slug: str
    description: str
    price: int
    discount_price: Optional[int] = None
    effective_price: int
    image_url: Optional[str] = None
    category_id: int
    stock_level: int
    stock_status: str
    is_new: bool


class CartItemIn(ApiModel):
    """Schema dla dodawania produktu do koszyka. Zakres ilosci sprawdza CartService."""

    cart_id: str = Field(..., min_length=1, max_length=64, description="ID koszyka generowane przez klienta")
    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(1, description="Ilosc, 1..99")


class CartItemUpdate(ApiModel):
    """Ilosc <= 0 usuwa pozycje."""

    quantity: int


class CartItemOut(ApiModel):
    id: int
    cart_id: str
    product_id: int
    quantity: int
    product: ProductOut


class CartSummaryOut(ApiModel):
    cart_id: str
    item_count: int
    subtotal: int
    tax_rate: Decimal
    tax_amount: int
    total: int
    currency: str
    formatted_total: str


class OrderDraft(ApiModel):
    cart_id: str = Field(..., min_length=1, max_length=64)
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_email: str = Field(..., min_length=3, max_length=254)
    customer_phone: str = Field(..., min_length=3, max_length=32)
    shipping_address: Optional[str] = None
    total_amount: Optional[int] = Field(None, ge=0, le=MAX_MONEY_AMOUNT, description="Jesli podane, musi zgadzac sie z wyliczonym")


class OrderItemIn(ApiModel):
    product_id: int = Field(..., gt=0)
    quantity: int
    price: Optional[int] = Field(None, ge=0, le=MAX_MONEY_AMOUNT, description="Cena z koszyka, brak = cena z katalogu w chwili zamowienia")


class OrderCreate(ApiModel):
    order: OrderDraft
    items: List[OrderItemIn]


class OrderItemOut(ApiModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: int
    product: ProductOut


class OrderOut(ApiModel):
    id: int
    cart_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: Optional[str] = None
    status: str
    subtotal: int
    tax_amount: int
    total_amount: int
    created_at: datetime
    items: List[OrderItemOut]
