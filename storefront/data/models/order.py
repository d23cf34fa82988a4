# storefront/data/models/order.py
from sqlalchemy import Column, Integer, ForeignKey, String, DateTime
from datetime import datetime, timezone

from storefront.data.database import Base

ORDER_STATUS_PENDING = "pending"


class OrderModel(Base):
    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    cart_id = Column(String(64), nullable=False, index=True)

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    shipping_address = Column(String, nullable=True)

    status = Column(String, nullable=False, default=ORDER_STATUS_PENDING)
    subtotal = Column(Integer, nullable=False)
    tax_amount = Column(Integer, nullable=False)
    total_amount = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))


class OrderItemModel(Base):
    __tablename__ = "order_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    # cena z chwili zamowienia, nie czytamy jej ponownie z katalogu
    price = Column(Integer, nullable=False)
