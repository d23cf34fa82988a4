# storefront/data/models/cart_item.py
from sqlalchemy import Column, Integer, ForeignKey, String, UniqueConstraint

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="u_cart_product"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)
    # cart_id generuje klient (uuid), serwer nie trzyma osobnej tabeli koszykow
    cart_id = Column(String(64), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
