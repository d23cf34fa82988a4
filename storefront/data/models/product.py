# storefront/data/models/product.py
from sqlalchemy import Column, Integer, ForeignKey, String, Text, Boolean, CheckConstraint

from storefront.data.database import Base
from storefront.domain.pricing import effective_price

LOW_STOCK_THRESHOLD = 10


class ProductModel(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint(
            "discount_price IS NULL OR discount_price < price",
            name="ck_product_discount_below_price",
        ),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False, default="")

    # pelne jednostki waluty, bez groszy
    price = Column(Integer, nullable=False)
    discount_price = Column(Integer, nullable=True)

    image_url = Column(String, nullable=True)
    stock_level = Column(Integer, nullable=False, default=25)
    is_new = Column(Boolean, nullable=False, default=False)

    @property
    def effective_price(self) -> int:
        return effective_price(self)

    @property
    def stock_status(self) -> str:
        if not self.stock_level:
            return "Out of Stock"
        if self.stock_level <= LOW_STOCK_THRESHOLD:
            return "Low Stock"
        return "In Stock"
