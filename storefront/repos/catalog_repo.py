# storefront/repos/catalog_repo.py
from typing import Iterable

from sqlalchemy import select, or_, func
from sqlalchemy.orm import Session

from storefront.data.models import CategoryModel, ProductModel
from storefront.domain.errors import IntegrityError

FEATURED_LIMIT = 8


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.id)).scalars())

    def get_category_by_slug(self, slug: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        ).scalar_one_or_none()

    def list_products(self) -> list[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_product_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.slug == slug)
        ).scalar_one_or_none()

    def get_products_by_category(self, category_id: int) -> list[ProductModel]:
        return list(self.db.execute(
            select(ProductModel)
            .where(ProductModel.category_id == category_id)
            .order_by(ProductModel.id)
        ).scalars())

    def search_products(self, query: str) -> list[ProductModel]:
        pattern = f"%{query.lower()}%"
        return list(self.db.execute(
            select(ProductModel)
            .where(or_(
                func.lower(ProductModel.name).like(pattern),
                func.lower(ProductModel.description).like(pattern),
            ))
            .order_by(ProductModel.id)
        ).scalars())

    def get_featured_products(self) -> list[ProductModel]:
        return list(self.db.execute(
            select(ProductModel)
            .where(ProductModel.discount_price.is_not(None))
            .order_by(ProductModel.id)
            .limit(FEATURED_LIMIT)
        ).scalars())

    def get_new_products(self) -> list[ProductModel]:
        return list(self.db.execute(
            select(ProductModel)
            .where(ProductModel.is_new.is_(True))
            .order_by(ProductModel.id)
            .limit(FEATURED_LIMIT)
        ).scalars())

    def require_products(self, product_ids: Iterable[int]) -> dict[int, ProductModel]:
        """
        Jawny join pozycji z katalogiem. Brak produktu to IntegrityError,
        nie cicha dziura w odpowiedzi.
        """
        ids = set(product_ids)
        if not ids:
            return {}
        found = {
            p.id: p
            for p in self.db.execute(
                select(ProductModel).where(ProductModel.id.in_(ids))
            ).scalars()
        }
        missing = sorted(ids - found.keys())
        if missing:
            raise IntegrityError(f"Product {missing[0]} not found in catalog")
        return found
