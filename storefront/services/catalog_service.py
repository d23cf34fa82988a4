# storefront/services/catalog_service.py
from sqlalchemy.orm import Session

from storefront.data.models import CategoryModel, ProductModel
from storefront.domain.errors import NotFoundError
from storefront.repos.catalog_repo import CatalogRepo


class CatalogService:
    """Odczyt katalogu, bez zadnych mutacji."""

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)

    def list_categories(self) -> list[CategoryModel]:
        return self.repo.list_categories()

    def get_category(self, slug: str) -> CategoryModel:
        category = self.repo.get_category_by_slug(slug)
        if not category:
            raise NotFoundError(f"Category '{slug}' not found")
        return category

    def list_products(self) -> list[ProductModel]:
        return self.repo.list_products()

    def get_product(self, slug: str) -> ProductModel:
        product = self.repo.get_product_by_slug(slug)
        if not product:
            raise NotFoundError(f"Product '{slug}' not found")
        return product

    def products_in_category(self, category_id: int) -> list[ProductModel]:
        return self.repo.get_products_by_category(category_id)

    def search(self, query: str) -> list[ProductModel]:
        query = query.strip()
        if not query:
            return []
        return self.repo.search_products(query)

    def featured(self) -> list[ProductModel]:
        return self.repo.get_featured_products()

    def new_arrivals(self) -> list[ProductModel]:
        return self.repo.get_new_products()
