# storefront/api/routers/catalog.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import CategoryOut, ProductOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/api", tags=["catalog"])


def get_service(db: Session):
    return CatalogService(db)


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return get_service(db).list_categories()


@router.get("/categories/{slug}", response_model=CategoryOut)
def get_category(slug: str, db: Session = Depends(get_db)):
    try:
        return get_service(db).get_category(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_detail())


@router.get("/products", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return get_service(db).list_products()


# statyczne sciezki przed /products/{slug}
@router.get("/products/featured", response_model=List[ProductOut])
def featured_products(db: Session = Depends(get_db)):
    return get_service(db).featured()


@router.get("/products/new", response_model=List[ProductOut])
def new_products(db: Session = Depends(get_db)):
    return get_service(db).new_arrivals()


@router.get("/products/search", response_model=List[ProductOut])
def search_products(q: str = Query("", max_length=100), db: Session = Depends(get_db)):
    return get_service(db).search(q)


@router.get("/products/category/{category_id}", response_model=List[ProductOut])
def products_in_category(category_id: int, db: Session = Depends(get_db)):
    return get_service(db).products_in_category(category_id)


@router.get("/products/{slug}", response_model=ProductOut)
def get_product(slug: str, db: Session = Depends(get_db)):
    try:
        return get_service(db).get_product(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_detail())
