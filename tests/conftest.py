from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.data.store import Store
from storefront.services.cart_service import CartService
from storefront.services.lock_service import LocalLockService
from storefront.services.order_service import OrderService

TAX_RATE = Decimal("0.08")


@pytest.fixture
def store():
    s = Store(
        database_url="sqlite://",
        tax_rate=TAX_RATE,
        lock_service=LocalLockService(timeout=0.5),
        seed_catalog=True,
    )
    yield s
    s.dispose()


@pytest.fixture
def db(store):
    session = store.session()
    yield session
    session.close()


@pytest.fixture
def cart_service(db, store):
    return CartService(db, lock_service=store.lock_service, tax_rate=store.tax_rate)


@pytest.fixture
def order_service(db, store):
    return OrderService(db, lock_service=store.lock_service, tax_rate=store.tax_rate)


@pytest.fixture
def api(store):
    with TestClient(create_app(store)) as client:
        yield client
