import pytest
from sqlalchemy.exc import OperationalError

from storefront.data.models import OrderModel, OrderItemModel, ProductModel
from storefront.domain.errors import ValidationError, IntegrityError
from storefront.domain.schemas import OrderDraft, OrderItemIn
from storefront.repos.cart_repo import CartRepo
from storefront.services.notification_service import NotificationService, send_order_notification_task
from storefront.utils.settings import MAX_MONEY_AMOUNT

PLATE = 2   # 12000, rabat 10000
SPOON = 4   # 8000


def draft(cart_id="cart-1", **kwargs):
    return OrderDraft(
        cart_id=cart_id,
        customer_name="Aline Uwase",
        customer_email="aline@example.com",
        customer_phone="+250788000000",
        **kwargs,
    )


def items_from_cart(cart_service, cart_id="cart-1"):
    return [
        OrderItemIn(
            product_id=line["product_id"],
            quantity=line["quantity"],
            price=line["product"].effective_price,
        )
        for line in cart_service.get_cart_items(cart_id)
    ]


@pytest.fixture
def filled_cart(cart_service):
    cart_service.add_item("cart-1", PLATE, 2)
    cart_service.add_item("cart-1", SPOON, 1)


@pytest.fixture
def sent(monkeypatch):
    calls = []
    monkeypatch.setattr(
        NotificationService,
        "send_order_notification",
        staticmethod(lambda *args: calls.append(args)),
    )
    return calls


def test_create_order_snapshots_items_and_clears_cart(cart_service, order_service, filled_cart, sent):
    order = order_service.create_order(draft(), items_from_cart(cart_service))

    assert order["status"] == "pending"
    assert order["created_at"] is not None
    assert order["subtotal"] == 28000
    assert order["tax_amount"] == 2240
    assert order["total_amount"] == 30240
    assert [(i["product_id"], i["quantity"], i["price"]) for i in order["items"]] == [
        (PLATE, 2, 10000),
        (SPOON, 1, 8000),
    ]
    assert cart_service.get_cart_items("cart-1") == []
    assert sent == [(order["id"], "aline@example.com", "RWF 30,240")]


def test_order_price_stays_frozen_after_catalog_change(cart_service, order_service, filled_cart, db, sent):
    order = order_service.create_order(draft(), items_from_cart(cart_service))

    plate = db.get(ProductModel, PLATE)
    plate.discount_price = None
    plate.price = 9000
    db.commit()

    stored = order_service.get_order(order["id"])
    prices = {i["product_id"]: i["price"] for i in stored["items"]}
    assert prices[PLATE] == 10000
    assert stored["total_amount"] == 30240
    # produkt w odpowiedzi jest aktualny, cena pozycji nie
    plate_line = next(i for i in stored["items"] if i["product_id"] == PLATE)
    assert plate_line["product"].price == 9000


def test_missing_item_price_uses_effective_price_at_creation(order_service, sent):
    order = order_service.create_order(draft(), [OrderItemIn(product_id=PLATE, quantity=1)])

    assert order["items"][0]["price"] == 10000
    assert order["total_amount"] == 10800


def test_matching_draft_total_is_accepted(order_service, sent):
    order = order_service.create_order(
        draft(total_amount=10800), [OrderItemIn(product_id=PLATE, quantity=1, price=10000)]
    )
    assert order["total_amount"] == 10800


def test_mismatched_draft_total_is_rejected(cart_service, order_service, filled_cart, db, sent):
    with pytest.raises(ValidationError):
        order_service.create_order(draft(total_amount=1), items_from_cart(cart_service))

    assert db.query(OrderModel).count() == 0
    assert len(cart_service.get_cart_items("cart-1")) == 2
    assert sent == []


def test_order_above_money_limit_is_rejected(cart_service, order_service, filled_cart, db, sent):
    # kazda cena osobno miesci sie w limicie, suma juz nie
    items = [OrderItemIn(product_id=PLATE, quantity=99, price=MAX_MONEY_AMOUNT)]

    with pytest.raises(ValidationError):
        order_service.create_order(draft(), items)

    assert db.query(OrderModel).count() == 0
    assert len(cart_service.get_cart_items("cart-1")) == 2
    assert sent == []


def test_oversized_item_price_is_rejected(order_service, db, sent):
    item = OrderItemIn.model_construct(product_id=PLATE, quantity=1, price=10**20)

    with pytest.raises(ValidationError):
        order_service.create_order(draft(), [item])

    assert db.query(OrderModel).count() == 0


def test_empty_order_is_rejected(order_service):
    with pytest.raises(ValidationError):
        order_service.create_order(draft(), [])


def test_order_quantity_out_of_bounds(order_service):
    with pytest.raises(ValidationError):
        order_service.create_order(draft(), [OrderItemIn(product_id=PLATE, quantity=0)])


def test_unknown_product_rejects_whole_order(cart_service, order_service, filled_cart, db):
    items = items_from_cart(cart_service) + [OrderItemIn(product_id=999, quantity=1, price=100)]

    with pytest.raises(IntegrityError):
        order_service.create_order(draft(), items)

    assert db.query(OrderModel).count() == 0
    assert db.query(OrderItemModel).count() == 0
    assert len(cart_service.get_cart_items("cart-1")) == 2


def test_failed_cart_clear_rolls_back_order(cart_service, order_service, filled_cart, db, monkeypatch, sent):
    def boom(self, cart_id):
        raise OperationalError("DELETE FROM cart_items", {}, Exception("database is locked"))

    monkeypatch.setattr(CartRepo, "delete_cart_items", boom)

    with pytest.raises(OperationalError):
        order_service.create_order(draft(), items_from_cart(cart_service))

    assert db.query(OrderModel).count() == 0
    assert db.query(OrderItemModel).count() == 0
    assert len(cart_service.get_cart_items("cart-1")) == 2
    assert sent == []


def test_get_unknown_order_returns_none(order_service):
    assert order_service.get_order(404) is None


def test_notification_task_runs():
    result = send_order_notification_task.apply(args=(7, "aline@example.com", "RWF 10,800")).get()
    assert result == {"order_id": 7, "customer_email": "aline@example.com", "status": "sent"}
