import pytest

from storefront.data.models import CartItemModel, ProductModel
from storefront.domain.errors import ValidationError, NotFoundError, IntegrityError

BASKET = 1  # 15000, bez rabatu
PLATE = 2   # 12000, rabat 10000
SPOON = 4   # 8000, bez rabatu


def test_add_item_creates_row(cart_service):
    item = cart_service.add_item("cart-1", BASKET)

    assert item["id"] > 0
    assert item["cart_id"] == "cart-1"
    assert item["quantity"] == 1
    assert item["product"].id == BASKET


def test_add_same_product_merges_quantities(cart_service):
    first = cart_service.add_item("cart-1", PLATE, 2)
    second = cart_service.add_item("cart-1", PLATE, 3)

    assert second["id"] == first["id"]
    items = cart_service.get_cart_items("cart-1")
    assert len(items) == 1
    assert items[0]["quantity"] == 5


def test_same_product_in_other_cart_is_separate_row(cart_service):
    cart_service.add_item("cart-1", PLATE)
    cart_service.add_item("cart-2", PLATE)

    assert len(cart_service.get_cart_items("cart-1")) == 1
    assert len(cart_service.get_cart_items("cart-2")) == 1


@pytest.mark.parametrize("quantity", [0, -1, 100])
def test_add_rejects_quantity_out_of_bounds(cart_service, quantity):
    with pytest.raises(ValidationError):
        cart_service.add_item("cart-1", BASKET, quantity)

    assert cart_service.get_cart_items("cart-1") == []


def test_merge_above_limit_is_rejected_without_change(cart_service):
    cart_service.add_item("cart-1", BASKET, 60)

    with pytest.raises(ValidationError):
        cart_service.add_item("cart-1", BASKET, 40)

    assert cart_service.get_cart_items("cart-1")[0]["quantity"] == 60


def test_add_unknown_product(cart_service):
    with pytest.raises(NotFoundError):
        cart_service.add_item("cart-1", 999)


def test_update_quantity_sets_value(cart_service):
    item = cart_service.add_item("cart-1", BASKET, 2)

    updated = cart_service.update_quantity(item["id"], 7)

    assert updated["quantity"] == 7
    assert cart_service.get_cart_items("cart-1")[0]["quantity"] == 7


@pytest.mark.parametrize("quantity", [0, -5])
def test_update_to_non_positive_removes_item(cart_service, quantity):
    item = cart_service.add_item("cart-1", BASKET, 2)
    cart_service.add_item("cart-1", SPOON)

    assert cart_service.update_quantity(item["id"], quantity) is None

    remaining = cart_service.get_cart_items("cart-1")
    assert [i["product_id"] for i in remaining] == [SPOON]


def test_update_unknown_item(cart_service):
    with pytest.raises(NotFoundError):
        cart_service.update_quantity(12345, 3)


def test_update_unknown_item_with_bad_quantity_is_not_found(cart_service):
    with pytest.raises(NotFoundError):
        cart_service.update_quantity(12345, 150)


def test_update_above_limit(cart_service):
    item = cart_service.add_item("cart-1", BASKET)
    with pytest.raises(ValidationError):
        cart_service.update_quantity(item["id"], 100)


def test_remove_missing_item_is_noop(cart_service):
    cart_service.add_item("cart-1", BASKET)

    cart_service.remove_item(12345)

    assert len(cart_service.get_cart_items("cart-1")) == 1


def test_clear_cart_only_touches_one_cart(cart_service):
    cart_service.add_item("cart-1", BASKET)
    cart_service.add_item("cart-1", SPOON)
    cart_service.add_item("cart-2", PLATE)

    assert cart_service.clear_cart("cart-1") == 2
    assert cart_service.clear_cart("cart-1") == 0

    assert cart_service.get_cart_items("cart-1") == []
    assert len(cart_service.get_cart_items("cart-2")) == 1


def test_deleted_ids_are_not_reused(cart_service):
    first = cart_service.add_item("cart-1", BASKET)
    cart_service.remove_item(first["id"])

    second = cart_service.add_item("cart-1", SPOON)

    assert second["id"] > first["id"]


def test_cart_reads_live_catalog_price(cart_service, db):
    cart_service.add_item("cart-1", SPOON)

    product = db.get(ProductModel, SPOON)
    product.price = 9000
    db.commit()

    line = cart_service.get_cart_items("cart-1")[0]
    assert line["product"].price == 9000


def test_summary_scenario(cart_service):
    cart_service.add_item("cart-1", PLATE, 2)
    cart_service.add_item("cart-1", SPOON, 1)

    summary = cart_service.get_cart_summary("cart-1")

    assert summary["item_count"] == 3
    assert summary["subtotal"] == 28000
    assert summary["tax_amount"] == 2240
    assert summary["total"] == 30240
    assert summary["formatted_total"] == "RWF 30,240"


def test_orphaned_product_is_integrity_error(cart_service, db):
    db.add(CartItemModel(cart_id="cart-1", product_id=999, quantity=1))
    db.commit()

    with pytest.raises(IntegrityError):
        cart_service.get_cart_items("cart-1")
