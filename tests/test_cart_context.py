import pytest
import requests

from storefront.client import CartContext, CartIdStore, StorefrontClient

PLATE = 2
SPOON = 4


class FlakySession:
    """Przepuszcza requesty do TestClienta, wybrane metody koncza sie bledem sieci."""

    def __init__(self, inner, fail_methods=()):
        self.inner = inner
        self.fail_methods = set(fail_methods)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url))
        if method in self.fail_methods:
            raise requests.ConnectionError("connection refused")
        return self.inner.request(method, url, **kwargs)


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def make_context(api, tmp_path, notifications):
    def factory(session=None):
        client = StorefrontClient(base_url="http://testserver", session=session or api)
        ctx = CartContext(
            client,
            cart_id_store=CartIdStore(tmp_path / "cart_id"),
            notify=notifications.append,
        )
        ctx.initialize()
        return ctx

    return factory


def test_cart_id_is_generated_once_and_reused(make_context, tmp_path):
    first = make_context()
    second = make_context()

    assert first.cart_id
    assert second.cart_id == first.cart_id
    assert (tmp_path / "cart_id").read_text() == first.cart_id
    assert first.is_initialized


def test_missing_cart_id_starts_new_cart(make_context, tmp_path):
    first = make_context()
    first.add_to_cart(PLATE)
    (tmp_path / "cart_id").unlink()

    second = make_context()

    assert second.cart_id != first.cart_id
    assert second.cart_items == []


def test_mutations_refetch_server_state(make_context, notifications):
    ctx = make_context()

    assert ctx.add_to_cart(PLATE, 2)
    assert ctx.add_to_cart(SPOON)

    assert ctx.item_count == 3
    assert ctx.get_cart_total() == 28000
    assert ctx.get_tax_amount() == 2240
    assert ctx.get_final_total() == 30240
    assert ctx.format_final_total() == "RWF 30,240"
    assert notifications[-1].title == "Added to cart"

    spoon = next(i for i in ctx.cart_items if i.product_id == SPOON)
    assert ctx.update_quantity(spoon.id, 3)
    assert ctx.item_count == 5
    assert not ctx.is_loading


def test_update_to_zero_removes_item(make_context):
    ctx = make_context()
    ctx.add_to_cart(PLATE)
    item_id = ctx.cart_items[0].id

    assert ctx.update_quantity(item_id, 0)

    assert ctx.cart_items == []


def test_clear_cart_refetches(make_context):
    ctx = make_context()
    ctx.add_to_cart(PLATE)
    ctx.add_to_cart(SPOON)

    assert ctx.clear_cart()

    assert ctx.cart_items == []
    assert ctx.item_count == 0


def test_client_side_quantity_check_skips_request(api, make_context, notifications):
    session = FlakySession(api)
    ctx = make_context(session)
    session.calls.clear()

    assert not ctx.add_to_cart(PLATE, 100)

    assert session.calls == []
    assert ctx.error.code == "VALIDATION_ERROR"
    assert notifications[-1].variant == "destructive"
    assert not ctx.is_loading


def test_network_failure_keeps_state_and_releases_guard(api, make_context, notifications):
    session = FlakySession(api)
    ctx = make_context(session)
    ctx.add_to_cart(PLATE)
    before = list(ctx.cart_items)

    session.fail_methods = {"POST"}
    assert not ctx.add_to_cart(SPOON)

    assert ctx.cart_items == before
    assert ctx.error.code == "TRANSIENT_ERROR"
    assert notifications[-1].description == "Failed to add item to cart"
    assert not ctx.is_loading

    ctx.reset_error()
    session.fail_methods = set()
    assert ctx.add_to_cart(SPOON)
    assert ctx.error is None
    assert ctx.item_count == 2


def test_server_error_is_reported(make_context):
    ctx = make_context()

    assert not ctx.update_quantity(999, 2)

    assert ctx.error.code == "NOT_FOUND"
    assert not ctx.is_updating(999)


def test_duplicate_submission_is_rejected_while_in_flight(make_context):
    ctx = make_context()
    ctx.add_to_cart(PLATE)
    item_id = ctx.cart_items[0].id
    seen = {}

    original = ctx.client.update_cart_item

    def slow_update(i, quantity):
        seen["loading"] = ctx.is_loading
        seen["updating"] = ctx.is_updating(i)
        # drugie klikniecie w trakcie trwajacej mutacji
        seen["second"] = ctx.update_quantity(i, quantity + 1)
        seen["other"] = ctx.add_to_cart(SPOON)
        return original(i, quantity)

    ctx.client.update_cart_item = slow_update

    assert ctx.update_quantity(item_id, 2)

    assert seen == {"loading": True, "updating": True, "second": False, "other": False}
    assert not ctx.is_loading
    assert not ctx.is_updating(item_id)
    assert [(i.product_id, i.quantity) for i in ctx.cart_items] == [(PLATE, 2)]


def test_place_order_freezes_prices_and_empties_cart(make_context, notifications):
    ctx = make_context()
    ctx.add_to_cart(PLATE, 2)
    ctx.add_to_cart(SPOON)
    expected_total = ctx.get_final_total()

    order = ctx.place_order("Aline Uwase", "aline@example.com", "+250788000000")

    assert order is not None
    assert order.total_amount == expected_total
    assert {i.product_id: i.price for i in order.items} == {PLATE: 10000, SPOON: 8000}
    assert ctx.cart_items == []
    assert notifications[-1].title == "Order placed"
    assert ctx.client.get_order(order.id).id == order.id


def test_place_order_with_empty_cart_fails(make_context):
    ctx = make_context()

    assert ctx.place_order("Aline Uwase", "aline@example.com", "+250788000000") is None
    assert ctx.error.code == "VALIDATION_ERROR"


def test_get_unknown_order_returns_none(make_context):
    ctx = make_context()
    assert ctx.client.get_order(999) is None


def test_order_is_kept_when_refresh_after_checkout_fails(api, make_context, notifications):
    session = FlakySession(api)
    ctx = make_context(session)
    ctx.add_to_cart(PLATE)

    session.fail_methods = {"GET"}
    order = ctx.place_order("Aline Uwase", "aline@example.com", "+250788000000")

    assert order is not None
    assert ctx.last_order == order
    assert ctx.cart_items == []
    assert ctx.error.code == "TRANSIENT_ERROR"
    assert notifications[-1].title == "Order placed"
    assert not ctx.is_loading

    # ponowny checkout nie wysyla starych pozycji drugi raz
    session.calls.clear()
    assert ctx.place_order("Aline Uwase", "aline@example.com", "+250788000000") is None
    assert session.calls == []

    session.fail_methods = set()
    assert ctx.client.get_order(order.id).id == order.id
    assert ctx.client.get_order(order.id + 1) is None
    assert ctx.client.get_cart_items(ctx.cart_id) == []
