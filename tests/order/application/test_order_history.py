"""Application tests for the order history views."""

import json

import pytest
from protean import current_domain
from storefront.catalogue.management import AddProduct, DeleteProduct
from storefront.order.history import get_order_for_user, list_all_orders, list_orders_for_user
from storefront.order.placement import PlaceOrder, place_order
from storefront.shared.errors import NotFoundError


@pytest.fixture()
def product_id():
    payload = current_domain.process(
        AddProduct(
            name="Coffee Mug",
            description="Stoneware",
            price=10.0,
            stock_quantity=500,
            image_url="https://cdn.example.com/mug.jpg",
        ),
        asynchronous=False,
    )
    return payload["id"]


def _place(product_id, user_id="user-001", quantity=1):
    lines = [{"product_id": product_id, "product_name": "Coffee Mug", "quantity": quantity, "unit_price": 10.0}]
    return place_order(
        PlaceOrder(user_id=user_id, items=json.dumps(lines), shipping_address="1 Main St"),
    )


class TestListOrdersForUser:
    def test_lists_only_own_orders(self, product_id):
        _place(product_id, user_id="user-001")
        _place(product_id, user_id="user-002")
        orders = list_orders_for_user("user-001")
        assert len(orders) == 1
        assert orders[0]["user_id"] == "user-001"

    def test_newest_first(self, product_id):
        first = _place(product_id)
        second = _place(product_id)
        assert [o["id"] for o in list_orders_for_user("user-001")] == [second["id"], first["id"]]

    def test_lines_carry_product_details(self, product_id):
        _place(product_id, quantity=3)
        line = list_orders_for_user("user-001")[0]["items"][0]
        assert line == {
            "product_id": product_id,
            "quantity": 3,
            "price": "10.00",
            "name": "Coffee Mug",
            "image_url": "https://cdn.example.com/mug.jpg",
        }

    def test_no_orders(self):
        assert list_orders_for_user("user-001") == []


class TestGetOrderForUser:
    def test_includes_description(self, product_id):
        order_id = _place(product_id)["id"]
        order = get_order_for_user("user-001", order_id)
        assert order["id"] == order_id
        assert order["total_amount"] == "10.00"
        assert order["items"][0]["description"] == "Stoneware"

    def test_other_users_order_is_not_found(self, product_id):
        order_id = _place(product_id, user_id="user-002")["id"]
        with pytest.raises(NotFoundError, match="Order not found"):
            get_order_for_user("user-001", order_id)

    def test_unknown_order(self):
        with pytest.raises(NotFoundError):
            get_order_for_user("user-001", "ord-404")

    def test_deleted_product_falls_back_to_captured_name(self, product_id):
        order_id = _place(product_id)["id"]
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        line = get_order_for_user("user-001", order_id)["items"][0]
        assert line["name"] == "Coffee Mug"
        assert line["image_url"] is None


class TestListAllOrders:
    def test_lists_every_order(self, product_id):
        _place(product_id, user_id="user-001")
        _place(product_id, user_id="user-002")
        assert len(list_all_orders()) == 2

    def test_lists_more_than_one_page(self, product_id):
        for _ in range(105):
            _place(product_id)
        assert len(list_all_orders()) == 105
        assert len(list_orders_for_user("user-001")) == 105
