"""Integration tests for the order endpoints."""

from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api.app import create_app
from storefront.catalogue.product import Product

CUSTOMER = {"Authorization": "Bearer customer-token"}
OTHER_CUSTOMER = {"Authorization": "Bearer other-token"}


def _item(product_id, price, quantity, name=None):
    return {"product": {"id": product_id, "price": price, "name": name}, "quantity": quantity}


def _checkout(client, items, headers=CUSTOMER, **overrides):
    body = {"shippingAddress": "12 Harbour Road, Dublin", "phone": "+353 1 555 0100", "items": items}
    body.update(overrides)
    return client.post("/api/orders/create", json=body, headers=headers)


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock_quantity


class TestCreateOrder:
    def test_returns_201_with_confirmation(self, client, add_product):
        a = add_product(name="A", price=10.0, stock_quantity=5)
        b = add_product(name="B", price=5.5, stock_quantity=3)
        client.post("/api/cart/add", json={"productId": a, "quantity": 2}, headers=CUSTOMER)

        response = _checkout(client, [_item(a, 10.0, 2, "A"), _item(b, 5.5, 1, "B")])

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Order created successfully"
        assert body["order"]["total_amount"] == "25.50"
        assert body["order"]["status"] == "pending"
        assert body["order"]["items"] == 2
        assert _stock(a) == 3
        assert _stock(b) == 2
        assert client.get("/api/cart", headers=CUSTOMER).json() == []

    def test_snake_case_address_is_accepted(self, client, add_product):
        a = add_product()
        response = client.post(
            "/api/orders/create",
            json={"shipping_address": "1 Main St", "items": [_item(a, 10.0, 1)]},
            headers=CUSTOMER,
        )
        assert response.status_code == 201

    def test_insufficient_stock_is_409(self, client, add_product):
        c = add_product(name="C", price=20.0, stock_quantity=2)

        response = _checkout(client, [_item(c, 20.0, 10, "C")])

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "Insufficient stock for C"
        assert body["product_id"] == c
        assert _stock(c) == 2
        assert client.get("/api/orders", headers=CUSTOMER).json() == []

    def test_empty_cart_is_400(self, client):
        response = _checkout(client, [])
        assert response.status_code == 400
        assert response.json() == {"error": "Cart is empty"}

    def test_missing_address_is_400(self, client, add_product):
        a = add_product()
        response = client.post("/api/orders/create", json={"items": [_item(a, 10.0, 1)]}, headers=CUSTOMER)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_unknown_product_is_400(self, client):
        response = _checkout(client, [_item("prod-404", 1.0, 1)])
        assert response.status_code == 400

    def test_requires_token(self, client):
        response = client.post("/api/orders/create", json={"shippingAddress": "x", "items": []})
        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_rejects_unknown_token(self, client):
        response = _checkout(client, [], headers={"Authorization": "Bearer forged"})
        assert response.status_code == 403
        assert response.json() == {"error": "Invalid or expired token"}


class TestCatalogueRepricing:
    def test_catalogue_price_source(self, _storefront_domain, token_resolver, add_product):
        client = TestClient(create_app(_storefront_domain, token_resolver=token_resolver, price_source="catalogue"))
        a = add_product(price=10.0)

        response = _checkout(client, [_item(a, 0.01, 2)])

        assert response.status_code == 201
        assert response.json()["order"]["total_amount"] == "20.00"


class TestOrderHistory:
    def test_lists_own_orders(self, client, add_product):
        a = add_product(image_url="https://cdn.example.com/mug.jpg")
        _checkout(client, [_item(a, 10.0, 2)])
        _checkout(client, [_item(a, 10.0, 1)], headers=OTHER_CUSTOMER)

        orders = client.get("/api/orders", headers=CUSTOMER).json()
        assert len(orders) == 1
        assert orders[0]["items"][0]["price"] == "10.00"
        assert orders[0]["items"][0]["image_url"] == "https://cdn.example.com/mug.jpg"

    def test_get_own_order(self, client, add_product):
        a = add_product(description="Stoneware")
        order_id = _checkout(client, [_item(a, 10.0, 1)]).json()["order"]["id"]

        response = client.get(f"/api/orders/{order_id}", headers=CUSTOMER)

        assert response.status_code == 200
        assert response.json()["items"][0]["description"] == "Stoneware"

    def test_other_users_order_is_404(self, client, add_product):
        a = add_product()
        order_id = _checkout(client, [_item(a, 10.0, 1)], headers=OTHER_CUSTOMER).json()["order"]["id"]

        response = client.get(f"/api/orders/{order_id}", headers=CUSTOMER)

        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}
