"""Fixtures for HTTP tests through the Storefront FastAPI application."""

import pytest
from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api.app import create_app
from storefront.api.auth import Caller, StaticTokenResolver
from storefront.catalogue.management import AddProduct


@pytest.fixture()
def token_resolver():
    return StaticTokenResolver(
        {
            "customer-token": Caller(user_id="user-001"),
            "other-token": Caller(user_id="user-002"),
            "admin-token": Caller(user_id="admin-001", is_admin=True),
        }
    )


@pytest.fixture()
def app(_storefront_domain, token_resolver):
    return create_app(_storefront_domain, token_resolver=token_resolver)


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def add_product():
    def _add(name="Coffee Mug", price=10.0, stock_quantity=5, **extra):
        payload = current_domain.process(
            AddProduct(name=name, price=price, stock_quantity=stock_quantity, **extra),
            asynchronous=False,
        )
        return payload["id"]

    return _add
