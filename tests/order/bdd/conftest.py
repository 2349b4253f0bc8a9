"""Shared BDD fixtures and step definitions for order placement."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.items import AddToCart
from storefront.catalogue.management import AddProduct
from storefront.catalogue.product import Product
from storefront.order.order import Order


@pytest.fixture()
def catalogue():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the confirmation or the captured error."""
    return {"confirmation": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the catalogue contains:")
def catalogue_contains(catalogue, datatable):
    header, *products = datatable
    for row in products:
        values = dict(zip(header, row, strict=True))
        payload = current_domain.process(
            AddProduct(name=values["name"], price=float(values["price"]), stock_quantity=int(values["stock"])),
            asynchronous=False,
        )
        catalogue[values["name"]] = payload["id"]


@given(parsers.cfparse('the cart of "{user_id}" holds "{first}" and "{second}"'))
def cart_holds(catalogue, user_id, first, second):
    for name in (first, second):
        current_domain.process(
            AddToCart(user_id=user_id, product_id=catalogue[name], quantity=1),
            asynchronous=False,
        )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the stock of "{name}" is {stock:d}'))
def stock_is(catalogue, name, stock):
    assert current_domain.repository_for(Product).get(catalogue[name]).stock_quantity == stock


@then("no order exists")
def no_order_exists():
    assert current_domain.repository_for(Order).count() == 0
