"""BDD tests for cart item management."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.cart.cart import ShoppingCart

scenarios("features/cart_items.feature")


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a cart for "{user_id}"'), target_fixture="cart")
def a_cart(user_id):
    return ShoppingCart.create(user_id=user_id)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{qty:d} of "{product_id}" are added'))
def add_item(cart, qty, product_id, error):
    try:
        cart.add_item(product_id=product_id, quantity=qty)
    except ValidationError as exc:
        error["exc"] = exc


@when("the cart is cleared")
def clear_cart(cart):
    cart.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_one_line(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse('the line for "{product_id}" has quantity {qty:d}'))
def line_quantity(cart, product_id, qty):
    line = next(i for i in cart.items if str(i.product_id) == product_id)
    assert line.quantity == qty


@then("the change is rejected")
def change_rejected(error):
    assert isinstance(error["exc"], ValidationError)
