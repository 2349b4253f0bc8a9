"""Order history: read-only views of past orders.

Line details join the captured order line with the live product record for
display attributes. A product that has since left the catalogue falls back
to the name captured at order time.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.order.order import Order
from storefront.shared.errors import NotFoundError
from storefront.shared.money import format_money


def _line_payload(item, products, with_description=False):
    product = products.get(str(item.product_id))
    line = {
        "product_id": str(item.product_id),
        "quantity": item.quantity,
        "price": format_money(item.unit_price),
        "name": product.name if product else item.product_name,
        "image_url": product.image_url if product else None,
    }
    if with_description:
        line["description"] = product.description if product else None
    return line


def _products_for(orders):
    repo = current_domain.repository_for(Product)
    products = {}
    for order in orders:
        for item in order.items:
            key = str(item.product_id)
            if key in products:
                continue
            try:
                products[key] = repo.get(key)
            except ObjectNotFoundError:
                products[key] = None
    return products


def _order_payload(order, products, with_description=False):
    return {
        **order.as_payload(),
        "items": [_line_payload(item, products, with_description) for item in order.items],
    }


def list_orders_for_user(user_id):
    orders = current_domain.repository_for(Order).for_user(user_id)
    products = _products_for(orders)
    return [_order_payload(order, products) for order in orders]


def get_order_for_user(user_id, order_id):
    """One of the user's orders. Orders owned by someone else are reported as missing."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFoundError("Order not found") from None

    if str(order.user_id) != str(user_id):
        raise NotFoundError("Order not found")

    return _order_payload(order, _products_for([order]), with_description=True)


def list_all_orders():
    """Every order in the shop, newest first, for the admin order list."""
    return [order.as_payload() for order in current_domain.repository_for(Order).newest_first()]
