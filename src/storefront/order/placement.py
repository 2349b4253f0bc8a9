"""Order placement: converts a checkout snapshot into a pending order.

Placement is a single unit of work (the command handler runs inside one):
each cart line withdraws stock from its product in list order, the order is
recorded with every line, and the user's cart is emptied. If any step fails,
none of it is persisted: no order, no line, no stock change, and the cart
keeps its lines.

Prices: by default each line keeps the unit price the client sent with it.
With ``price_source="catalogue"`` the product's stored price is used instead.
"""

import json
from enum import Enum

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.errors import EmptyCartError, OrderPlacementError, StorageError

logger = structlog.get_logger(__name__)


class PriceSource(Enum):
    CLIENT = "client"
    CATALOGUE = "catalogue"


@storefront.value_object
class CartLine:
    """A product and quantity as submitted at checkout."""

    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, product_name, quantity, unit_price}
    shipping_address = Text(required=True)
    phone = String(max_length=50)
    price_source = String(choices=PriceSource, default=PriceSource.CLIENT.value)


def _parse_lines(items):
    lines = json.loads(items) if isinstance(items, str) else items
    return [
        CartLine(
            product_id=line.get("product_id"),
            product_name=line.get("product_name"),
            quantity=line.get("quantity"),
            unit_price=line.get("unit_price"),
        )
        for line in lines or []
    ]


def _load_product(repo, product_id):
    try:
        return repo.get(product_id)
    except ObjectNotFoundError:
        raise ValidationError({"items": [f"Product {product_id} does not exist"]}) from None


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = _parse_lines(command.items)
        if not lines:
            raise EmptyCartError()

        reprice = command.price_source == PriceSource.CATALOGUE.value
        product_repo = current_domain.repository_for(Product)

        # Products touched by more than one line keep withdrawing from the same instance
        products = {}
        order_lines = []
        for line in lines:
            key = str(line.product_id)
            if key not in products:
                products[key] = _load_product(product_repo, line.product_id)
            product = products[key]

            order_lines.append(
                {
                    "product_id": key,
                    "product_name": line.product_name or product.name,
                    "quantity": line.quantity,
                    "unit_price": product.price if reprice else line.unit_price,
                }
            )
            product.withdraw_stock(line.quantity)
            product_repo.add(product)

        order = Order.place(
            user_id=command.user_id,
            lines=order_lines,
            shipping_address=command.shipping_address,
            phone=command.phone,
        )
        current_domain.repository_for(Order).add(order)

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_for_user(command.user_id)
        if cart is not None:
            cart.clear()
            cart_repo.add(cart)

        confirmation = order.confirmation()
        logger.info(
            "Order placed",
            order_id=confirmation["id"],
            user_id=str(command.user_id),
            total_amount=confirmation["total_amount"],
            items=confirmation["items"],
        )
        return confirmation


def place_order(command):
    """Process ``PlaceOrder`` and return the order confirmation.

    Empty carts, stock shortfalls and invalid input propagate unchanged.
    Anything else that goes wrong is a storage failure and is raised as
    ``StorageError``. Failed placements are never retried here.
    """
    try:
        return current_domain.process(command, asynchronous=False)
    except (OrderPlacementError, ValidationError) as exc:
        logger.warning("Order placement rejected", user_id=str(command.user_id), reason=str(exc))
        raise
    except Exception as exc:
        logger.exception("Order placement failed", user_id=str(command.user_id))
        raise StorageError() from exc
