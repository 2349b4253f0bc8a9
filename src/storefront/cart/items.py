"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.errors import NotFoundError


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    user_id = Identifier(required=True)


def _line_payload(cart, item):
    return {
        "id": str(item.id),
        "user_id": str(cart.user_id),
        "product_id": str(item.product_id),
        "quantity": item.quantity,
        "created_at": item.added_at.isoformat() if item.added_at else None,
    }


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        current_domain.repository_for(Product).fetch(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        item, created = cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)
        return {**_line_payload(cart, item), "created": created}

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            raise NotFoundError("Cart item not found")

        item = cart.update_item_quantity(product_id=command.product_id, new_quantity=command.quantity)
        repo.add(cart)
        return _line_payload(cart, item)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            raise NotFoundError("Cart item not found")

        item = cart.remove_item(product_id=command.product_id)
        repo.add(cart)
        return _line_payload(cart, item)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            return 0

        cleared = cart.clear()
        repo.add(cart)
        return cleared
