"""Cart view: the user's cart lines joined with live product attributes.

Read-only; used to render the cart before checkout. Lines whose product
has since been removed from the catalogue are left out.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product


def get_cart(user_id):
    cart = current_domain.repository_for(ShoppingCart).find_for_user(user_id)
    if cart is None:
        return []

    product_repo = current_domain.repository_for(Product)
    lines = []
    for item in cart.items:
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            continue

        lines.append(
            {
                "id": str(item.id),
                "quantity": item.quantity,
                "created_at": item.added_at.isoformat() if item.added_at else None,
                "product_id": str(product.id),
                "name": product.name,
                "description": product.description,
                "price": product.price,
                "category": product.category,
                "image_url": product.image_url,
                "stock_quantity": product.stock_quantity,
            }
        )

    lines.sort(key=lambda line: line["created_at"] or "", reverse=True)
    return lines
