"""Read side of the catalogue."""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


def list_products():
    return [product.as_payload() for product in current_domain.repository_for(Product).newest_first()]


def get_product(product_id):
    return current_domain.repository_for(Product).fetch(product_id).as_payload()
