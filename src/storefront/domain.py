"""Storefront bounded context: the catalogue with carts and orders.

A single domain so that order placement can withdraw product stock, record
the order, and empty the cart inside one unit of work.
"""

from protean.domain import Domain

storefront = Domain(name="storefront")
