"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock_quantity = Integer(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """A product's details, price, or stock level were replaced by an admin."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock_quantity = Integer(required=True)
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockWithdrawn:
    """Units left the shelf because an order was placed."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_quantity = Integer(required=True)
    remaining_quantity = Integer(required=True)
    withdrawn_at = DateTime(required=True)
