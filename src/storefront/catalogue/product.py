"""Product aggregate: a catalogue entry with its price and stock level.

The stock level lives on the product itself. It is only ever reduced by
order placement, inside the same unit of work that records the order, and
it can never drop below zero.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.catalogue.events import ProductAdded, ProductUpdated, StockWithdrawn
from storefront.domain import storefront
from storefront.shared.errors import InsufficientStockError


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    image_url = String(max_length=500)
    stock_quantity = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(cls, name, price, stock_quantity=0, description=None, category=None, image_url=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            category=category,
            image_url=image_url,
            stock_quantity=stock_quantity,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock_quantity=product.stock_quantity,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Admin maintenance
    # -------------------------------------------------------------------
    def update_details(self, name, price, stock_quantity, description=None, category=None, image_url=None):
        """Replace every editable attribute, as the admin product form does."""
        self.name = name
        self.description = description
        self.price = price
        self.category = category
        self.image_url = image_url
        self.stock_quantity = stock_quantity
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                stock_quantity=self.stock_quantity,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def withdraw_stock(self, quantity):
        """Take ``quantity`` units out of stock and return what remains.

        Raises ``InsufficientStockError`` without touching the stock level
        when fewer than ``quantity`` units are available.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous = self.stock_quantity or 0
        remaining = previous - quantity
        if remaining < 0:
            raise InsufficientStockError(
                product_id=self.id,
                product_name=self.name,
                requested=quantity,
                available=previous,
            )

        self.stock_quantity = remaining
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                quantity=quantity,
                previous_quantity=previous,
                remaining_quantity=remaining,
                withdrawn_at=now,
            )
        )
        return remaining

    def as_payload(self):
        """JSON-ready representation used by the HTTP layer."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "image_url": self.image_url,
            "stock_quantity": self.stock_quantity,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
