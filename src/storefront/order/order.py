"""Order aggregate: the durable record of a checkout.

An order is created together with all of its lines and never without them.
Line prices are captured at order time and do not follow later catalogue
price changes. The order total always equals the sum of its line subtotals.

Statuses: ``pending`` on creation; ``completed`` or ``cancelled`` are set by
an admin. Any status may be changed to any other.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.shared.errors import EmptyCartError
from storefront.shared.money import format_money, line_total, sum_lines, to_money


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """One purchased product with the quantity and the price paid per unit."""

    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    def subtotal(self):
        return line_total(self.unit_price, self.quantity)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    total_amount = Float(default=0.0, min_value=0.0)
    shipping_address = Text(required=True)
    phone = String(max_length=50)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    created_at = DateTime()

    @invariant.post
    def total_must_equal_sum_of_lines(self):
        if not self.items:
            return
        expected = sum_lines((item.unit_price, item.quantity) for item in self.items)
        if expected != to_money(self.total_amount or 0):
            raise ValidationError(
                {"total_amount": [f"Order total {format_money(self.total_amount or 0)} does not match lines {expected}"]}
            )

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, shipping_address, phone=None):
        """Create a pending order from checkout lines.

        Args:
            lines: dicts with product_id, product_name, quantity, unit_price.
        """
        if not lines:
            raise EmptyCartError()

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            shipping_address=shipping_address,
            phone=phone,
            status=OrderStatus.PENDING.value,
            total_amount=0.0,
            created_at=now,
        )

        with atomic_change(order):
            for line in lines:
                order.add_items(
                    OrderItem(
                        product_id=line["product_id"],
                        product_name=line.get("product_name"),
                        quantity=line["quantity"],
                        unit_price=float(to_money(line["unit_price"])),
                    )
                )
            order.total_amount = float(sum_lines((line["unit_price"], line["quantity"]) for line in lines))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                total_amount=order.total_amount,
                item_count=len(lines),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def change_status(self, new_status):
        valid = {s.value for s in OrderStatus}
        if new_status not in valid:
            raise ValidationError({"status": ["Invalid status"]})

        previous_status = self.status
        self.status = new_status

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=new_status,
                changed_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------
    def confirmation(self):
        """Summary returned to the buyer right after checkout."""
        return {
            "id": str(self.id),
            "total_amount": format_money(self.total_amount),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "items": len(self.items),
        }

    def as_payload(self):
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "total_amount": format_money(self.total_amount),
            "status": self.status,
            "shipping_address": self.shipping_address,
            "phone": self.phone,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
