"""Admin dashboard statistics."""

from decimal import Decimal

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.order.order import Order, OrderStatus
from storefront.shared.money import format_money, to_money

RECENT_ORDERS_LIMIT = 5


def dashboard_summary():
    """Shop-wide counters plus the most recent orders.

    Customers are counted as the distinct users that have placed an order;
    user accounts themselves are owned by the authentication service.
    Revenue only counts completed orders.
    """
    order_repo = current_domain.repository_for(Order)

    revenue = sum(
        (to_money(o.total_amount) for o in order_repo.with_status(OrderStatus.COMPLETED)),
        Decimal("0"),
    )

    return {
        "total_customers": len({str(o.user_id) for o in order_repo.newest_first()}),
        "total_products": current_domain.repository_for(Product).count(),
        "total_orders": order_repo.count(),
        "total_revenue": format_money(revenue),
        "pending_orders": order_repo.count_with_status(OrderStatus.PENDING),
        "recent_orders": [o.as_payload() for o in order_repo.most_recent(RECENT_ORDERS_LIMIT)],
    }
