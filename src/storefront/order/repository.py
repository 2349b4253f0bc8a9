"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.shared.queries import fetch_all


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        """The user's orders, newest first."""
        return fetch_all(self._dao.query.filter(user_id=str(user_id)).order_by("-created_at"))

    def newest_first(self) -> list[Order]:
        return fetch_all(self._dao.query.order_by("-created_at"))

    def most_recent(self, limit: int) -> list[Order]:
        return self._dao.query.order_by("-created_at").limit(limit).all().items

    def with_status(self, status: OrderStatus) -> list[Order]:
        return fetch_all(self._dao.query.filter(status=status.value))

    def count_with_status(self, status: OrderStatus) -> int:
        return self._dao.query.filter(status=status.value).all().total

    def count(self) -> int:
        return self._dao.query.all().total
