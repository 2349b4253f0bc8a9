"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.errors import NotFoundError
from storefront.shared.queries import fetch_all


@storefront.repository(part_of=Product)
class ProductRepository:
    def fetch(self, product_id) -> Product:
        """Like ``get``, but a missing product is a ``NotFoundError``."""
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            raise NotFoundError("Product not found") from None

    def newest_first(self) -> list[Product]:
        """All products, most recently added first."""
        return fetch_all(self._dao.query.order_by("-created_at"))

    def remove(self, product: Product) -> None:
        self._dao.delete(product)

    def count(self) -> int:
        return self._dao.query.all().total
