"""Error taxonomy for the storefront.

Field and rule violations inside aggregates are reported with Protean's
``ValidationError``. The classes here cover the order placement failures
callers need to tell apart, and lookups that miss in read paths.
"""


class StorefrontError(Exception):
    """Base class for storefront errors."""

    message = "Storefront error"

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)


class NotFoundError(StorefrontError):
    message = "Not found"


# ---------------------------------------------------------------------------
# Order placement
# ---------------------------------------------------------------------------
class OrderPlacementError(StorefrontError):
    """An order could not be placed. Nothing was persisted."""

    message = "Order could not be placed"


class EmptyCartError(OrderPlacementError):
    message = "Cart is empty"


class InsufficientStockError(OrderPlacementError):
    """A product has fewer units in stock than a cart line requests."""

    def __init__(self, product_id, product_name, requested, available):
        self.product_id = str(product_id)
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock for {product_name}")


class StorageError(OrderPlacementError):
    """The persistence layer failed while placing an order."""

    message = "Order could not be stored"
