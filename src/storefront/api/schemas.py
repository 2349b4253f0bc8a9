"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the Protean commands.
Field names follow what the web client sends (``shippingAddress``,
``productId``); snake_case names are accepted as well.
"""

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductRequest(BaseModel):
    name: str
    description: str | None = None
    price: float = Field(ge=0)
    stock_quantity: int = Field(ge=0, default=0)
    category: str | None = None
    image_url: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Trail Runner",
                    "description": "Lightweight running shoe",
                    "price": 89.99,
                    "stock_quantity": 25,
                    "category": "Shoes",
                    "image_url": "https://example.com/trail-runner.jpg",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str | int = Field(alias="productId")
    quantity: int = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CheckoutProductSchema(BaseModel):
    id: str | int
    price: float = Field(ge=0)
    name: str | None = None


class CheckoutItemSchema(BaseModel):
    product: CheckoutProductSchema
    quantity: int = Field(ge=1)


class PlaceOrderRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shippingAddress": "12 Harbour Road, Dublin",
                    "phone": "+353 1 555 0100",
                    "items": [
                        {"product": {"id": "prod-001", "price": 10.0, "name": "Mug"}, "quantity": 2},
                    ],
                }
            ]
        },
    )

    shipping_address: str = Field(alias="shippingAddress")
    phone: str | None = None
    items: list[CheckoutItemSchema] = Field(default_factory=list)


class OrderConfirmationSchema(BaseModel):
    id: str
    total_amount: str
    status: str
    created_at: str | None = None
    items: int


class PlaceOrderResponse(BaseModel):
    message: str = "Order created successfully"
    order: OrderConfirmationSchema


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class MessageResponse(BaseModel):
    message: str
