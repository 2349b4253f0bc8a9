"""FastAPI routes for the Storefront API."""

import json

from fastapi import APIRouter, Depends, Request, Response
from protean.utils.globals import current_domain

from storefront.admin.dashboard import dashboard_summary
from storefront.api.auth import Caller, get_caller, require_admin
from storefront.api.schemas import (
    AddToCartRequest,
    MessageResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductRequest,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.view import get_cart
from storefront.catalogue.listing import get_product, list_products
from storefront.catalogue.management import AddProduct, DeleteProduct, UpdateProduct
from storefront.order.history import get_order_for_user, list_all_orders, list_orders_for_user
from storefront.order.placement import PlaceOrder, place_order
from storefront.order.status import UpdateOrderStatus

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("")
async def all_products() -> list[dict]:
    return list_products()


@product_router.get("/{product_id}")
async def product_detail(product_id: str) -> dict:
    return get_product(product_id)


@product_router.post("/add", status_code=201, dependencies=[Depends(require_admin)])
async def add_product(body: ProductRequest) -> dict:
    command = AddProduct(**body.model_dump())
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("")
async def view_cart(caller: Caller = Depends(get_caller)) -> list[dict]:
    return get_cart(caller.user_id)


@cart_router.post("/add")
async def add_cart_item(
    body: AddToCartRequest,
    response: Response,
    caller: Caller = Depends(get_caller),
) -> dict:
    command = AddToCart(
        user_id=caller.user_id,
        product_id=str(body.product_id),
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    created = result.pop("created")
    response.status_code = 201 if created else 200
    return result


@cart_router.put("/update/{product_id}")
async def update_cart_item(
    product_id: str,
    body: UpdateCartQuantityRequest,
    caller: Caller = Depends(get_caller),
) -> dict:
    command = UpdateCartQuantity(
        user_id=caller.user_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    return current_domain.process(command, asynchronous=False)


@cart_router.delete("/remove/{product_id}")
async def remove_cart_item(product_id: str, caller: Caller = Depends(get_caller)) -> dict:
    command = RemoveFromCart(user_id=caller.user_id, product_id=product_id)
    item = current_domain.process(command, asynchronous=False)
    return {"message": "Item removed from cart", "item": item}


@cart_router.delete("/clear", response_model=MessageResponse)
async def clear_cart(caller: Caller = Depends(get_caller)) -> MessageResponse:
    current_domain.process(ClearCart(user_id=caller.user_id), asynchronous=False)
    return MessageResponse(message="Cart cleared successfully")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("/create", status_code=201, response_model=PlaceOrderResponse)
async def create_order(
    body: PlaceOrderRequest,
    request: Request,
    caller: Caller = Depends(get_caller),
) -> PlaceOrderResponse:
    lines = [
        {
            "product_id": str(item.product.id),
            "product_name": item.product.name,
            "quantity": item.quantity,
            "unit_price": item.product.price,
        }
        for item in body.items
    ]
    command = PlaceOrder(
        user_id=caller.user_id,
        items=json.dumps(lines),
        shipping_address=body.shipping_address,
        phone=body.phone,
        price_source=request.app.state.price_source,
    )
    confirmation = place_order(command)
    return PlaceOrderResponse(order=confirmation)


@order_router.get("")
async def my_orders(caller: Caller = Depends(get_caller)) -> list[dict]:
    return list_orders_for_user(caller.user_id)


@order_router.get("/{order_id}")
async def my_order(order_id: str, caller: Caller = Depends(get_caller)) -> dict:
    return get_order_for_user(caller.user_id, order_id)


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@admin_router.get("/dashboard")
async def dashboard() -> dict:
    return dashboard_summary()


@admin_router.get("/orders")
async def all_orders() -> list[dict]:
    return list_all_orders()


@admin_router.put("/orders/{order_id}/status")
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> dict:
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    order = current_domain.process(command, asynchronous=False)
    return {"message": "Order status updated", "order": order}


@admin_router.put("/products/{product_id}")
async def update_product(product_id: str, body: ProductRequest) -> dict:
    command = UpdateProduct(product_id=product_id, **body.model_dump())
    product = current_domain.process(command, asynchronous=False)
    return {"message": "Product updated successfully", "product": product}


@admin_router.delete("/products/{product_id}")
async def delete_product(product_id: str) -> dict:
    product = current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return {"message": "Product deleted successfully", "product": product}
