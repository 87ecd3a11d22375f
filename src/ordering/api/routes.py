"""FastAPI routes for the Ordering domain: carts and orders."""

from fastapi import APIRouter, Depends, Response
from protean.exceptions import ObjectNotFoundError

from ordering.api.schemas import (
    AddToCartRequest,
    OrderDetailResponse,
    PlaceOrderRequest,
    UpdateCartQuantityRequest,
)
from ordering.cart.cart import CartItem
from ordering.cart.snapshot import PricedSnapshot
from ordering.checkout.compiler import CheckoutRequest
from ordering.order.order import Order
from storefront import Storefront, get_storefront

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("/{user_id}", response_model=PricedSnapshot)
def get_cart(user_id: int, storefront: Storefront = Depends(get_storefront)) -> PricedSnapshot:
    return storefront.cart.price_snapshot(user_id)


@cart_router.post("", status_code=201, response_model=CartItem)
def add_cart_item(body: AddToCartRequest, storefront: Storefront = Depends(get_storefront)) -> CartItem:
    return storefront.cart.add_item(
        user_id=body.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
        color=body.color,
        size=body.size,
    )


@cart_router.put("/{item_id}", response_model=CartItem)
def update_cart_item_quantity(
    item_id: int, body: UpdateCartQuantityRequest, storefront: Storefront = Depends(get_storefront)
) -> CartItem:
    item = storefront.cart.set_quantity(item_id, body.quantity)
    if item is None:
        raise ObjectNotFoundError("Cart item not found")
    return item


@cart_router.delete("/user/{user_id}", status_code=204)
def clear_cart(user_id: int, storefront: Storefront = Depends(get_storefront)) -> Response:
    storefront.cart.clear(user_id)
    return Response(status_code=204)


@cart_router.delete("/{item_id}", status_code=204)
def remove_cart_item(item_id: int, storefront: Storefront = Depends(get_storefront)) -> Response:
    storefront.cart.remove(item_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderDetailResponse)
def place_order(body: PlaceOrderRequest, storefront: Storefront = Depends(get_storefront)) -> OrderDetailResponse:
    """Check out the user's cart.

    1. Price the cart against live product prices
    2. Write the order, its items and the cart clear in one transaction
    3. Return the order together with its items
    """
    request = CheckoutRequest.build(**body.model_dump())
    order = storefront.checkout.place_order(request)
    return OrderDetailResponse(order=order, items=storefront.orders.items_for(order.id))


@order_router.get("/user/{user_id}", response_model=list[Order])
def list_user_orders(user_id: int, storefront: Storefront = Depends(get_storefront)) -> list[Order]:
    return storefront.orders.orders_for(user_id)


@order_router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order(order_id: int, storefront: Storefront = Depends(get_storefront)) -> OrderDetailResponse:
    order = storefront.orders.get(order_id)
    if order is None:
        raise ObjectNotFoundError("Order not found")
    return OrderDetailResponse(order=order, items=storefront.orders.items_for(order_id))
