"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from the checkout request the
order compiler consumes.
"""

from pydantic import BaseModel, Field

from ordering.order.order import Order, OrderItem, PaymentMethod, ShippingMethod


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": 1,
                    "product_id": 2,
                    "quantity": 1,
                    "color": "Black",
                    "size": "M",
                }
            ]
        }
    }

    user_id: int
    product_id: int
    quantity: int | None = None
    color: str | None = None
    size: str | None = None


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": 1,
                    "address": "123 Main St",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "shipping_method": "standard",
                    "payment_method": "credit",
                    "idempotency_key": "checkout-6f1c2a",
                }
            ]
        }
    }

    user_id: int
    address: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    zip_code: str = Field(..., max_length=20)
    shipping_method: ShippingMethod = ShippingMethod.STANDARD
    payment_method: PaymentMethod = PaymentMethod.CREDIT
    idempotency_key: str | None = Field(None, max_length=100)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderDetailResponse(BaseModel):
    order: Order
    items: list[OrderItem]
