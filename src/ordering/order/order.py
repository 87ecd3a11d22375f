"""Order and OrderItem records.

An Order's totals and every OrderItem's unit price are frozen when the order
is placed; later catalogue price changes never touch them.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ShippingMethod(Enum):
    FREE = "free"
    STANDARD = "standard"
    EXPRESS = "express"


class PaymentMethod(Enum):
    CREDIT = "credit"
    PAYPAL = "paypal"


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    subtotal: float = Field(ge=0)
    shipping_cost: float = Field(ge=0)
    tax: float = Field(ge=0)
    total: float = Field(ge=0)
    status: OrderStatus = OrderStatus.PENDING
    shipping_method: ShippingMethod
    payment_method: PaymentMethod
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    idempotency_key: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class OrderItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    order_id: int
    product_id: int
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)  # Unit price at time of purchase
    color: str | None = None
    size: str | None = None
