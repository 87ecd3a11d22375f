"""Checkout pricing: flat-rate shipping tiers and tax."""

from protean.exceptions import ValidationError
from pydantic import BaseModel, ConfigDict

from ordering.order.order import ShippingMethod
from shared.config import Settings


class OrderTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: float
    shipping_cost: float
    tax: float
    total: float


def shipping_cost(method: ShippingMethod, subtotal: float, settings: Settings) -> float:
    """Flat rate for ``method``. Free shipping requires the configured minimum subtotal."""
    if method == ShippingMethod.FREE:
        if subtotal < settings.free_shipping_threshold:
            raise ValidationError(
                {
                    "shipping_method": [
                        f"Free shipping requires a subtotal of at least {settings.free_shipping_threshold:.2f}"
                    ]
                }
            )
        return 0.0
    if method == ShippingMethod.STANDARD:
        return settings.standard_shipping
    return settings.express_shipping


def compute_totals(subtotal: float, method: ShippingMethod, settings: Settings) -> OrderTotals:
    """tax = subtotal x tax rate; total = subtotal + shipping + tax, both rounded to cents."""
    shipping = shipping_cost(method, subtotal, settings)
    tax = round(subtotal * settings.tax_rate, 2)
    return OrderTotals(
        subtotal=round(subtotal, 2),
        shipping_cost=shipping,
        tax=tax,
        total=round(subtotal + shipping + tax, 2),
    )
