"""Priced cart snapshot: an immutable, point-in-time view of a cart with prices."""

from pydantic import BaseModel, ConfigDict, computed_field

from catalogue.product.product import Product


class PricedLine(BaseModel):
    """One cart line joined with its product, priced at snapshot time."""

    model_config = ConfigDict(frozen=True)

    cart_item_id: int
    product_id: int
    quantity: int
    color: str | None = None
    size: str | None = None
    unit_price: float
    line_total: float
    product: Product


class PricedSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    lines: tuple[PricedLine, ...] = ()

    @computed_field
    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines
