"""Product record: a sellable catalogue entry."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Product(BaseModel):
    """A catalogue product.

    ``category`` holds a Category *name*, not an id. The catalogue service
    checks it against the known categories on write.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(min_length=1)
    description: str
    price: float = Field(ge=0)
    discounted_price: float | None = Field(default=None, ge=0)
    category: str = Field(min_length=1)
    image: str
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    stock: int = Field(default=0, ge=0)
    featured: bool = False
    badge: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def discount_cannot_exceed_price(self) -> "Product":
        if self.discounted_price is not None and self.discounted_price > self.price:
            raise ValueError("Discounted price cannot exceed the base price")
        return self

    @property
    def unit_price(self) -> float:
        """Price a buyer pays right now: the discounted price when present."""
        return self.discounted_price if self.discounted_price is not None else self.price
