"""Shopping cart: per-user cart lines, merge-on-add, and priced snapshots.

A user's cart is the set of CartItem records carrying their ``user_id``. The
natural key of a line is ``(user_id, product_id)``: adding a product already
in the cart increases that line's quantity, whatever colour or size the new
request carries. The line keeps the variant selectors it was created with,
filling in any that were empty.
"""

import structlog
from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError
from pydantic import BaseModel, ConfigDict, Field

from catalogue.product.product import Product
from ordering.cart.snapshot import PricedLine, PricedSnapshot
from shared.errors import DataIntegrityError
from shared.store import EntityStore

logger = structlog.get_logger(__name__)

CART_LINE_KEY = ("user_id", "product_id")


class CartItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    product_id: int
    quantity: int = Field(default=1, ge=1)
    color: str | None = None
    size: str | None = None


class CartAggregator:
    def __init__(self, store: EntityStore):
        self.store = store

    def items(self, user_id: int) -> list[CartItem]:
        return list(self.store.list(CartItem, lambda item: item.user_id == user_id))

    def line_for(self, user_id: int, product_id: int) -> CartItem | None:
        return next(
            self.store.list(CartItem, lambda item: item.user_id == user_id and item.product_id == product_id),
            None,
        )

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(
        self,
        user_id: int,
        product_id: int,
        quantity: int | None = None,
        color: str | None = None,
        size: str | None = None,
    ) -> CartItem:
        """Add a product to the user's cart (or increase quantity if already present)."""
        quantity = 1 if quantity is None else quantity

        with self.store.locked():
            if self.store.get(Product, product_id) is None:
                raise ObjectNotFoundError(f"Product {product_id} does not exist")

            existing = self.line_for(user_id, product_id)
            if existing:
                merged = existing.quantity + quantity
                if merged < 1:
                    raise ValidationError({"quantity": ["Quantity must be at least 1"]})

                item = self.store.update(
                    CartItem,
                    existing.id,
                    quantity=merged,
                    color=existing.color or color,
                    size=existing.size or size,
                )
            else:
                if quantity < 1:
                    raise ValidationError({"quantity": ["Quantity must be at least 1"]})

                item = self.store.create(
                    CartItem,
                    unique_on=CART_LINE_KEY,
                    user_id=user_id,
                    product_id=product_id,
                    quantity=quantity,
                    color=color,
                    size=size,
                )

        logger.info(
            "Cart item added",
            user_id=user_id,
            cart_item_id=item.id,
            product_id=product_id,
            quantity=item.quantity,
            merged=existing is not None,
        )
        return item

    def set_quantity(self, cart_item_id: int, quantity: int) -> CartItem | None:
        """Replace a line's quantity. Returns None when the line does not exist."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self.store.update(CartItem, cart_item_id, quantity=quantity)
        if item is not None:
            logger.info("Cart quantity updated", cart_item_id=cart_item_id, quantity=quantity)
        return item

    def remove(self, cart_item_id: int) -> None:
        self.store.delete(CartItem, cart_item_id)

    def clear(self, user_id: int) -> int:
        """Remove every line in the user's cart at once; returns the number removed."""
        removed = self.store.delete_where(CartItem, lambda item: item.user_id == user_id)
        if removed:
            logger.info("Cart cleared", user_id=user_id, removed=removed)
        return removed

    def clear_lines(self, snapshot: PricedSnapshot) -> int:
        """Remove exactly the lines a snapshot priced.

        Lines added after the snapshot stay in the cart. A priced line that has
        since disappeared or changed quantity raises ``InvalidStateError``.
        """
        with self.store.locked():
            for line in snapshot.lines:
                current = self.store.get(CartItem, line.cart_item_id)
                if current is None or current.quantity != line.quantity:
                    raise InvalidStateError(f"Cart item {line.cart_item_id} changed while checking out")

            priced_ids = {line.cart_item_id for line in snapshot.lines}
            removed = self.store.delete_where(CartItem, lambda item: item.id in priced_ids)

        if removed:
            logger.info("Cart lines checked out", user_id=snapshot.user_id, removed=removed)
        return removed

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def price_snapshot(self, user_id: int) -> PricedSnapshot:
        """Join the user's lines with live product prices.

        Raises ``DataIntegrityError`` when a line references a product that no
        longer exists; such lines are never skipped.
        """
        lines = []
        with self.store.locked():
            for item in self.items(user_id):
                product = self.store.get(Product, item.product_id)
                if product is None:
                    logger.error(
                        "Cart line references missing product",
                        user_id=user_id,
                        cart_item_id=item.id,
                        product_id=item.product_id,
                    )
                    raise DataIntegrityError(f"Product {item.product_id} not found for cart item {item.id}")

                lines.append(
                    PricedLine(
                        cart_item_id=item.id,
                        product_id=product.id,
                        quantity=item.quantity,
                        color=item.color,
                        size=item.size,
                        unit_price=product.unit_price,
                        line_total=item.quantity * product.unit_price,
                        product=product,
                    )
                )

        return PricedSnapshot(user_id=user_id, lines=tuple(lines))
