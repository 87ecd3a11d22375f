"""Order compiler: converts a user's priced cart into an Order and OrderItems.

Each checkout runs as a ``CheckoutAttempt``:

    COLLECTING → PRICED → COMMITTED
         └──────────┴───→ FAILED

A failed attempt is terminal; the caller starts a new one. Pricing, the order,
its items and the removal of the priced cart lines all happen inside a single
store transaction, so a reader sees either the whole order with those lines
gone or no order with the cart untouched. Lines that were not priced are never
removed. Checkouts for the same user are serialised by a per-user lock, and an
optional idempotency key makes a repeated submission return the order it
already produced.
"""

from enum import Enum

import structlog
from protean.exceptions import InvalidStateError, ValidationError
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from ordering.cart.cart import CartAggregator
from ordering.cart.snapshot import PricedSnapshot
from ordering.checkout.locks import UserLocks
from ordering.checkout.pricing import OrderTotals, compute_totals
from ordering.order.order import Order, OrderItem, OrderStatus, PaymentMethod, ShippingMethod
from shared.config import Settings
from shared.errors import validation_error_from
from shared.store import EntityStore

logger = structlog.get_logger(__name__)


class CheckoutState(Enum):
    COLLECTING = "collecting"
    PRICED = "priced"
    COMMITTED = "committed"
    FAILED = "failed"


class CheckoutRequest(BaseModel):
    """Everything a checkout needs apart from the cart itself."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    user_id: int
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    shipping_method: ShippingMethod = ShippingMethod.STANDARD
    payment_method: PaymentMethod = PaymentMethod.CREDIT
    idempotency_key: str | None = None

    @classmethod
    def build(cls, **fields) -> "CheckoutRequest":
        try:
            return cls.model_validate(fields)
        except SchemaError as exc:
            raise validation_error_from(exc) from exc


class CheckoutAttempt:
    """A single, non-retryable pass through the checkout state machine."""

    def __init__(self, request: CheckoutRequest, cart: CartAggregator, store: EntityStore, settings: Settings):
        self.request = request
        self.cart = cart
        self.store = store
        self.settings = settings

        self.state = CheckoutState.COLLECTING
        self.snapshot: PricedSnapshot | None = None
        self.totals: OrderTotals | None = None
        self.order: Order | None = None
        self.failure: Exception | None = None

    def run(self) -> Order:
        if self.state != CheckoutState.COLLECTING:
            raise InvalidStateError(f"Checkout attempt already {self.state.value}; start a new checkout")

        try:
            with self.store.transaction():
                self._price()
                return self._commit()
        except Exception as exc:
            self.state = CheckoutState.FAILED
            self.failure = exc
            logger.warning(
                "Checkout failed",
                user_id=self.request.user_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

    def _price(self) -> None:
        snapshot = self.cart.price_snapshot(self.request.user_id)
        if snapshot.is_empty:
            raise ValidationError({"cart": ["Cannot place an order with an empty cart"]})

        self.snapshot = snapshot
        self.totals = compute_totals(snapshot.subtotal, self.request.shipping_method, self.settings)
        self.state = CheckoutState.PRICED

    def _commit(self) -> Order:
        request, totals = self.request, self.totals

        order = self.store.create(
            Order,
            user_id=request.user_id,
            subtotal=totals.subtotal,
            shipping_cost=totals.shipping_cost,
            tax=totals.tax,
            total=totals.total,
            status=OrderStatus.PENDING,
            shipping_method=request.shipping_method,
            payment_method=request.payment_method,
            address=request.address,
            city=request.city,
            state=request.state,
            zip_code=request.zip_code,
            idempotency_key=request.idempotency_key,
        )

        for line in self.snapshot.lines:
            self.store.create(
                OrderItem,
                order_id=order.id,
                product_id=line.product_id,
                quantity=line.quantity,
                price=line.unit_price,
                color=line.color,
                size=line.size,
            )

        self.cart.clear_lines(self.snapshot)

        self.order = order
        self.state = CheckoutState.COMMITTED
        return order


class OrderCompiler:
    def __init__(self, store: EntityStore, cart: CartAggregator, settings: Settings, locks: UserLocks | None = None):
        self.store = store
        self.cart = cart
        self.settings = settings
        self.locks = locks or UserLocks()

    def _committed_order(self, user_id: int, idempotency_key: str) -> Order | None:
        return next(
            self.store.list(
                Order,
                lambda order: order.user_id == user_id and order.idempotency_key == idempotency_key,
            ),
            None,
        )

    def place_order(self, request: CheckoutRequest) -> Order:
        """Place an order from the user's current cart."""
        with self.locks.hold(request.user_id):
            if request.idempotency_key:
                previous = self._committed_order(request.user_id, request.idempotency_key)
                if previous is not None:
                    logger.info(
                        "Duplicate checkout submission",
                        user_id=request.user_id,
                        order_id=previous.id,
                        idempotency_key=request.idempotency_key,
                    )
                    return previous

            attempt = CheckoutAttempt(request, self.cart, self.store, self.settings)
            order = attempt.run()

        logger.info(
            "Order placed",
            user_id=order.user_id,
            order_id=order.id,
            item_count=len(attempt.snapshot.lines),
            total=order.total,
        )
        return order
