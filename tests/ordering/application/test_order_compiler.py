"""Tests for placing orders: totals, frozen prices, atomicity and idempotency."""

import threading

import pytest
from catalogue.product.product import Product
from ordering.cart.cart import CartItem
from ordering.checkout import compiler as compiler_module
from ordering.checkout.compiler import CheckoutAttempt, CheckoutRequest, CheckoutState
from ordering.order.order import Order, OrderItem, OrderStatus, PaymentMethod, ShippingMethod
from protean.exceptions import InvalidStateError, ValidationError
from shared.errors import DataIntegrityError

USER = 1


@pytest.fixture()
def checkout_request(shipping_address):
    def _request(**overrides):
        fields = {"user_id": USER, **shipping_address}
        fields.update(overrides)
        return CheckoutRequest.build(**fields)

    return _request


class TestPlaceOrder:
    def test_creates_one_order_and_one_item_per_line(self, cart, compiler, make_product, store, checkout_request):
        a = make_product(name="A", price=20.0)
        b = make_product(name="B", price=15.0)
        cart.add_item(USER, a.id, 2)
        cart.add_item(USER, b.id, 1)

        order = compiler.place_order(checkout_request())

        assert store.count(Order) == 1
        items = list(store.list(OrderItem, lambda item: item.order_id == order.id))
        assert sorted((i.product_id, i.quantity, i.price) for i in items) == [(a.id, 2, 20.0), (b.id, 1, 15.0)]
        assert cart.items(USER) == []

    def test_order_fields(self, cart, compiler, make_product, checkout_request, shipping_address):
        product = make_product(price=40.0)
        cart.add_item(USER, product.id, 1)

        order = compiler.place_order(
            checkout_request(shipping_method="express", payment_method="paypal"),
        )

        assert order.status == OrderStatus.PENDING
        assert order.user_id == USER
        assert order.shipping_method == ShippingMethod.EXPRESS
        assert order.payment_method == PaymentMethod.PAYPAL
        assert order.subtotal == 40.0
        assert order.shipping_cost == 12.99
        assert order.tax == 3.2
        assert order.total == 56.19
        assert order.address == shipping_address["address"]
        assert order.zip_code == shipping_address["zip_code"]
        assert order.created_at is not None

    def test_discount_scenario_total(self, cart, compiler, make_product, checkout_request):
        product = make_product(price=100.0, discounted_price=80.0)
        cart.add_item(USER, product.id, 2)
        assert cart.price_snapshot(USER).subtotal == pytest.approx(160.0)
        cart.add_item(USER, product.id, 1)
        assert cart.price_snapshot(USER).subtotal == pytest.approx(240.0)

        order = compiler.place_order(checkout_request(shipping_method="standard"))

        assert order.total == pytest.approx(265.19)

    def test_empty_cart_rejected_without_order(self, compiler, store, checkout_request):
        with pytest.raises(ValidationError) as exc_info:
            compiler.place_order(checkout_request())
        assert "cart" in exc_info.value.messages
        assert store.count(Order) == 0

    def test_free_shipping_below_threshold_rejected(self, cart, compiler, make_product, store, checkout_request):
        product = make_product(price=10.0)
        cart.add_item(USER, product.id, 1)

        with pytest.raises(ValidationError):
            compiler.place_order(checkout_request(shipping_method="free"))

        assert store.count(Order) == 0
        assert len(cart.items(USER)) == 1

    def test_other_users_cart_untouched(self, cart, compiler, make_product, checkout_request):
        product = make_product()
        cart.add_item(USER, product.id, 1)
        cart.add_item(2, product.id, 4)

        compiler.place_order(checkout_request())

        assert [item.quantity for item in cart.items(2)] == [4]


class TestFrozenPrices:
    def test_order_item_price_survives_product_price_change(
        self, cart, compiler, make_product, store, history, checkout_request
    ):
        product = make_product(price=100.0, discounted_price=90.0)
        cart.add_item(USER, product.id, 1)
        order = compiler.place_order(checkout_request())

        store.update(Product, product.id, price=200.0, discounted_price=None)

        assert [item.price for item in history.items_for(order.id)] == [90.0]
        assert history.get(order.id).total == order.total


class TestAtomicity:
    def test_vanished_product_aborts_whole_checkout(self, cart, compiler, make_product, store, checkout_request):
        kept = make_product(name="Kept")
        gone = make_product(name="Gone")
        cart.add_item(USER, kept.id)
        cart.add_item(USER, gone.id)
        store.delete(Product, gone.id)

        with pytest.raises(DataIntegrityError):
            compiler.place_order(checkout_request())

        assert store.count(Order) == 0
        assert store.count(OrderItem) == 0
        assert len(cart.items(USER)) == 2

    def test_failure_while_writing_items_rolls_back(
        self, cart, compiler, make_product, store, checkout_request, monkeypatch
    ):
        a = make_product(name="A")
        b = make_product(name="B")
        cart.add_item(USER, a.id)
        cart.add_item(USER, b.id)

        original_create = store.create
        written = []

        def flaky_create(kind, *args, **fields):
            if kind is OrderItem and written:
                raise RuntimeError("disk full")
            record = original_create(kind, *args, **fields)
            if kind is OrderItem:
                written.append(record)
            return record

        monkeypatch.setattr(store, "create", flaky_create)

        with pytest.raises(RuntimeError):
            compiler.place_order(checkout_request())

        assert written, "the first order item should have been written before the failure"
        assert store.count(Order) == 0
        assert store.count(OrderItem) == 0
        assert len(cart.items(USER)) == 2

    def test_failure_while_clearing_cart_rolls_back(
        self, cart, compiler, make_product, store, checkout_request, monkeypatch
    ):
        product = make_product()
        cart.add_item(USER, product.id, 3)

        def failing_clear(snapshot):
            raise RuntimeError("clear failed")

        monkeypatch.setattr(cart, "clear_lines", failing_clear)

        with pytest.raises(RuntimeError):
            compiler.place_order(checkout_request())

        assert store.count(Order) == 0
        assert store.count(OrderItem) == 0
        assert [item.quantity for item in store.list(CartItem)] == [3]


class TestCartChangesDuringCheckout:
    """Cart writes that land after pricing must not be ordered or lost."""

    @pytest.fixture()
    def during_pricing(self, monkeypatch):
        def _install(action):
            original = compiler_module.compute_totals

            def compute_then_act(*args, **kwargs):
                totals = original(*args, **kwargs)
                action()
                return totals

            monkeypatch.setattr(compiler_module, "compute_totals", compute_then_act)

        return _install

    def test_line_added_after_pricing_stays_in_cart(
        self, cart, compiler, make_product, store, checkout_request, during_pricing
    ):
        a = make_product(name="A", price=20.0)
        b = make_product(name="B", price=15.0)
        cart.add_item(USER, a.id, 1)
        during_pricing(lambda: cart.add_item(USER, b.id, 3))

        order = compiler.place_order(checkout_request())

        items = list(store.list(OrderItem, lambda item: item.order_id == order.id))
        assert [(i.product_id, i.quantity) for i in items] == [(a.id, 1)]
        assert order.subtotal == 20.0
        assert [(i.product_id, i.quantity) for i in cart.items(USER)] == [(b.id, 3)]

    def test_priced_line_changed_after_pricing_aborts_checkout(
        self, cart, compiler, make_product, store, checkout_request, during_pricing
    ):
        a = make_product(name="A", price=20.0)
        cart.add_item(USER, a.id, 1)
        during_pricing(lambda: cart.add_item(USER, a.id, 2))

        with pytest.raises(InvalidStateError):
            compiler.place_order(checkout_request())

        assert store.count(Order) == 0
        assert store.count(OrderItem) == 0
        assert [item.quantity for item in cart.items(USER)] == [1]

    def test_clear_lines_leaves_unpriced_lines(self, cart, make_product):
        a = make_product(name="A")
        b = make_product(name="B")
        cart.add_item(USER, a.id, 2)
        snapshot = cart.price_snapshot(USER)
        cart.add_item(USER, b.id)

        assert cart.clear_lines(snapshot) == 1
        assert [item.product_id for item in cart.items(USER)] == [b.id]

    def test_clear_lines_rejects_a_vanished_line(self, cart, make_product):
        a = make_product(name="A")
        line = cart.add_item(USER, a.id, 2)
        snapshot = cart.price_snapshot(USER)
        cart.remove(line.id)

        with pytest.raises(InvalidStateError):
            cart.clear_lines(snapshot)


class TestCheckoutAttempt:
    def test_successful_attempt_is_committed(self, cart, make_product, store, settings, checkout_request):
        product = make_product()
        cart.add_item(USER, product.id)

        attempt = CheckoutAttempt(checkout_request(), cart, store, settings)
        order = attempt.run()

        assert attempt.state == CheckoutState.COMMITTED
        assert attempt.order == order
        assert attempt.snapshot.subtotal == product.price

    def test_failed_attempt_is_terminal(self, cart, make_product, store, settings, checkout_request):
        attempt = CheckoutAttempt(checkout_request(), cart, store, settings)
        with pytest.raises(ValidationError):
            attempt.run()

        assert attempt.state == CheckoutState.FAILED
        assert isinstance(attempt.failure, ValidationError)

        product = make_product()
        cart.add_item(USER, product.id)
        with pytest.raises(InvalidStateError):
            attempt.run()

    def test_committed_attempt_cannot_run_again(self, cart, make_product, store, settings, checkout_request):
        product = make_product()
        cart.add_item(USER, product.id)
        attempt = CheckoutAttempt(checkout_request(), cart, store, settings)
        attempt.run()

        with pytest.raises(InvalidStateError):
            attempt.run()
        assert store.count(Order) == 1


class TestIdempotency:
    def test_repeated_key_returns_original_order(self, cart, compiler, make_product, store, checkout_request):
        product = make_product()
        cart.add_item(USER, product.id, 2)

        first = compiler.place_order(checkout_request(idempotency_key="abc"))
        cart.add_item(USER, product.id, 5)
        second = compiler.place_order(checkout_request(idempotency_key="abc"))

        assert second == first
        assert store.count(Order) == 1
        assert [item.quantity for item in cart.items(USER)] == [5]

    def test_new_key_places_new_order(self, cart, compiler, make_product, store, checkout_request):
        product = make_product()
        cart.add_item(USER, product.id)
        compiler.place_order(checkout_request(idempotency_key="one"))
        cart.add_item(USER, product.id)
        compiler.place_order(checkout_request(idempotency_key="two"))

        assert store.count(Order) == 2

    def test_keys_are_scoped_per_user(self, cart, compiler, make_product, store, checkout_request):
        product = make_product()
        cart.add_item(1, product.id)
        cart.add_item(2, product.id)

        compiler.place_order(checkout_request(user_id=1, idempotency_key="same"))
        compiler.place_order(checkout_request(user_id=2, idempotency_key="same"))

        assert store.count(Order) == 2


class TestConcurrentCheckout:
    def test_double_submission_produces_one_order(self, cart, compiler, make_product, store, checkout_request):
        product = make_product()
        cart.add_item(USER, product.id, 2)

        outcomes = []
        barrier = threading.Barrier(5)

        def submit():
            barrier.wait()
            try:
                outcomes.append(compiler.place_order(checkout_request()))
            except ValidationError as exc:
                outcomes.append(exc)

        threads = [threading.Thread(target=submit) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        orders = [outcome for outcome in outcomes if isinstance(outcome, Order)]
        assert len(orders) == 1
        assert store.count(Order) == 1
        assert store.count(OrderItem) == 1


class TestCheckoutRequest:
    def test_blank_address_rejected(self, shipping_address):
        with pytest.raises(ValidationError) as exc_info:
            CheckoutRequest.build(user_id=USER, **{**shipping_address, "city": "   "})
        assert "city" in exc_info.value.messages

    def test_unknown_shipping_method_rejected(self, shipping_address):
        with pytest.raises(ValidationError) as exc_info:
            CheckoutRequest.build(user_id=USER, shipping_method="teleport", **shipping_address)
        assert "shipping_method" in exc_info.value.messages

    def test_unknown_payment_method_rejected(self, shipping_address):
        with pytest.raises(ValidationError):
            CheckoutRequest.build(user_id=USER, payment_method="barter", **shipping_address)

    def test_defaults(self, shipping_address):
        request = CheckoutRequest.build(user_id=USER, **shipping_address)
        assert request.shipping_method == ShippingMethod.STANDARD
        assert request.payment_method == PaymentMethod.CREDIT
