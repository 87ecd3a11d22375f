"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from catalogue.product.product import Product
from pytest_bdd import given, parsers, then, when

SHOPPER = 1


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Products created by Given steps, keyed by name."""
    return {}


@pytest.fixture()
def error():
    """Container for a captured checkout error."""
    return {"exc": None}


@pytest.fixture()
def placed():
    return {"order": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} discounted to {discounted:f}'))
def discounted_product(make_product, products, name, price, discounted):
    products[name] = make_product(name=name, price=price, discounted_price=discounted)


@given(parsers.cfparse('a product "{name}" priced {price:f}'))
def product(make_product, products, name, price):
    products[name] = make_product(name=name, price=price)


@given(parsers.cfparse('the shopper has {qty:d} of "{name}" in the cart'))
def cart_holds(cart, products, qty, name):
    cart.add_item(SHOPPER, products[name].id, qty)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper adds {qty:d} of "{name}" to the cart'))
def add_to_cart(cart, products, qty, name):
    cart.add_item(SHOPPER, products[name].id, qty)


@when(parsers.cfparse('the price of "{name}" changes to {price:f}'))
def change_price(store, products, name, price):
    store.update(Product, products[name].id, price=price, discounted_price=None)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_lines(cart, count):
    assert len(cart.items(SHOPPER)) == count


@then("the cart is empty")
def cart_is_empty(cart):
    assert cart.items(SHOPPER) == []
