import os
from pathlib import Path

import pytest

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STOREFRONT_SEED", "false")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Core fixtures: a fresh store and services per test
# ---------------------------------------------------------------------------
@pytest.fixture()
def settings():
    from shared.config import Settings

    return Settings(seed_catalogue=False, environment="test")


@pytest.fixture()
def storefront(settings):
    from storefront import Storefront

    return Storefront(settings)


@pytest.fixture()
def store(storefront):
    return storefront.store


@pytest.fixture()
def catalogue(storefront):
    return storefront.catalogue


@pytest.fixture()
def cart(storefront):
    return storefront.cart


@pytest.fixture()
def compiler(storefront):
    return storefront.checkout


@pytest.fixture()
def accounts(storefront):
    return storefront.accounts


@pytest.fixture()
def history(storefront):
    return storefront.orders


@pytest.fixture()
def make_product(catalogue):
    """Factory creating products in a default category."""
    categories = set()

    def _make(**overrides):
        fields = {
            "name": "Widget",
            "description": "A useful widget",
            "price": 10.0,
            "category": "Gadgets",
            "image": "https://images.example.com/widget.jpg",
            "stock": 10,
        }
        fields.update(overrides)
        if fields["category"] not in categories and catalogue.category_named(fields["category"]) is None:
            catalogue.add_category(name=fields["category"], image="https://images.example.com/category.jpg")
        categories.add(fields["category"])
        return catalogue.add_product(**fields)

    return _make


@pytest.fixture()
def shipping_address():
    return {
        "address": "123 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
    }
