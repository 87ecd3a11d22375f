"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from pytest_bdd import given, parsers, then

IMAGE = "https://images.example.com/catalogue.jpg"


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def results():
    """Products returned by the last When step."""
    return {"products": None}


@pytest.fixture()
def error():
    """Container for a captured catalogue error."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a category "{name}"'))
def category(catalogue, name):
    catalogue.add_category(name=name, image=IMAGE)


@given(parsers.cfparse('a featured product "{name}" in "{category}"'))
def featured_product(catalogue, name, category):
    catalogue.add_product(
        name=name, description=f"{name} for every day", price=40.0, category=category, image=IMAGE, featured=True
    )


@given(parsers.cfparse('a product "{name}" in "{category}"'))
def plain_product(catalogue, name, category):
    catalogue.add_product(name=name, description=f"{name} for every day", price=30.0, category=category, image=IMAGE)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the results are "{names}"'))
def results_are(results, names):
    assert [p.name for p in results["products"]] == [n.strip() for n in names.split(",")]


@then("there are no results")
def no_results(results):
    assert results["products"] == []
