"""Shared BDD fixtures and step definitions for the cart."""

import pytest
from commerce.cart.items import AddCartItem
from commerce.shared.errors import InsufficientStock
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def user_id():
    return "cust-001"


@pytest.fixture()
def outcome():
    """Container for the latest cart view or captured error."""
    return {"view": None, "exc": None}


@given(parsers.cfparse("a product with {stock:d} units in stock"), target_fixture="product_id")
def product_in_stock(make_product, stock):
    return make_product(name="Stoneware Mug", price=12.0, stock=stock)


@given(parsers.cfparse("the customer has {qty:d} units in the cart"))
def customer_has_units(user_id, product_id, qty, outcome):
    outcome["view"] = current_domain.process(
        AddCartItem(user_id=user_id, product_id=product_id, quantity=qty),
        asynchronous=False,
    )


@then("the request fails with insufficient stock")
def fails_with_insufficient_stock(outcome):
    assert isinstance(outcome["exc"], InsufficientStock)
