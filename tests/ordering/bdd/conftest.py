"""Shared BDD fixtures and step definitions for orders."""

import pytest
from commerce.catalogue.product import Product
from commerce.ordering.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def outcome():
    return {"order_id": None, "exc": None}


@given("a registered customer", target_fixture="customer_id")
def registered_customer(make_user):
    return make_user(name="Morgan")


@given(
    parsers.cfparse("a product priced {price:g} on sale for {sale:g} with {stock:d} units in stock"),
    target_fixture="product_id",
)
def product_on_sale(make_product, price, sale, stock):
    return make_product(name="Rattan Chair", price=price, sale_price=sale, stock=stock)


@given(parsers.cfparse("the customer ordered {qty:d} units"))
def customer_ordered(customer_id, product_id, qty, place_order, outcome):
    outcome["order_id"] = place_order(customer_id, [(product_id, qty)])


@given("the order has been delivered")
def order_delivered(outcome, advance_order):
    advance_order(outcome["order_id"], "Processing", "Shipped", "Delivered")


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(outcome, status):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).status == status


@then(parsers.cfparse("the product has {stock:d} units in stock"))
def product_stock_is(product_id, stock):
    assert current_domain.repository_for(Product).get(product_id).stock == stock
