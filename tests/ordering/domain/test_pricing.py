"""Tests for checkout pricing."""

import pytest
from commerce.ordering.pricing import PricingPolicy, price_order


def test_policy_reads_domain_constants():
    policy = PricingPolicy.from_domain()
    assert policy.tax_rate == 0.08
    assert policy.free_shipping_threshold == 500.0
    assert policy.flat_shipping_fee == 50.0


def test_flat_shipping_below_threshold():
    pricing = price_order(100.0)
    assert pricing["items_price"] == 100.0
    assert pricing["tax_price"] == pytest.approx(8.0)
    assert pricing["shipping_price"] == 50.0
    assert pricing["total_price"] == pytest.approx(158.0)


def test_threshold_itself_still_pays_shipping():
    assert price_order(500.0)["shipping_price"] == 50.0


def test_free_shipping_above_threshold():
    pricing = price_order(500.01)
    assert pricing["shipping_price"] == 0.0
    assert pricing["total_price"] == pytest.approx(500.01 * 1.08)


def test_custom_policy():
    policy = PricingPolicy(tax_rate=0.1, free_shipping_threshold=50.0, flat_shipping_fee=5.0)
    pricing = price_order(40.0, policy)
    assert pricing["tax_price"] == pytest.approx(4.0)
    assert pricing["shipping_price"] == 5.0
    assert pricing["total_price"] == pytest.approx(49.0)
