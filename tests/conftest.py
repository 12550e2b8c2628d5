import json
import os
from pathlib import Path
from uuid import uuid4

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture

ADDRESS = {
    "street": "12 Harbour Road",
    "city": "Portland",
    "state": "OR",
    "zip_code": "97201",
    "country": "USA",
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)

        if "concurren" in item.name:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def commerce_bed():
    from commerce.domain import commerce

    bed = DomainFixture(commerce)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(commerce_bed):
    with commerce_bed.domain_context() as domain:
        yield domain


@pytest.fixture(autouse=True)
def services(_ctx):
    """Fresh fake collaborators for every test."""
    from commerce.shared.services import default_services, install_services

    return install_services(_ctx, default_services(_ctx))


@pytest.fixture()
def email_adapter(services):
    return services.notifications.email


@pytest.fixture()
def receipt_renderer(services):
    return services.notifications.receipts


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    from commerce.catalogue.management import AddProduct

    def _make(name="Walnut Desk", price=100.0, stock=10, **fields):
        command = AddProduct(actor_role="Admin", name=name, price=price, stock=stock, **fields)
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_user():
    from commerce.identity.registration import RegisterUser

    def _make(name="Dana", email=None, role="Customer"):
        email = email or f"{name.lower()}-{uuid4().hex[:8]}@example.com"
        return current_domain.process(RegisterUser(name=name, email=email, role=role), asynchronous=False)

    return _make


@pytest.fixture()
def place_order():
    from commerce.ordering.creation import CreateOrder

    def _place(user_id, lines, payment_method="Credit Card", address=None):
        command = CreateOrder(
            user_id=user_id,
            items=json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in lines]),
            shipping_address=json.dumps(address or ADDRESS),
            payment_method=payment_method,
        )
        return current_domain.process(command, asynchronous=False)

    return _place


@pytest.fixture()
def advance_order():
    from commerce.ordering.status import UpdateOrderStatus

    def _advance(order_id, *statuses, tracking_number=None):
        for status in statuses:
            current_domain.process(
                UpdateOrderStatus(
                    order_id=order_id,
                    new_status=status,
                    tracking_number=tracking_number,
                    actor_role="Admin",
                ),
                asynchronous=False,
            )
        return order_id

    return _advance


@pytest.fixture()
def delivered_order(place_order, advance_order):
    """Place an order for ``product_id`` and walk it through to Delivered."""

    def _deliver(user_id, product_id, quantity=1):
        order_id = place_order(user_id, [(product_id, quantity)])
        return advance_order(order_id, "Processing", "Shipped", "Delivered")

    return _deliver


@pytest.fixture()
def address():
    return dict(ADDRESS)
