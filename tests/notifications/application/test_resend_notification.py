"""Application tests for ResendOrderNotification."""

import pytest
from commerce.notifications.resend import ResendOrderNotification
from commerce.shared.errors import ExternalServiceFailure, NotFound, Unauthorized
from protean import current_domain


@pytest.fixture()
def order_id(make_user, make_product, place_order, advance_order):
    order_id = place_order(make_user(email="sam@example.com"), [(make_product(), 1)])
    return advance_order(order_id, "Processing")


def _resend(order_id, role="Admin"):
    return current_domain.process(
        ResendOrderNotification(order_id=order_id, actor_role=role),
        asynchronous=False,
    )


def test_resends_status_email(order_id, email_adapter):
    before = len(email_adapter.sent_emails)

    message_id = _resend(order_id)

    assert len(email_adapter.sent_emails) == before + 1
    resent = email_adapter.sent_emails[-1]
    assert resent["message_id"] == message_id
    assert resent["to"] == "sam@example.com"
    assert resent["attachments"][0]["filename"] == f"receipt-{order_id}.pdf"


def test_failure_is_reported_to_the_admin(order_id, email_adapter):
    email_adapter.configure(should_succeed=False)
    with pytest.raises(ExternalServiceFailure):
        _resend(order_id)


def test_receipt_failure_is_reported(order_id, receipt_renderer):
    receipt_renderer.configure(should_succeed=False, failure_reason="renderer offline")
    with pytest.raises(ExternalServiceFailure) as exc:
        _resend(order_id)
    assert exc.value.reason == "renderer offline"


def test_admin_only(order_id):
    with pytest.raises(Unauthorized):
        _resend(order_id, role="Customer")


def test_unknown_order():
    with pytest.raises(NotFound):
        _resend("missing")
