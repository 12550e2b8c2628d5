"""Order notifications — confirmation and status-update emails.

Runs after the order change has committed. Collaborator failures are logged
and swallowed here; the order itself is already durable.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from commerce.domain import commerce
from commerce.identity.user import User
from commerce.ordering.events import OrderPlaced, OrderStatusChanged
from commerce.ordering.order import Order
from commerce.shared.errors import ExternalServiceFailure
from commerce.shared.services import get_services

logger = structlog.get_logger(__name__)


def _load_recipient(event):
    order = current_domain.repository_for(Order).get_or_none(str(event.order_id))
    user = current_domain.repository_for(User).get_or_none(str(event.user_id))
    if order is None or user is None:
        logger.warning(
            "order_notification_skipped",
            order_id=str(event.order_id),
            user_id=str(event.user_id),
            reason="order or user not found",
        )
        return None, None
    return order, user


@commerce.event_handler(part_of=Order)
class OrderNotificationsHandler:
    """Emails customers when orders are placed or move forward."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        order, user = _load_recipient(event)
        if order is None:
            return

        try:
            get_services().notifications.send_order_confirmation(order, user)
        except ExternalServiceFailure as exc:
            logger.error("order_confirmation_failed", order_id=str(order.id), error=str(exc))
            return

        order.mark_confirmation_sent()
        current_domain.repository_for(Order).add(order)

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        order, user = _load_recipient(event)
        if order is None:
            return

        try:
            get_services().notifications.send_order_status_update(order, user)
        except ExternalServiceFailure as exc:
            logger.error(
                "order_status_email_failed",
                order_id=str(order.id),
                status=event.new_status,
                error=str(exc),
            )
            return

        order.mark_status_email_sent(event.new_status)
        current_domain.repository_for(Order).add(order)
