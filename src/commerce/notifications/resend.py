"""ResendOrderNotification — admin re-trigger of the order status email."""

import structlog
from protean import handle
from protean.fields import Identifier, String

from commerce.domain import commerce
from commerce.identity.registration import load_user
from commerce.ordering.order import Order
from commerce.ordering.status import load_order
from commerce.shared.access import Role, require_admin
from commerce.shared.errors import ExternalServiceFailure
from commerce.shared.services import get_services

logger = structlog.get_logger(__name__)


@commerce.command(part_of="Order")
class ResendOrderNotification:
    order_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)


@commerce.command_handler(part_of=Order)
class ResendOrderNotificationHandler:
    @handle(ResendOrderNotification)
    def resend(self, command):
        require_admin(command.actor_role, "resend order notifications")

        order = load_order(command.order_id)
        user = load_user(order.user_id)
        try:
            return get_services().notifications.send_order_status_update(order, user)
        except ExternalServiceFailure as exc:
            logger.error("order_notification_resend_failed", order_id=str(order.id), error=str(exc))
            raise
