"""Order status updates and cancellation — commands and handlers."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.inventory.ledger import restore_stock
from commerce.ordering.order import Order, OrderStatus
from commerce.shared.access import Role, require_admin, require_owner_or_admin
from commerce.shared.errors import NotFound

logger = structlog.get_logger(__name__)


@commerce.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    new_status = String(required=True, choices=OrderStatus)
    tracking_number = String(max_length=100)
    actor_role = String(required=True, choices=Role)


@commerce.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=Role)


def load_order(order_id) -> Order:
    order = current_domain.repository_for(Order).get_or_none(str(order_id))
    if order is None:
        raise NotFound("Order", order_id)
    return order


@commerce.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        require_admin(command.actor_role, "update order status")

        order = load_order(command.order_id)
        order.advance_to(command.new_status, tracking_number=command.tracking_number)
        current_domain.repository_for(Order).add(order)

        logger.info("order_status_updated", order_id=str(order.id), status=order.status)
        return str(order.id)

    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_order(command.order_id)
        require_owner_or_admin(order.user_id, command.actor_id, command.actor_role, "cancel this order")

        order.cancel(cancelled_by=command.actor_id)
        for item in order.items:
            restore_stock(item.product_id, item.quantity)
        current_domain.repository_for(Order).add(order)

        logger.info("order_cancelled", order_id=str(order.id), cancelled_by=str(command.actor_id))
        return str(order.id)
