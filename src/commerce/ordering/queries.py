"""Order read operations: single order, a customer's history, admin listing."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from commerce.ordering.order import Order, OrderStatus
from commerce.ordering.status import load_order
from commerce.shared.access import require_admin, require_owner_or_admin
from commerce.shared.paging import Page, paginate


def get_order(order_id, actor_id, actor_role) -> Order:
    order = load_order(order_id)
    require_owner_or_admin(order.user_id, actor_id, actor_role, "view this order")
    return order


def list_orders_for_user(user_id) -> list[Order]:
    """All of a customer's orders, newest first."""
    repo = current_domain.repository_for(Order)
    return repo._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(None).all().items


def list_all_orders(actor_role, status=None, page=1, limit=None) -> Page:
    """Admin listing with an optional status filter, newest first."""
    require_admin(actor_role, "list all orders")

    query = current_domain.repository_for(Order)._dao.query
    if status is not None:
        try:
            query = query.filter(status=OrderStatus(status).value)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status {status}"]}) from None

    return paginate(query.order_by("-created_at"), page, limit)
