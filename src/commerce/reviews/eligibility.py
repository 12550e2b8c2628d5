"""Lookups shared by review submission and ``can_user_review``."""

from protean.utils.globals import current_domain

from commerce.ordering.order import PURCHASED_STATUSES, Order
from commerce.reviews.review import Review


def has_purchased(user_id, product_id) -> bool:
    """True when the user has a Delivered or Completed order containing the product."""
    orders = (
        current_domain.repository_for(Order)
        ._dao.query.filter(user_id=str(user_id), status__in=list(PURCHASED_STATUSES))
        .limit(None)
        .all()
    )
    return any(order.contains_product(product_id) for order in orders.items)


def find_review(user_id, product_id) -> Review | None:
    return (
        current_domain.repository_for(Review)
        ._dao.query.filter(user_id=str(user_id), product_id=str(product_id))
        .all()
        .first
    )
