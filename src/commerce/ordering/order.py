"""Order aggregate (CQRS) — the record of a checkout and its fulfilment.

Line items and the price breakdown are snapshots taken when the order is
placed; later catalogue changes never touch them.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING or PROCESSING, via cancel)
    REFUNDED and COMPLETED are declared but nothing enters them yet.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from commerce.domain import commerce
from commerce.ordering.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from commerce.shared.errors import InvalidStateTransition


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"
    COMPLETED = "Completed"


class PaymentMethod(Enum):
    CREDIT_CARD = "Credit Card"
    PAYPAL = "PayPal"
    CASH_ON_DELIVERY = "Cash on Delivery"


# Transitions reachable through a status update
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
    OrderStatus.REFUNDED: set(),
    OrderStatus.COMPLETED: set(),
}

# States from which cancellation is allowed
_CANCELLABLE_STATES = {
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
}

# Statuses that count as a completed purchase for review eligibility
PURCHASED_STATUSES = (OrderStatus.DELIVERED.value, OrderStatus.COMPLETED.value)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@commerce.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, as entered at checkout."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100, default="USA")


@commerce.value_object(part_of="Order")
class OrderPricing:
    """Price breakdown computed once at checkout and never recomputed."""

    items_price = Float(required=True, min_value=0.0)
    tax_price = Float(required=True, min_value=0.0)
    shipping_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@commerce.entity(part_of="Order")
class OrderItem:
    """A purchased line: product reference plus name, price and image at checkout time."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    image_url = String(max_length=500)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@commerce.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    pricing = ValueObject(OrderPricing, required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    tracking_number = String(max_length=100)
    confirmation_email_sent = Boolean(default=False)
    shipped_email_sent = Boolean(default=False)
    delivered_email_sent = Boolean(default=False)
    cancelled_by = Identifier()
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, shipping_address, payment_method, pricing):
        """Create a Pending order.

        Args:
            user_id: The customer placing the order.
            lines: List of dicts with product_id, name, quantity, unit_price, image_url.
            shipping_address: Dict with street, city, state, zip_code, country.
            payment_method: One of the PaymentMethod values.
            pricing: Dict with items_price, tax_price, shipping_price, total_price.
        """
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            pricing=OrderPricing(**pricing),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.add_items([OrderItem(**line) for line in lines])

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=sum(item.quantity for item in order.items),
                items_price=order.pricing.items_price,
                tax_price=order.pricing.tax_price,
                shipping_price=order.pricing.shipping_price,
                total_price=order.pricing.total_price,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidStateTransition(current.value, target_status.value)

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def advance_to(self, new_status, tracking_number=None):
        """Move to the next fulfilment status; entering Delivered stamps the delivery."""
        target = OrderStatus(new_status)
        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        if tracking_number:
            self.tracking_number = tracking_number
        if target == OrderStatus.DELIVERED:
            self.is_delivered = True
            self.delivered_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous,
                new_status=target.value,
                tracking_number=self.tracking_number,
                changed_at=now,
            )
        )

    def cancel(self, cancelled_by):
        """Cancel a Pending or Processing order. Stock is returned by the caller."""
        current = OrderStatus(self.status)
        if current not in _CANCELLABLE_STATES:
            raise InvalidStateTransition(current.value, OrderStatus.CANCELLED.value)

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_by = cancelled_by
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=current.value,
                cancelled_by=str(cancelled_by),
                cancelled_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Notification bookkeeping
    # -------------------------------------------------------------------
    def mark_confirmation_sent(self):
        self.confirmation_email_sent = True

    def mark_status_email_sent(self, status):
        if status == OrderStatus.SHIPPED.value:
            self.shipped_email_sent = True
        elif status == OrderStatus.DELIVERED.value:
            self.delivered_email_sent = True

    def contains_product(self, product_id) -> bool:
        return any(str(item.product_id) == str(product_id) for item in self.items)
