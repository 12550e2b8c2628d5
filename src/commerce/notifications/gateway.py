"""Notification gateway — renders order emails and hands them to the email channel.

The gateway is constructed with its channel adapters and installed on the
domain at the composition root (see ``commerce.shared.services``).
"""

import structlog

from commerce.notifications.email_port import EmailPort
from commerce.notifications.receipt_port import ReceiptRendererPort
from commerce.notifications.templates import OrderConfirmationTemplate, OrderStatusUpdateTemplate
from commerce.shared.errors import ExternalServiceFailure

logger = structlog.get_logger(__name__)


def _order_context(order, user, shop_name) -> dict:
    return {
        "order_id": str(order.id),
        "customer_name": user.name,
        "shop_name": shop_name,
        "status": order.status,
        "tracking_number": order.tracking_number,
        "payment_method": order.payment_method,
        "items": [
            {"name": item.name, "quantity": item.quantity, "unit_price": item.unit_price} for item in order.items
        ],
        "items_price": order.pricing.items_price,
        "tax_price": order.pricing.tax_price,
        "shipping_price": order.pricing.shipping_price,
        "total_price": order.pricing.total_price,
    }


class NotificationGateway:
    def __init__(self, email: EmailPort, receipts: ReceiptRendererPort, shop_name: str = "Commerce"):
        self.email = email
        self.receipts = receipts
        self.shop_name = shop_name

    def _deliver(self, to: str, message: dict, attachments: list[dict] | None = None) -> str:
        try:
            result = self.email.send(
                to=to,
                subject=message["subject"],
                body=message["body"],
                attachments=attachments,
            )
        except Exception as exc:
            raise ExternalServiceFailure("email", str(exc)) from exc
        if result.get("status") != "sent":
            raise ExternalServiceFailure("email", result.get("error") or "unknown error")
        return result["message_id"]

    def send_order_confirmation(self, order, user) -> str:
        message = OrderConfirmationTemplate.render(_order_context(order, user, self.shop_name))
        message_id = self._deliver(user.email.address, message)
        logger.info("order_confirmation_sent", order_id=str(order.id), message_id=message_id)
        return message_id

    def send_order_status_update(self, order, user) -> str:
        """Render the PDF receipt and email it with the status update."""
        try:
            pdf = self.receipts.render(order, user)
        except ExternalServiceFailure:
            raise
        except Exception as exc:
            raise ExternalServiceFailure("receipt", str(exc)) from exc

        message = OrderStatusUpdateTemplate.render(_order_context(order, user, self.shop_name))
        attachment = {
            "filename": f"receipt-{order.id}.pdf",
            "content": pdf,
            "content_type": "application/pdf",
        }
        message_id = self._deliver(user.email.address, message, attachments=[attachment])
        logger.info("order_status_email_sent", order_id=str(order.id), status=order.status, message_id=message_id)
        return message_id
