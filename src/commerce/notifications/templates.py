"""Email templates for order notifications."""


def _format_items(items: list[dict]) -> str:
    return "\n".join(f"  {item['name']} x{item['quantity']} @ {item['unit_price']:.2f}" for item in items)


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        shop_name = context.get("shop_name", "Commerce")
        return {
            "subject": f"Order Confirmation - #{order_id}",
            "body": (
                f"Hi {context.get('customer_name', 'there')},\n\n"
                f"Thank you for your order #{order_id}.\n\n"
                f"{_format_items(context.get('items', []))}\n\n"
                f"Items: {context.get('items_price', 0.0):.2f}\n"
                f"Tax: {context.get('tax_price', 0.0):.2f}\n"
                f"Shipping: {context.get('shipping_price', 0.0):.2f}\n"
                f"Total: {context.get('total_price', 0.0):.2f}\n\n"
                f"Payment method: {context.get('payment_method', 'N/A')}\n\n"
                f"We'll let you know when your order ships.\n\n"
                f"Thank you for shopping with {shop_name}!"
            ),
        }


class OrderStatusUpdateTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        status = context.get("status", "Updated")
        tracking_number = context.get("tracking_number")
        tracking = f"Tracking number: {tracking_number}\n\n" if tracking_number else ""
        return {
            "subject": f"Order Update - #{order_id}",
            "body": (
                f"Hi {context.get('customer_name', 'there')},\n\n"
                f"Your order #{order_id} is now {status}.\n\n"
                f"{tracking}"
                "Your receipt is attached.\n\n"
                f"Thank you for shopping with {context.get('shop_name', 'Commerce')}!"
            ),
        }
