"""Order creation — CreateOrder command and handler.

Checkout is all-or-nothing. Every line is resolved and checked against stock
before any stock is taken, and the whole handler runs in one unit of work:
if a later step fails, the stock decrements, the order and the cart deletion
are all discarded together.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from commerce.cart.cart import Cart
from commerce.cart.items import find_cart
from commerce.catalogue.management import load_product
from commerce.domain import commerce
from commerce.inventory.ledger import decrement_stock
from commerce.ordering.order import Order, PaymentMethod
from commerce.ordering.pricing import price_order
from commerce.shared.errors import InsufficientStock

logger = structlog.get_logger(__name__)

_ADDRESS_FIELDS = ("street", "city", "state", "zip_code", "country")


@commerce.command(part_of="Order")
class CreateOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True, choices=PaymentMethod)


def _parse_json(raw, field_name):
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError({field_name: ["Must be valid JSON"]}) from None


def parse_lines(raw) -> list[tuple[str, int]]:
    """Turn the requested items into ``(product_id, quantity)`` pairs."""
    data = _parse_json(raw, "items")
    if not isinstance(data, list) or not data:
        raise ValidationError({"items": ["No order items"]})

    lines = []
    for entry in data:
        if not isinstance(entry, dict) or not entry.get("product_id"):
            raise ValidationError({"items": ["Each item needs a product_id"]})
        quantity = entry.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"items": ["Quantity must be a whole number of at least 1"]})
        lines.append((str(entry["product_id"]), quantity))
    return lines


def parse_address(raw) -> dict:
    data = _parse_json(raw, "shipping_address")
    if not isinstance(data, dict):
        raise ValidationError({"shipping_address": ["Must be an object"]})
    address = {key: data[key] for key in _ADDRESS_FIELDS if data.get(key) not in (None, "")}
    missing = [key for key in ("street", "city", "state", "zip_code") if key not in address]
    if missing:
        raise ValidationError({"shipping_address": [f"Missing {', '.join(missing)}"]})
    return address


@commerce.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        requested = parse_lines(command.items)
        shipping_address = parse_address(command.shipping_address)

        # Resolve every product and check combined quantities before taking stock
        products = {}
        totals: dict[str, int] = {}
        for product_id, quantity in requested:
            if product_id not in products:
                products[product_id] = load_product(product_id)
            totals[product_id] = totals.get(product_id, 0) + quantity

        for product_id, quantity in totals.items():
            product = products[product_id]
            if quantity > product.stock:
                raise InsufficientStock(product_id, requested=quantity, available=product.stock, name=product.name)

        for product_id, quantity in totals.items():
            decrement_stock(product_id, quantity)

        lines = []
        for product_id, quantity in requested:
            product = products[product_id]
            lines.append(
                {
                    "product_id": product_id,
                    "name": product.name,
                    "quantity": quantity,
                    "unit_price": product.effective_price(),
                    "image_url": product.image_url,
                }
            )
        items_price = sum(line["unit_price"] * line["quantity"] for line in lines)

        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            shipping_address=shipping_address,
            payment_method=command.payment_method,
            pricing=price_order(items_price),
        )
        current_domain.repository_for(Order).add(order)

        cart = find_cart(command.user_id)
        if cart is not None:
            cart_repo = current_domain.repository_for(Cart)
            # _dao.delete removes only the cart row; saving the emptied cart removes its item rows
            cart.clear()
            cart_repo.add(cart)
            cart_repo._dao.delete(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_price=order.pricing.total_price,
        )
        return str(order.id)
