"""Cart operations — commands and handler.

Every handler reconciles the cart before returning, so callers always get the
current lines together with notices for lines that were dropped.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from commerce.cart.cart import Cart
from commerce.cart.view import reconcile
from commerce.catalogue.management import load_product
from commerce.domain import commerce
from commerce.shared.errors import NotFound

logger = structlog.get_logger(__name__)


@commerce.command(part_of="Cart")
class GetOrCreateCart:
    user_id = Identifier(required=True)


@commerce.command(part_of="Cart")
class AddCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@commerce.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@commerce.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@commerce.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def find_cart(user_id) -> Cart | None:
    return current_domain.repository_for(Cart)._dao.query.filter(user_id=str(user_id)).all().first


def _require_cart(user_id) -> Cart:
    cart = find_cart(user_id)
    if cart is None:
        raise NotFound("Cart", user_id)
    return cart


def _stock_for_cart(product_id) -> int:
    product = load_product(product_id)
    if not product.is_active:
        raise ValidationError({"product_id": [f"{product.name} is not available"]})
    return product.stock


def _save_and_view(cart: Cart, always_save: bool = True):
    view, changed = reconcile(cart)
    if always_save or changed:
        current_domain.repository_for(Cart).add(cart)
    if view.removed:
        logger.info(
            "cart_lines_dropped",
            user_id=str(cart.user_id),
            product_ids=[line.product_id for line in view.removed],
        )
    return view


@commerce.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(GetOrCreateCart)
    def get_or_create_cart(self, command):
        cart = find_cart(command.user_id)
        created = cart is None
        if created:
            cart = Cart.create(user_id=command.user_id)
        return _save_and_view(cart, always_save=created)

    @handle(AddCartItem)
    def add_item(self, command):
        available = _stock_for_cart(command.product_id)
        cart = find_cart(command.user_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id)
        cart.add_item(command.product_id, command.quantity, available)
        return _save_and_view(cart)

    @handle(UpdateCartItem)
    def update_item(self, command):
        available = _stock_for_cart(command.product_id)
        cart = _require_cart(command.user_id)
        cart.update_item(command.product_id, command.quantity, available)
        return _save_and_view(cart)

    @handle(RemoveCartItem)
    def remove_item(self, command):
        cart = _require_cart(command.user_id)
        cart.remove_item(command.product_id)
        return _save_and_view(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = _require_cart(command.user_id)
        cart.clear()
        return _save_and_view(cart)
