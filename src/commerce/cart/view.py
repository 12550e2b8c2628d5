"""Cart reconciliation — the read contract returned by every cart operation.

Reading a cart re-checks each line against the live product. Lines whose
product is missing, inactive or out of stock are removed from the cart and
reported back as ``RemovedLine`` notices instead of disappearing silently.
"""

from dataclasses import dataclass, field
from enum import Enum

from protean.utils.globals import current_domain

from commerce.cart.cart import Cart
from commerce.catalogue.product import Product


class RemovalReason(Enum):
    MISSING = "missing"
    INACTIVE = "inactive"
    OUT_OF_STOCK = "out_of_stock"


@dataclass(frozen=True)
class CartLine:
    product_id: str
    name: str
    unit_price: float
    quantity: int
    stock: int
    image_url: str | None = None

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class RemovedLine:
    product_id: str
    quantity: int
    reason: str
    name: str | None = None


@dataclass(frozen=True)
class CartView:
    cart_id: str
    user_id: str
    items: list[CartLine] = field(default_factory=list)
    removed: list[RemovedLine] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.items)

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self.items)


def _removal_reason(product: Product | None) -> RemovalReason | None:
    if product is None:
        return RemovalReason.MISSING
    if not product.is_active:
        return RemovalReason.INACTIVE
    if product.stock <= 0:
        return RemovalReason.OUT_OF_STOCK
    return None


def reconcile(cart: Cart) -> tuple[CartView, bool]:
    """Drop unavailable lines from ``cart`` and build its view.

    Returns the view and whether the cart was modified (and so needs saving).
    """
    products = current_domain.repository_for(Product)

    lines: list[CartLine] = []
    removed: list[RemovedLine] = []
    for item in cart.items:
        product = products.get_or_none(str(item.product_id))
        reason = _removal_reason(product)
        if reason is not None:
            removed.append(
                RemovedLine(
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    reason=reason.value,
                    name=product.name if product is not None else None,
                )
            )
            continue

        lines.append(
            CartLine(
                product_id=str(product.id),
                name=product.name,
                unit_price=product.effective_price(),
                quantity=item.quantity,
                stock=product.stock,
                image_url=product.image_url,
            )
        )

    if removed:
        cart.drop_lines([line.product_id for line in removed])

    view = CartView(cart_id=str(cart.id), user_id=str(cart.user_id), items=lines, removed=removed)
    return view, bool(removed)
