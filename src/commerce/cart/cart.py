"""Cart aggregate (CQRS) — one pending selection of products per user.

Lines are keyed by product. Stock is checked when a line is added or changed;
availability is re-checked on every read, where lines for inactive or sold-out
products are dropped (see ``commerce.cart.view``).
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from commerce.domain import commerce
from commerce.shared.errors import InsufficientStock, NotFound


@commerce.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@commerce.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    total_items = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, total_items=0, created_at=now, updated_at=now)

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def _touch(self):
        self.total_items = sum(item.quantity for item in self.items)
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, available):
        """Add ``quantity`` units, merging with an existing line for the product.

        ``available`` is the product's current stock; the merged quantity may
        not exceed it.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.line_for(product_id)
        requested = quantity + (existing.quantity if existing else 0)
        if requested > available:
            raise InsufficientStock(product_id, requested=requested, available=available)

        if existing:
            existing.quantity = requested
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    quantity=quantity,
                    added_at=datetime.now(UTC),
                )
            )
        self._touch()

    def update_item(self, product_id, quantity, available):
        """Set the quantity of an existing line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.line_for(product_id)
        if existing is None:
            raise NotFound("Cart item", product_id)
        if quantity > available:
            raise InsufficientStock(product_id, requested=quantity, available=available)

        existing.quantity = quantity
        self._touch()

    def remove_item(self, product_id):
        existing = self.line_for(product_id)
        if existing is not None:
            self.remove_items(existing)
        self._touch()

    def clear(self):
        if self.items:
            self.remove_items(list(self.items))
        self._touch()

    def drop_lines(self, product_ids):
        """Remove the lines for ``product_ids`` in one step."""
        wanted = {str(p) for p in product_ids}
        doomed = [item for item in self.items if str(item.product_id) in wanted]
        if doomed:
            self.remove_items(doomed)
        self._touch()
