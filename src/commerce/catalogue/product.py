"""Product aggregate (CQRS) — catalogue entry, stock level and rating summary.

Three writers touch a product:
    - administrators, through AddProduct / UpdateProduct
    - the inventory ledger, which moves ``stock``
    - the rating aggregator, which maintains ``num_reviews`` and ``average_rating``

Products are deactivated rather than deleted; orders keep their own
name/price/image snapshots.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from commerce.catalogue.events import ProductAdded, ProductUpdated
from commerce.domain import commerce
from commerce.shared.errors import InsufficientStock

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@commerce.aggregate
class Product:
    name = String(required=True, min_length=3, max_length=100)
    description = Text()
    category = String(max_length=50)
    brand = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    sale_price = Float(min_value=0.0)
    stock = Integer(default=0, min_value=0)
    is_active = Boolean(default=True)
    image_url = String(max_length=500)
    average_rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(
        cls,
        name,
        price,
        stock=0,
        sale_price=None,
        description=None,
        category=None,
        brand=None,
        image_url=None,
        is_active=True,
    ):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            sale_price=sale_price,
            stock=stock,
            description=description,
            category=category,
            brand=brand,
            image_url=image_url,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                sale_price=product.sale_price,
                stock=product.stock,
                is_active=product.is_active,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Pricing and availability
    # -------------------------------------------------------------------
    def effective_price(self) -> float:
        """The sale price when one is set and lower than the list price."""
        if self.sale_price is not None and self.sale_price < self.price:
            return self.sale_price
        return self.price

    def is_available(self) -> bool:
        return bool(self.is_active) and self.stock > 0

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def update(
        self,
        name=_UNSET,
        description=_UNSET,
        category=_UNSET,
        brand=_UNSET,
        price=_UNSET,
        sale_price=_UNSET,
        stock=_UNSET,
        image_url=_UNSET,
        is_active=_UNSET,
    ):
        """Apply a partial update. Only arguments that were passed are changed;
        ``sale_price=None`` clears the sale price."""
        changes = {
            "name": name,
            "description": description,
            "category": category,
            "brand": brand,
            "price": price,
            "sale_price": sale_price,
            "stock": stock,
            "image_url": image_url,
            "is_active": is_active,
        }
        for field_name, value in changes.items():
            if value is not _UNSET:
                setattr(self, field_name, value)

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                sale_price=self.sale_price,
                stock=self.stock,
                is_active=self.is_active,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------
    def decrement_stock(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if self.stock < quantity:
            raise InsufficientStock(self.id, requested=quantity, available=self.stock, name=self.name)
        self.stock -= quantity
        self.updated_at = datetime.now(UTC)

    def restore_stock(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.stock += quantity
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Ratings
    # -------------------------------------------------------------------
    def record_rating(self, num_reviews, average_rating):
        self.num_reviews = num_reviews
        self.average_rating = average_rating
        self.updated_at = datetime.now(UTC)
