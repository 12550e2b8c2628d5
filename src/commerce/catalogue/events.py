"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from commerce.domain import commerce


@commerce.event(part_of="Product")
class ProductAdded:
    """An administrator added a product to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    sale_price = Float()
    stock = Integer(required=True)
    is_active = Boolean(required=True)
    added_at = DateTime(required=True)


@commerce.event(part_of="Product")
class ProductUpdated:
    """An administrator changed a product's details, price, stock or availability."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    sale_price = Float()
    stock = Integer(required=True)
    is_active = Boolean(required=True)
    updated_at = DateTime(required=True)
