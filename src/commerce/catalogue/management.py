"""Catalogue administration — AddProduct and UpdateProduct."""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from commerce.catalogue.product import Product
from commerce.domain import commerce
from commerce.shared.access import Role, require_admin
from commerce.shared.errors import NotFound

logger = structlog.get_logger(__name__)


@commerce.command(part_of="Product")
class AddProduct:
    actor_role = String(required=True, choices=Role)
    name = String(required=True, min_length=3, max_length=100)
    price = Float(required=True, min_value=0.0)
    sale_price = Float(min_value=0.0)
    stock = Integer(default=0, min_value=0)
    description = Text()
    category = String(max_length=50)
    brand = String(max_length=100)
    image_url = String(max_length=500)
    is_active = Boolean(default=True)


@commerce.command(part_of="Product")
class UpdateProduct:
    actor_role = String(required=True, choices=Role)
    product_id = Identifier(required=True)
    name = String(min_length=3, max_length=100)
    price = Float(min_value=0.0)
    sale_price = Float(min_value=0.0)
    clear_sale_price = Boolean(default=False)
    stock = Integer(min_value=0)
    description = Text()
    category = String(max_length=50)
    brand = String(max_length=100)
    image_url = String(max_length=500)
    is_active = Boolean()


_UPDATABLE_FIELDS = (
    "name",
    "price",
    "sale_price",
    "stock",
    "description",
    "category",
    "brand",
    "image_url",
    "is_active",
)


def load_product(product_id) -> Product:
    product = current_domain.repository_for(Product).get_or_none(str(product_id))
    if product is None:
        raise NotFound("Product", product_id)
    return product


@commerce.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        require_admin(command.actor_role, "add products")

        product = Product.add(
            name=command.name,
            price=command.price,
            sale_price=command.sale_price,
            stock=command.stock,
            description=command.description,
            category=command.category,
            brand=command.brand,
            image_url=command.image_url,
            is_active=command.is_active,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        require_admin(command.actor_role, "update products")

        product = load_product(command.product_id)
        changes = {name: getattr(command, name) for name in _UPDATABLE_FIELDS if getattr(command, name) is not None}
        if command.clear_sale_price:
            changes["sale_price"] = None

        product.update(**changes)
        current_domain.repository_for(Product).add(product)
        logger.info("product_updated", product_id=str(product.id), fields=sorted(changes))
        return str(product.id)
