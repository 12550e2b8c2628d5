"""Catalogue read operations: a single product and the storefront listing."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from protean.utils.query import Q

from commerce.catalogue.management import load_product
from commerce.catalogue.product import Product
from commerce.shared.paging import Page, paginate

SORTABLE_FIELDS = ("created_at", "price", "average_rating", "name")


def get_product(product_id) -> Product:
    return load_product(product_id)


def _sort_key(sort):
    if sort.lstrip("-") not in SORTABLE_FIELDS:
        raise ValidationError({"sort": [f"Cannot sort products by {sort}"]})
    return sort


def list_products(
    category=None,
    min_price=None,
    max_price=None,
    min_rating=None,
    search=None,
    sort="-created_at",
    page=1,
    limit=None,
) -> Page:
    """Active products matching every given filter.

    ``search`` matches name or description, case-insensitively. ``sort`` is a
    field name, prefixed with ``-`` for descending order.
    """
    query = current_domain.repository_for(Product)._dao.query.filter(is_active=True)

    if category is not None:
        query = query.filter(category=category)
    if min_price is not None:
        query = query.filter(price__gte=min_price)
    if max_price is not None:
        query = query.filter(price__lte=max_price)
    if min_rating is not None:
        query = query.filter(average_rating__gte=min_rating)
    if search:
        query = query.filter(Q(name__icontains=search) | Q(description__icontains=search))

    return paginate(query.order_by(_sort_key(sort)), page, limit)
