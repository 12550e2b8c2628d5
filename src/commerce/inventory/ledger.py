"""Inventory ledger — compare-and-decrement and unconditional restore of stock.

Both primitives run inside the caller's unit of work. The product is written
back with its version, and the commit fails with ``ExpectedVersionError`` if
another request changed the same product after it was read. Command handlers
are re-run by protean on a fresh unit of work in that case, so the check
``stock >= quantity`` always holds against the stock that is actually
committed.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from commerce.catalogue.management import load_product
from commerce.catalogue.product import Product
from commerce.domain import commerce

logger = structlog.get_logger(__name__)


def decrement_stock(product_id, quantity) -> Product:
    """Take ``quantity`` units; fails ``InsufficientStock`` when fewer are on hand."""
    product = load_product(product_id)
    product.decrement_stock(quantity)
    current_domain.repository_for(Product).add(product)
    logger.debug("stock_decremented", product_id=str(product_id), quantity=quantity, stock=product.stock)
    return product


def restore_stock(product_id, quantity) -> Product:
    """Return ``quantity`` units; no upper bound since it undoes a prior decrement."""
    product = load_product(product_id)
    product.restore_stock(quantity)
    current_domain.repository_for(Product).add(product)
    logger.debug("stock_restored", product_id=str(product_id), quantity=quantity, stock=product.stock)
    return product


@commerce.command(part_of="Product")
class DecrementStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@commerce.command(part_of="Product")
class RestoreStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@commerce.command_handler(part_of=Product)
class InventoryLedgerHandler:
    @handle(DecrementStock)
    def decrement(self, command):
        return decrement_stock(command.product_id, command.quantity).stock

    @handle(RestoreStock)
    def restore(self, command):
        return restore_stock(command.product_id, command.quantity).stock
