"""Explicit restock — the only way stock grows outside checkout compensation.

The product records the restock first; the stock store is only incremented
once that record is committed, so stock never grows without a matching
``ProductRestocked`` event.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import ensure_quantity
from ordering.catalogue.product import Product
from ordering.catalogue.queries import find_product
from ordering.domain import ordering
from ordering.errors import ProductNotFoundError
from ordering.inventory import get_stock_store

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command_handler(part_of=Product)
class RestockProductHandler:
    @handle(RestockProduct)
    def restock(self, command):
        ensure_quantity(command.quantity)

        product = find_product(command.product_id)
        if product is None:
            raise ProductNotFoundError(str(command.product_id))

        product.record_restock(command.quantity)
        current_domain.repository_for(Product).add(product)
        return product.product_id


def restock_product(product_id, quantity) -> int:
    """Add ``quantity`` units to a product and return the new available level."""
    ensure_quantity(quantity)
    product_id = current_domain.process(
        RestockProduct(product_id=product_id, quantity=quantity),
        asynchronous=False,
    )

    available = get_stock_store().increment(product_id, quantity)
    logger.info("inventory.restocked", product_id=product_id, quantity=quantity, available=available)
    return available
