"""Product listing and maintenance — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product
from ordering.domain import ordering
from ordering.errors import ProductNotFoundError, ProductOwnershipError
from ordering.inventory import get_stock_store

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Product")
class ListProduct:
    product_id = Identifier()
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    seller_id = Identifier()
    price = Float(required=True, min_value=0)
    quantity = Integer(required=True, min_value=0)


@ordering.command(part_of="Product")
class UpdateProductPrice:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0)
    seller_id = Identifier()


@ordering.command(part_of="Product")
class ChangeProductStatus:
    product_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    seller_id = Identifier()


@ordering.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)
    seller_id = Identifier()


def _load_product(repo, product_id, seller_id=None) -> Product:
    """Load a product for modification.

    When ``seller_id`` is given, only the seller who listed the product may
    modify it. Calls without a seller act on behalf of the store.
    """
    try:
        product = repo.get(str(product_id))
    except ObjectNotFoundError:
        raise ProductNotFoundError(str(product_id)) from None

    if seller_id is not None and str(product.seller_id) != str(seller_id):
        raise ProductOwnershipError(str(product_id), str(seller_id))
    return product


@ordering.command_handler(part_of=Product)
class ProductListingHandler:
    @handle(ListProduct)
    def list_product(self, command):
        product = Product.create(
            product_id=command.product_id,
            name=command.name,
            description=command.description,
            category=command.category,
            seller_id=command.seller_id,
            price=command.price,
            quantity=command.quantity,
        )
        current_domain.repository_for(Product).add(product)
        get_stock_store().initialize(product.product_id, command.quantity)

        logger.info(
            "product.listed",
            product_id=product.product_id,
            price=product.price,
            quantity=command.quantity,
        )
        return product.product_id

    @handle(UpdateProductPrice)
    def update_price(self, command):
        repo = current_domain.repository_for(Product)
        product = _load_product(repo, command.product_id, command.seller_id)
        product.change_price(command.price)
        repo.add(product)

    @handle(ChangeProductStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(Product)
        product = _load_product(repo, command.product_id, command.seller_id)
        product.change_status(command.status)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _load_product(repo, command.product_id, command.seller_id)
        repo._dao.delete(product)

        logger.info("product.deleted", product_id=product.product_id, seller_id=command.seller_id)
