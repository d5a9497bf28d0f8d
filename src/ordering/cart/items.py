"""Cart item management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart, ensure_quantity
from ordering.catalogue.queries import load_purchasable_product
from ordering.domain import ordering
from ordering.errors import LineNotFoundError
from ordering.inventory import get_stock_store

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


def _find_cart(repo, customer_id) -> ShoppingCart | None:
    try:
        return repo.get(str(customer_id))
    except ObjectNotFoundError:
        return None


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        ensure_quantity(command.quantity)
        product = load_purchasable_product(command.product_id)
        available = get_stock_store().available(product.product_id) or 0

        repo = current_domain.repository_for(ShoppingCart)
        cart = _find_cart(repo, command.customer_id) or ShoppingCart.create(command.customer_id)
        cart.add_item(
            product_id=product.product_id,
            quantity=command.quantity,
            available=available,
            product_name=product.name,
        )
        repo.add(cart)

        logger.debug(
            "cart.item_added",
            customer_id=command.customer_id,
            product_id=product.product_id,
            quantity=command.quantity,
        )

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        ensure_quantity(command.quantity)

        repo = current_domain.repository_for(ShoppingCart)
        cart = _find_cart(repo, command.customer_id)
        if cart is None or cart.line_for(command.product_id) is None:
            raise LineNotFoundError(str(command.customer_id), str(command.product_id))

        product = load_purchasable_product(command.product_id)
        available = get_stock_store().available(product.product_id) or 0
        cart.set_quantity(
            product_id=product.product_id,
            quantity=command.quantity,
            available=available,
            product_name=product.name,
        )
        repo.add(cart)

        logger.debug(
            "cart.quantity_updated",
            customer_id=command.customer_id,
            product_id=product.product_id,
            quantity=command.quantity,
        )

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _find_cart(repo, command.customer_id)
        if cart is not None and cart.remove_item(command.product_id):
            repo.add(cart)
            logger.debug("cart.item_removed", customer_id=command.customer_id, product_id=command.product_id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _find_cart(repo, command.customer_id)
        if cart is not None and not cart.is_empty():
            cart.clear()
            repo.add(cart)
            logger.debug("cart.cleared", customer_id=command.customer_id)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
# Commands coerce their fields on construction ("3" -> 3, True -> 1), so the
# caller's raw quantity is checked before a command is built.
def add_to_cart(customer_id, product_id, quantity) -> None:
    ensure_quantity(quantity)
    current_domain.process(
        AddToCart(customer_id=customer_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


def update_cart_quantity(customer_id, product_id, quantity) -> None:
    ensure_quantity(quantity)
    current_domain.process(
        UpdateCartQuantity(customer_id=customer_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


def remove_from_cart(customer_id, product_id) -> None:
    current_domain.process(RemoveFromCart(customer_id=customer_id, product_id=product_id), asynchronous=False)


def clear_cart(customer_id) -> None:
    current_domain.process(ClearCart(customer_id=customer_id), asynchronous=False)
