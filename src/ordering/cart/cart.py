"""Shopping Cart aggregate — one mutable list of product lines per customer.

The cart never touches inventory. Stock checks made here compare against the
quantity the caller observed just before the mutation; they are advisory and
the authoritative check happens again at checkout.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering
from ordering.errors import InsufficientStockError, InvalidQuantityError, LineNotFoundError


def ensure_quantity(quantity) -> int:
    """Reject anything that is not a positive integer."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError(quantity)
    return quantity


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    position = Integer(required=True, min_value=0)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(identifier=True, required=True)
    items = HasMany(CartItem)
    next_position = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, next_position=0, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def line_for(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def lines(self) -> list[CartItem]:
        """Lines in the order they were first added."""
        return sorted(self.items, key=lambda item: item.position)

    def is_empty(self) -> bool:
        return not self.items

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, available, product_name=None):
        """Add a product, merging into the existing line if there is one.

        ``available`` is the stock level observed by the caller. The merged
        quantity must not exceed it.
        """
        ensure_quantity(quantity)

        existing = self.line_for(product_id)
        merged = quantity + (existing.quantity if existing else 0)
        if merged > available:
            raise InsufficientStockError(str(product_id), available, merged, product_name)

        now = datetime.now(UTC)
        if existing:
            existing.quantity = merged
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    quantity=quantity,
                    position=self.next_position or 0,
                    added_at=now,
                )
            )
            self.next_position = (self.next_position or 0) + 1

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                customer_id=self.customer_id,
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=merged,
            )
        )

    def set_quantity(self, product_id, quantity, available, product_name=None):
        """Replace the quantity of an existing line."""
        ensure_quantity(quantity)

        item = self.line_for(product_id)
        if item is None:
            raise LineNotFoundError(self.customer_id, str(product_id))
        if quantity > available:
            raise InsufficientStockError(str(product_id), available, quantity, product_name)

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                customer_id=self.customer_id,
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id) -> bool:
        """Remove a line. Removing a product that is not in the cart is a no-op."""
        item = self.line_for(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(customer_id=self.customer_id, product_id=str(product_id)))
        return True

    def clear(self, order_id=None):
        """Drop every line. ``order_id`` records the checkout that consumed them."""
        for item in list(self.items):
            self.remove_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(customer_id=self.customer_id, order_id=order_id))
