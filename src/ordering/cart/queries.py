"""Cart read model — lines enriched with product data, priced on read."""

from dataclasses import dataclass, field
from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue.queries import find_product
from ordering.checkout.pricing import Totals, line_amount, price_lines, round2, to_decimal


@dataclass(frozen=True)
class CartLineView:
    product_id: str
    quantity: int
    product_name: str | None
    unit_price: Decimal | None
    subtotal: Decimal | None
    available: bool


@dataclass(frozen=True)
class CartSummary:
    customer_id: str
    lines: list[CartLineView] = field(default_factory=list)
    item_count: int = 0
    totals: Totals = Totals(subtotal=Decimal("0.00"), tax=Decimal("0.00"), total=Decimal("0.00"))

    def to_dict(self) -> dict:
        return {
            "customer_id": self.customer_id,
            "items": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "quantity": line.quantity,
                    "unit_price": float(line.unit_price) if line.unit_price is not None else None,
                    "subtotal": float(line.subtotal) if line.subtotal is not None else None,
                    "available": line.available,
                }
                for line in self.lines
            ],
            "item_count": self.item_count,
            **self.totals.as_floats(),
        }


def get_cart(customer_id) -> CartSummary:
    """Current cart contents. A customer without a cart reads as an empty cart.

    Lines whose product has since disappeared or been deactivated are still
    listed, flagged ``available=False`` and left out of the totals; checkout
    will reject them.
    """
    try:
        cart = current_domain.repository_for(ShoppingCart).get(str(customer_id))
    except ObjectNotFoundError:
        return CartSummary(customer_id=str(customer_id), totals=price_lines([]))

    views = []
    priced = []
    for item in cart.lines():
        product = find_product(item.product_id)
        if product is None or not product.is_purchasable():
            views.append(
                CartLineView(
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    product_name=product.name if product else None,
                    unit_price=None,
                    subtotal=None,
                    available=False,
                )
            )
            continue

        priced.append((product.price, item.quantity))
        views.append(
            CartLineView(
                product_id=str(item.product_id),
                quantity=item.quantity,
                product_name=product.name,
                unit_price=to_decimal(product.price),
                subtotal=round2(line_amount(product.price, item.quantity)),
                available=True,
            )
        )

    return CartSummary(
        customer_id=str(customer_id),
        lines=views,
        item_count=len(views),
        totals=price_lines(priced),
    )
