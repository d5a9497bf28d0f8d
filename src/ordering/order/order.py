"""Order aggregate — the immutable record a committed checkout produces.

Lines and totals are snapshots taken at checkout: later price or name changes
to a product never reach an existing order, and nothing mutates them after
creation. Only ``status`` and ``payment_status`` are expected to move, and
this context records their initial values only.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.checkout.pricing import Totals, line_amount, round2
from ordering.domain import ordering


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


@ordering.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    subtotal = Float(required=True, min_value=0)
    position = Integer(required=True, min_value=0)


@ordering.aggregate
class Order:
    order_id = Identifier(identifier=True, required=True)
    customer_id = Identifier(required=True)
    items = HasMany(OrderLine)
    subtotal = Float(required=True, min_value=0)
    tax = Float(required=True, min_value=0)
    total = Float(required=True, min_value=0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    shipping_address = Text()
    checkout_key = String(max_length=255)
    created_at = DateTime()

    @classmethod
    def place(cls, order_id, customer_id, lines, totals: Totals, shipping_address=None, checkout_key=None):
        """Build the order from line snapshots.

        Args:
            lines: Sequence of dicts with product_id, product_name, unit_price
                and quantity, in cart order.
        """
        from ordering.order.events import OrderPlaced

        now = datetime.now(UTC)
        order = cls(
            order_id=order_id,
            customer_id=customer_id,
            subtotal=float(totals.subtotal),
            tax=float(totals.tax),
            total=float(totals.total),
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            shipping_address=shipping_address,
            checkout_key=checkout_key,
            created_at=now,
        )

        snapshots = []
        for position, line in enumerate(lines):
            subtotal = round2(line_amount(line["unit_price"], line["quantity"]))
            order.add_items(
                OrderLine(
                    product_id=line["product_id"],
                    product_name=line["product_name"],
                    unit_price=float(line["unit_price"]),
                    quantity=line["quantity"],
                    subtotal=float(subtotal),
                    position=position,
                )
            )
            snapshots.append(
                {
                    "product_id": str(line["product_id"]),
                    "product_name": line["product_name"],
                    "unit_price": float(line["unit_price"]),
                    "quantity": line["quantity"],
                    "subtotal": float(subtotal),
                }
            )

        order.raise_(
            OrderPlaced(
                order_id=order_id,
                customer_id=customer_id,
                items=json.dumps(snapshots),
                item_count=len(snapshots),
                subtotal=order.subtotal,
                tax=order.tax,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    def lines(self) -> list[OrderLine]:
        return sorted(self.items, key=lambda item: item.position)

    def belongs_to(self, customer_id) -> bool:
        return str(self.customer_id) == str(customer_id)
