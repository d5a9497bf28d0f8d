"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a committed order and its stock taken."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of line snapshots
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    tax = Float(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)
