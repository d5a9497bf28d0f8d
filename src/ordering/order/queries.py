"""Order reads — single order, a customer's history and revenue stats."""

from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.checkout.pricing import round2, to_decimal
from ordering.errors import OrderNotFoundError, UnauthorizedError
from ordering.order.order import Order
from ordering.utils.queries import fetch_all


def _newest_first(orders) -> list:
    return sorted(orders, key=lambda o: (o.created_at, str(o.order_id)), reverse=True)


def get_order(order_id, customer_id) -> Order:
    """Fetch an order on behalf of ``customer_id``.

    Raises:
        OrderNotFoundError: No order has this id.
        UnauthorizedError: The order belongs to another customer.
    """
    try:
        order = current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise OrderNotFoundError(str(order_id)) from None

    if not order.belongs_to(customer_id):
        raise UnauthorizedError(str(order_id))
    return order


def list_orders(customer_id) -> list[Order]:
    repo = current_domain.repository_for(Order)
    return _newest_first(fetch_all(repo._dao.query.filter(customer_id=str(customer_id))))


def count_orders() -> int:
    return current_domain.repository_for(Order)._dao.query.all().total


def recent_orders(limit: int = 10) -> list[Order]:
    """The most recently placed orders across all customers."""
    orders = fetch_all(current_domain.repository_for(Order)._dao.query)
    return _newest_first(orders)[:limit]


def find_order_by_checkout_key(customer_id, checkout_key) -> Order | None:
    repo = current_domain.repository_for(Order)
    matches = fetch_all(repo._dao.query.filter(customer_id=str(customer_id), checkout_key=checkout_key))
    return matches[0] if matches else None


def order_stats(customer_id=None) -> dict:
    """Order count and revenue, for one customer or across all orders."""
    query = current_domain.repository_for(Order)._dao.query
    if customer_id is not None:
        query = query.filter(customer_id=str(customer_id))

    orders = fetch_all(query)
    revenue = sum((to_decimal(o.total) for o in orders), Decimal("0"))
    return {
        "customer_id": str(customer_id) if customer_id is not None else None,
        "order_count": len(orders),
        "revenue": round2(revenue),
    }


def serialize_order(order: Order) -> dict:
    return {
        "order_id": order.order_id,
        "customer_id": order.customer_id,
        "items": [
            {
                "product_id": line.product_id,
                "product_name": line.product_name,
                "unit_price": line.unit_price,
                "quantity": line.quantity,
                "subtotal": line.subtotal,
            }
            for line in order.lines()
        ],
        "subtotal": order.subtotal,
        "tax": order.tax,
        "total": order.total,
        "status": order.status,
        "payment_status": order.payment_status,
        "shipping_address": order.shipping_address,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }
