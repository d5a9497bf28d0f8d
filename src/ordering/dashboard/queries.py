"""Dashboard counters for a single customer and for the whole store."""

from ordering.cart.queries import get_cart
from ordering.catalogue.queries import count_products
from ordering.order.queries import order_stats


def customer_dashboard(customer_id) -> dict:
    """What a shopper sees: cart lines, orders placed and products listed."""
    return {
        "customer_id": str(customer_id),
        "cart_products": get_cart(customer_id).item_count,
        "total_orders": order_stats(customer_id)["order_count"],
        "added_products": count_products(seller_id=customer_id),
    }


def store_dashboard() -> dict:
    stats = order_stats()
    return {
        "total_products": count_products(),
        "total_orders": stats["order_count"],
        "total_revenue": stats["revenue"],
    }
