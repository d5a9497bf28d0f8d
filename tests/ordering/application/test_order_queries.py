"""Application tests for order reads."""

from decimal import Decimal

import pytest
from ordering.checkout.checkout import place_order
from ordering.errors import OrderNotFoundError, UnauthorizedError
from ordering.order.queries import find_order_by_checkout_key, get_order, list_orders, order_stats, serialize_order


@pytest.fixture()
def orders(list_product, add_to_cart):
    list_product(product_id="prod-001", name="Keyboard", price=10.0, quantity=50)
    add_to_cart("cust-001", "prod-001", 1)
    place_order("cust-001", checkout_key="k-1")
    add_to_cart("cust-002", "prod-001", 2)
    place_order("cust-002")
    add_to_cart("cust-001", "prod-001", 3)
    place_order("cust-001")


class TestGetOrder:
    def test_owner_can_read(self, orders):
        order = get_order("ORD-001", "cust-001")
        assert order.total == 11.0

    def test_other_customer_is_unauthorized(self, orders):
        with pytest.raises(UnauthorizedError) as exc:
            get_order("ORD-001", "cust-002")
        assert exc.value.order_id == "ORD-001"

    def test_unknown_order(self, orders):
        with pytest.raises(OrderNotFoundError):
            get_order("ORD-999", "cust-001")


class TestListOrders:
    def test_newest_first(self, orders):
        assert [o.order_id for o in list_orders("cust-001")] == ["ORD-003", "ORD-001"]

    def test_customer_without_orders(self, orders):
        assert list_orders("cust-404") == []

    def test_find_by_checkout_key(self, orders):
        assert find_order_by_checkout_key("cust-001", "k-1").order_id == "ORD-001"
        assert find_order_by_checkout_key("cust-002", "k-1") is None


class TestOrderStats:
    def test_per_customer(self, orders):
        stats = order_stats("cust-001")
        assert stats["order_count"] == 2
        assert stats["revenue"] == Decimal("44.00")

    def test_overall(self, orders):
        stats = order_stats()
        assert stats["customer_id"] is None
        assert stats["order_count"] == 3
        assert stats["revenue"] == Decimal("66.00")

    def test_no_orders(self):
        assert order_stats()["order_count"] == 0
        assert order_stats()["revenue"] == Decimal("0.00")


class TestSerializeOrder:
    def test_durable_fields(self, orders):
        data = serialize_order(get_order("ORD-002", "cust-002"))
        assert data["order_id"] == "ORD-002"
        assert data["items"] == [
            {
                "product_id": "prod-001",
                "product_name": "Keyboard",
                "unit_price": 10.0,
                "quantity": 2,
                "subtotal": 20.0,
            }
        ]
        assert (data["subtotal"], data["tax"], data["total"]) == (20.0, 2.0, 22.0)
        assert data["status"] == "pending"
        assert data["payment_status"] == "pending"
        assert data["created_at"]
