"""Application tests for cart item management commands and the cart read."""

from decimal import Decimal

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import (
    AddToCart,
    ClearCart,
    RemoveFromCart,
    UpdateCartQuantity,
    clear_cart,
    remove_from_cart,
    update_cart_quantity,
)
from ordering.cart.items import add_to_cart as add_item
from ordering.cart.queries import get_cart
from ordering.catalogue.listing import ChangeProductStatus
from ordering.errors import (
    InsufficientStockError,
    InvalidQuantityError,
    LineNotFoundError,
    ProductNotFoundError,
)
from protean import current_domain


@pytest.fixture(autouse=True)
def products(list_product):
    list_product(product_id="prod-001", name="Keyboard", price=10.0, quantity=5)
    list_product(product_id="prod-002", name="Mouse", price=5.005, quantity=10)


def _cart(customer_id="cust-001"):
    return current_domain.repository_for(ShoppingCart).get(customer_id)


class TestAddToCartCommand:
    def test_add_creates_cart(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 2)
        cart = _cart()
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_add_merges_quantities(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 2)
        add_to_cart("cust-001", "prod-001", 3)
        cart = _cart()
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_merge_is_bounded_by_stock(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 2)
        with pytest.raises(InsufficientStockError) as exc:
            add_to_cart("cust-001", "prod-001", 4)
        assert exc.value.available == 5
        assert _cart().items[0].quantity == 2

    def test_quantity_is_checked_before_the_product(self):
        with pytest.raises(InvalidQuantityError):
            current_domain.process(
                AddToCart(customer_id="cust-001", product_id="prod-404", quantity=0),
                asynchronous=False,
            )

    def test_unknown_product(self, add_to_cart):
        with pytest.raises(ProductNotFoundError):
            add_to_cart("cust-001", "prod-404", 1)

    def test_inactive_product(self, add_to_cart):
        current_domain.process(ChangeProductStatus(product_id="prod-001", status="discontinued"), asynchronous=False)
        with pytest.raises(ProductNotFoundError):
            add_to_cart("cust-001", "prod-001", 1)

    def test_cart_operations_never_touch_inventory(self, add_to_cart, stock_store):
        add_to_cart("cust-001", "prod-001", 5)
        add_to_cart("cust-002", "prod-001", 5)
        assert stock_store.available("prod-001") == 5

    def test_carts_are_per_customer(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 1)
        add_to_cart("cust-002", "prod-002", 2)
        assert [str(i.product_id) for i in _cart("cust-001").items] == ["prod-001"]
        assert [str(i.product_id) for i in _cart("cust-002").items] == ["prod-002"]


class TestUpdateCartQuantityCommand:
    def test_update_quantity_persists(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 1)
        current_domain.process(
            UpdateCartQuantity(customer_id="cust-001", product_id="prod-001", quantity=4),
            asynchronous=False,
        )
        assert _cart().items[0].quantity == 4

    def test_update_missing_line(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 1)
        with pytest.raises(LineNotFoundError):
            current_domain.process(
                UpdateCartQuantity(customer_id="cust-001", product_id="prod-002", quantity=1),
                asynchronous=False,
            )

    def test_update_without_cart(self):
        with pytest.raises(LineNotFoundError):
            current_domain.process(
                UpdateCartQuantity(customer_id="cust-999", product_id="prod-001", quantity=1),
                asynchronous=False,
            )

    def test_update_above_stock(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 1)
        with pytest.raises(InsufficientStockError):
            current_domain.process(
                UpdateCartQuantity(customer_id="cust-001", product_id="prod-001", quantity=6),
                asynchronous=False,
            )


class TestRemoveAndClearCommands:
    def test_remove_item(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 1)
        add_to_cart("cust-001", "prod-002", 1)
        current_domain.process(RemoveFromCart(customer_id="cust-001", product_id="prod-001"), asynchronous=False)
        assert [str(i.product_id) for i in _cart().items] == ["prod-002"]

    def test_remove_absent_item_is_not_an_error(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 1)
        current_domain.process(RemoveFromCart(customer_id="cust-001", product_id="prod-002"), asynchronous=False)
        current_domain.process(RemoveFromCart(customer_id="cust-999", product_id="prod-002"), asynchronous=False)
        assert len(_cart().items) == 1

    def test_clear_cart(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 1)
        add_to_cart("cust-001", "prod-002", 1)
        current_domain.process(ClearCart(customer_id="cust-001"), asynchronous=False)
        assert _cart().items == []


class TestQuantityIsCheckedBeforeCoercion:
    @pytest.mark.parametrize("quantity", [2.5, 2.0, "3", True, False, None, 0, -1])
    def test_add_rejects_anything_but_a_positive_int(self, quantity):
        with pytest.raises(InvalidQuantityError) as exc:
            add_item("cust-001", "prod-001", quantity)
        assert exc.value.quantity == quantity
        assert get_cart("cust-001").lines == []

    @pytest.mark.parametrize("quantity", [2.5, "3", True])
    def test_update_rejects_anything_but_a_positive_int(self, add_to_cart, quantity):
        add_to_cart("cust-001", "prod-001", 1)
        with pytest.raises(InvalidQuantityError):
            update_cart_quantity("cust-001", "prod-001", quantity)
        assert _cart().items[0].quantity == 1

    def test_quantity_error_comes_before_unknown_product(self):
        with pytest.raises(InvalidQuantityError):
            add_item("cust-001", "prod-404", "3")

    def test_valid_quantities_go_through(self):
        add_item("cust-001", "prod-001", 2)
        update_cart_quantity("cust-001", "prod-001", 4)
        assert _cart().items[0].quantity == 4

    def test_remove_and_clear_entry_points(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 1)
        add_to_cart("cust-001", "prod-002", 1)
        remove_from_cart("cust-001", "prod-001")
        assert [str(i.product_id) for i in _cart().items] == ["prod-002"]

        clear_cart("cust-001")
        assert _cart().items == []

class TestGetCart:
    def test_unknown_customer_reads_as_empty(self):
        summary = get_cart("cust-999")
        assert summary.lines == []
        assert summary.item_count == 0
        assert summary.totals.total == Decimal("0.00")

    def test_lines_and_totals(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 2)
        add_to_cart("cust-001", "prod-002", 3)

        summary = get_cart("cust-001")
        assert [line.product_id for line in summary.lines] == ["prod-001", "prod-002"]
        assert summary.item_count == 2
        assert summary.lines[1].product_name == "Mouse"
        assert summary.lines[1].subtotal == Decimal("15.02")
        assert summary.totals.subtotal == Decimal("35.02")
        assert summary.totals.tax == Decimal("3.50")
        assert summary.totals.total == Decimal("38.52")

    def test_deactivated_product_is_flagged_and_left_out_of_totals(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 2)
        add_to_cart("cust-001", "prod-002", 2)
        current_domain.process(ChangeProductStatus(product_id="prod-002", status="inactive"), asynchronous=False)

        summary = get_cart("cust-001")
        assert [line.available for line in summary.lines] == [True, False]
        assert summary.totals.subtotal == Decimal("20.00")

    def test_to_dict(self, add_to_cart):
        add_to_cart("cust-001", "prod-001", 2)
        data = get_cart("cust-001").to_dict()
        assert data["items"][0]["unit_price"] == 10.0
        assert data["subtotal"] == 20.0
        assert data["tax"] == 2.0
        assert data["total"] == 22.0
