"""Application tests for product listing, maintenance and restock commands."""

import pytest
from ordering.catalogue.events import ProductListed
from ordering.catalogue.listing import ChangeProductStatus, DeleteProduct, ListProduct, UpdateProductPrice
from ordering.catalogue.product import Product, ProductStatus
from ordering.catalogue.queries import count_products, find_product, get_product, list_products, load_purchasable_product
from ordering.errors import InvalidQuantityError, ProductNotFoundError, ProductOwnershipError
from ordering.inventory.restock import RestockProduct, restock_product
from protean import current_domain
from protean.exceptions import ValidationError


class TestListProductCommand:
    def test_list_product_persists(self, list_product):
        product_id = list_product(product_id="prod-001", name="Keyboard", price=89.99, quantity=25)
        assert product_id == "prod-001"

        product = current_domain.repository_for(Product).get("prod-001")
        assert product.name == "Keyboard"
        assert product.price == 89.99
        assert product.status == ProductStatus.ACTIVE.value

    def test_opening_stock_is_initialized(self, list_product, stock_store):
        list_product(product_id="prod-001", quantity=25)
        assert stock_store.available("prod-001") == 25

    def test_generated_id_when_none_given(self):
        product_id = current_domain.process(
            ListProduct(name="Mouse", price=5.0, quantity=1),
            asynchronous=False,
        )
        assert product_id
        assert current_domain.repository_for(Product).get(product_id).name == "Mouse"

    def test_listing_raises_event(self):
        product = Product.create(name="Keyboard", price=10.0, product_id="prod-001", quantity=3)
        listed = [e for e in product._events if isinstance(e, ProductListed)]
        assert listed[0].quantity == 3

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            ListProduct(name="Broken", price=-1.0, quantity=1)


class TestProductMaintenance:
    def test_update_price(self, list_product):
        list_product(product_id="prod-001", price=10.0)
        current_domain.process(UpdateProductPrice(product_id="prod-001", price=12.5), asynchronous=False)
        assert current_domain.repository_for(Product).get("prod-001").price == 12.5

    def test_update_price_of_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            current_domain.process(UpdateProductPrice(product_id="prod-404", price=1.0), asynchronous=False)

    def test_deactivated_product_is_not_purchasable(self, list_product):
        list_product(product_id="prod-001")
        current_domain.process(ChangeProductStatus(product_id="prod-001", status="inactive"), asynchronous=False)

        with pytest.raises(ProductNotFoundError):
            load_purchasable_product("prod-001")

    def test_unknown_status_is_rejected(self, list_product):
        list_product(product_id="prod-001")
        with pytest.raises(ValidationError):
            current_domain.process(ChangeProductStatus(product_id="prod-001", status="archived"), asynchronous=False)


class TestRestock:
    def test_restock_adds_to_available(self, list_product, stock_store):
        list_product(product_id="prod-001", quantity=2)
        assert restock_product("prod-001", 8) == 10
        assert stock_store.available("prod-001") == 10

    def test_restock_records_event(self, list_product):
        list_product(product_id="prod-001", quantity=2)
        restock_product("prod-001", 3)

        messages = current_domain.event_store.store.read("ordering::product")
        restocked = [
            m
            for m in messages
            if m.metadata and m.metadata.headers and m.metadata.headers.type == "Ordering.ProductRestocked.v1"
        ]
        assert len(restocked) == 1

    @pytest.mark.parametrize("quantity", [0, -1, 2.5, "3", True])
    def test_restock_requires_positive_int(self, list_product, stock_store, quantity):
        list_product(product_id="prod-001", quantity=2)
        with pytest.raises(InvalidQuantityError):
            restock_product("prod-001", quantity)
        assert stock_store.available("prod-001") == 2

    def test_restock_command_rejects_non_positive_quantity(self, list_product):
        list_product(product_id="prod-001", quantity=2)
        with pytest.raises(InvalidQuantityError):
            current_domain.process(RestockProduct(product_id="prod-001", quantity=0), asynchronous=False)

    def test_restock_unknown_product(self, stock_store):
        with pytest.raises(ProductNotFoundError):
            restock_product("prod-404", 1)
        assert stock_store.available("prod-404") is None

    def test_stock_is_unchanged_when_the_restock_is_not_recorded(self, list_product, stock_store, monkeypatch):
        list_product(product_id="prod-001", quantity=2)

        def fail(*args, **kwargs):
            raise RuntimeError("storage unavailable")

        monkeypatch.setattr(Product, "record_restock", fail)

        with pytest.raises(RuntimeError):
            restock_product("prod-001", 5)
        assert stock_store.available("prod-001") == 2


class TestGetProduct:
    def test_includes_available_quantity(self, list_product):
        list_product(product_id="prod-001", name="Keyboard", price=10.0, quantity=7, category="electronics")
        data = get_product("prod-001")
        assert data["name"] == "Keyboard"
        assert data["category"] == "electronics"
        assert data["available_quantity"] == 7
        assert data["status"] == "active"

    def test_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            get_product("prod-404")


class TestSellerOwnership:
    @pytest.fixture(autouse=True)
    def listed(self, list_product):
        list_product(product_id="prod-001", price=10.0, seller_id="seller-001")

    def test_owner_can_update_price(self):
        current_domain.process(
            UpdateProductPrice(product_id="prod-001", price=12.0, seller_id="seller-001"),
            asynchronous=False,
        )
        assert find_product("prod-001").price == 12.0

    def test_other_seller_cannot_update_price(self):
        with pytest.raises(ProductOwnershipError) as exc:
            current_domain.process(
                UpdateProductPrice(product_id="prod-001", price=1.0, seller_id="seller-002"),
                asynchronous=False,
            )
        assert exc.value.code == "not_product_owner"
        assert find_product("prod-001").price == 10.0

    def test_other_seller_cannot_change_status(self):
        with pytest.raises(ProductOwnershipError):
            current_domain.process(
                ChangeProductStatus(product_id="prod-001", status="inactive", seller_id="seller-002"),
                asynchronous=False,
            )
        assert find_product("prod-001").status == "active"

    def test_store_can_act_without_a_seller(self):
        current_domain.process(ChangeProductStatus(product_id="prod-001", status="inactive"), asynchronous=False)
        assert find_product("prod-001").status == "inactive"


class TestDeleteProduct:
    def test_owner_deletes_product(self, list_product):
        list_product(product_id="prod-001", seller_id="seller-001")
        current_domain.process(DeleteProduct(product_id="prod-001", seller_id="seller-001"), asynchronous=False)

        assert find_product("prod-001") is None
        with pytest.raises(ProductNotFoundError):
            load_purchasable_product("prod-001")

    def test_other_seller_cannot_delete(self, list_product):
        list_product(product_id="prod-001", seller_id="seller-001")
        with pytest.raises(ProductOwnershipError):
            current_domain.process(DeleteProduct(product_id="prod-001", seller_id="seller-002"), asynchronous=False)
        assert find_product("prod-001") is not None

    def test_delete_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            current_domain.process(DeleteProduct(product_id="prod-404"), asynchronous=False)

    def test_deleted_product_shows_as_unavailable_in_carts(self, list_product, add_to_cart):
        from ordering.cart.queries import get_cart

        list_product(product_id="prod-001")
        add_to_cart("cust-001", "prod-001", 1)
        current_domain.process(DeleteProduct(product_id="prod-001"), asynchronous=False)

        assert [line.available for line in get_cart("cust-001").lines] == [False]


class TestListProducts:
    @pytest.fixture(autouse=True)
    def catalogue(self, list_product):
        list_product(product_id="prod-001", name="Keyboard", category="electronics", seller_id="seller-001")
        list_product(product_id="prod-002", name="Mouse", category="electronics", seller_id="seller-001")
        list_product(product_id="prod-003", name="Desk", category="furniture", seller_id="seller-002")
        current_domain.process(ChangeProductStatus(product_id="prod-002", status="inactive"), asynchronous=False)

    def test_browse_active_products_newest_first(self):
        page = list_products(status="active")
        assert [p["product_id"] for p in page.products] == ["prod-003", "prod-001"]
        assert page.total == 2

    def test_filter_by_category(self):
        page = list_products(category="electronics", status="active")
        assert [p["product_id"] for p in page.products] == ["prod-001"]

    def test_seller_sees_all_own_products(self):
        page = list_products(seller_id="seller-001")
        assert sorted(p["product_id"] for p in page.products) == ["prod-001", "prod-002"]

    def test_seller_filters_by_status(self):
        page = list_products(seller_id="seller-001", status="inactive")
        assert [p["product_id"] for p in page.products] == ["prod-002"]

    def test_pagination(self):
        first = list_products(page=1, limit=2)
        second = list_products(page=2, limit=2)

        assert first.total == 3
        assert first.pages == 2
        assert len(first.products) == 2
        assert len(second.products) == 1
        assert {p["product_id"] for p in first.products + second.products} == {"prod-001", "prod-002", "prod-003"}

    def test_page_beyond_the_end_is_empty(self):
        page = list_products(page=5, limit=2)
        assert page.products == []
        assert page.total == 3

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            list_products(status="archived")

    def test_to_dict(self):
        data = list_products(status="active", limit=1).to_dict()
        assert data["pagination"] == {"total": 2, "page": 1, "limit": 1, "pages": 2}
        assert data["products"][0]["available_quantity"] == 10

    def test_count_products(self):
        assert count_products() == 3
        assert count_products(seller_id="seller-002") == 1
