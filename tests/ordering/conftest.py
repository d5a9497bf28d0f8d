import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    from ordering.checkout.counter import reset_order_counter
    from ordering.inventory import reset_stock_store

    with ordering_bed.domain_context():
        yield

        # Clear all databases and adapters
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()
        reset_stock_store()
        reset_order_counter()


@pytest.fixture()
def stock_store():
    from ordering.inventory import get_stock_store

    return get_stock_store()


@pytest.fixture()
def list_product():
    """Factory: list a product with opening stock and return its id."""
    from ordering.catalogue.listing import ListProduct

    def _list(product_id="prod-001", name="Keyboard", price=10.0, quantity=10, **kwargs):
        return current_domain.process(
            ListProduct(product_id=product_id, name=name, price=price, quantity=quantity, **kwargs),
            asynchronous=False,
        )

    return _list


@pytest.fixture()
def add_to_cart():
    """Factory: add a product to a customer's cart."""
    from ordering.cart import items

    def _add(customer_id="cust-001", product_id="prod-001", quantity=1):
        items.add_to_cart(customer_id, product_id, quantity)

    return _add
