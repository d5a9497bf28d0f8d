"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.items import add_to_cart
from ordering.cart.queries import get_cart
from ordering.catalogue.listing import ChangeProductStatus, ListProduct
from ordering.errors import OrderingError
from ordering.inventory import get_stock_store
from protean import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the last captured ordering error."""
    return {"exc": None}


@pytest.fixture()
def placed():
    """Orders placed during the scenario, by order id."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{product_id}" named "{name}" priced {price:f} with {quantity:d} in stock'))
def product_in_stock(product_id, name, price, quantity):
    current_domain.process(
        ListProduct(product_id=product_id, name=name, price=price, quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('customer "{customer_id}" has {quantity:d} of "{product_id}" in the cart'))
def customer_has_in_cart(customer_id, quantity, product_id):
    add_to_cart(customer_id, product_id, quantity)


@given(parsers.cfparse('product "{product_id}" is discontinued'))
def product_discontinued(product_id):
    current_domain.process(
        ChangeProductStatus(product_id=product_id, status="discontinued"),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request fails with "{code}"'))
def request_fails_with(error, code):
    assert isinstance(error["exc"], OrderingError)
    assert error["exc"].code == code


@then(parsers.cfparse('the cart of "{customer_id}" has {count:d} line'))
def cart_has_n_lines_singular(customer_id, count):
    assert get_cart(customer_id).item_count == count


@then(parsers.cfparse('the cart of "{customer_id}" has {count:d} lines'))
def cart_has_n_lines(customer_id, count):
    assert get_cart(customer_id).item_count == count


@then(parsers.cfparse('"{product_id}" has {quantity:d} in stock'))
def product_has_stock(product_id, quantity):
    assert get_stock_store().available(product_id) == quantity
