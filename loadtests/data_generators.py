"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that match the exact field names expected
by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def unique_customer_id() -> str:
    """Generate customer ids like 'cust-lt-a1b2c3d4'."""
    return f"cust-lt-{uuid.uuid4().hex[:8]}"


def unique_checkout_key() -> str:
    return uuid.uuid4().hex


def product_data(quantity: int | None = None) -> dict:
    """Generate ListProductRequest payload."""
    return {
        "product_id": f"prod-lt-{uuid.uuid4().hex[:8]}",
        "name": fake.catch_phrase()[:255],
        "description": fake.paragraph(nb_sentences=2),
        "category": random.choice(["electronics", "books", "garden", "toys"]),
        "seller_id": f"seller-{random.randint(1, 20):03d}",
        "price": round(random.uniform(1.0, 250.0), 2),
        "quantity": quantity if quantity is not None else random.randint(50, 500),
    }


def cart_item_data(product_id: str) -> dict:
    """Generate AddToCartRequest payload."""
    return {"product_id": product_id, "quantity": random.randint(1, 3)}


def shipping_address() -> dict:
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "postal_code": fake.zipcode()[:20],
        "country": "US",
    }


def checkout_data() -> dict:
    """Generate CheckoutRequest payload."""
    return {"shipping_address": shipping_address(), "checkout_key": unique_checkout_key()}
