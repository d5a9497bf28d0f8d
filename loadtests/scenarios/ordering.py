"""Ordering load test scenarios.

ShopperUser walks the happy path: list a product, browse, fill a cart, check out,
read the order back. LastUnitsUser piles concurrent checkouts onto a single
low-stock product; insufficient-stock rejections are expected there, an
oversold product is not.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, checkout_data, product_data, unique_customer_id
from loadtests.helpers.response import extract_error_code, extract_error_detail
from loadtests.helpers.state import ShopperState

EXPECTED_CHECKOUT_REJECTIONS = {"insufficient_stock", "empty_cart"}


class CheckoutJourney(SequentialTaskSet):
    """List Product -> Browse -> Add Items -> Read Cart -> Checkout -> Read Order."""

    def on_start(self):
        self.state = ShopperState(customer_id=unique_customer_id())

    @task
    def list_products(self):
        for _ in range(2):
            with self.client.post("/products", json=product_data(), catch_response=True, name="POST /products") as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"List product failed: {resp.status_code} — {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def browse(self):
        self.client.get("/products", params={"page": 1, "limit": 10}, name="GET /products")

    @task
    def add_items(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                f"/cart/{self.state.customer_id}/items",
                json=cart_item_data(product_id),
                catch_response=True,
                name="POST /cart/{customer_id}/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_lines = resp.json()["item_count"]
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def read_cart(self):
        self.client.get(f"/cart/{self.state.customer_id}", name="GET /cart/{customer_id}")

    @task
    def checkout(self):
        with self.client.post(
            f"/cart/{self.state.customer_id}/checkout",
            json=checkout_data(),
            catch_response=True,
            name="POST /cart/{customer_id}/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order_id"])
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def read_order(self):
        for order_id in self.state.order_ids:
            self.client.get(
                f"/orders/{order_id}",
                params={"customer_id": self.state.customer_id},
                name="GET /orders/{order_id}",
            )
        self.interrupt()


class ShopperUser(HttpUser):
    tasks = [CheckoutJourney]
    wait_time = between(0.5, 2)


class LastUnitsUser(HttpUser):
    """Many customers racing for a product with little stock.

    Every user shares ``contended_product_id``, created once per test run by
    the locustfile's test_start hook.
    """

    wait_time = between(0.1, 0.5)
    contended_product_id: str | None = None

    def on_start(self):
        self.customer_id = unique_customer_id()

    @task
    def grab_and_checkout(self):
        if not self.contended_product_id:
            return

        self.client.post(
            f"/cart/{self.customer_id}/items",
            json={"product_id": self.contended_product_id, "quantity": random.randint(1, 2)},
            name="POST /cart/{customer_id}/items [contended]",
        )
        with self.client.post(
            f"/cart/{self.customer_id}/checkout",
            json={},
            catch_response=True,
            name="POST /cart/{customer_id}/checkout [contended]",
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif extract_error_code(resp) in EXPECTED_CHECKOUT_REJECTIONS:
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
