"""PayPlex Load Testing — Locust entry point.

Run specific scenarios with Locust's class selection.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Happy-path checkouts only:
    locust -f loadtests/locustfile.py ShopperUser

    # Contention on a single low-stock product (headless, CI mode):
    locust -f loadtests/locustfile.py LastUnitsUser --headless \
           -u 50 -r 10 -t 120s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

from loadtests.data_generators import product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.ordering import LastUnitsUser, ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")

CONTENDED_STOCK = 25


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every unexpected failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400 and response.status_code != 409:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """List the shared low-stock product before users start."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")

    resp = requests.post(f"{environment.host}/products", json=product_data(quantity=CONTENDED_STOCK), timeout=10)
    resp.raise_for_status()
    LastUnitsUser.contended_product_id = resp.json()["product_id"]
    print(f"[LOADTEST] Contended product {LastUnitsUser.contended_product_id} with {CONTENDED_STOCK} units\n")


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Check the contended product was never oversold."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    product_id = LastUnitsUser.contended_product_id
    if not product_id:
        return

    try:
        product = requests.get(f"{environment.host}/products/{product_id}", timeout=5).json()
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not read contended product: {e}\n")
        return

    available = product.get("available_quantity")
    print(f"[LOADTEST] Contended product remaining stock: {available}")
    if available is None or available < 0:
        print("[LOADTEST] OVERSOLD: stock went negative\n")
        environment.process_exit_code = 1
