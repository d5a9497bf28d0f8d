"""Ordering bounded context — Product Catalogue, Shopping Cart and Checkout.

Handles the seller-facing product listing, per-customer shopping carts, and
the checkout flow that commits a cart into an immutable order while
decrementing shared product inventory.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
