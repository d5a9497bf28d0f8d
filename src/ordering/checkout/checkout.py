"""Checkout orchestrator — commits a customer's cart as an order.

Steps, in order:
    1. Read the cart; an empty cart is rejected.
    2. Snapshot every line against the current product and stock level.
    3. Price the snapshot.
    4. Allocate an order id (before any stock is touched).
    5. Decrement stock line by line with a conditional decrement. The first
       decrement that fails reverses the ones already applied.
    6. Persist the order and the emptied cart in one unit of work. If that
       fails, every decrement is reversed.

After step 6 the checkout is complete. Before it, a failure leaves stock,
cart and orders exactly as they were, apart from a skipped order number.
"""

import structlog
from protean import UnitOfWork
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue.queries import load_purchasable_product
from ordering.checkout.pricing import price_lines, to_decimal
from ordering.checkout.sequencer import OrderSequencer
from ordering.errors import EmptyCartError, InsufficientStockError
from ordering.inventory import get_stock_store
from ordering.inventory.port import StockStore
from ordering.order.order import Order
from ordering.order.queries import find_order_by_checkout_key
from ordering.utils.locks import KeyedLocks

logger = structlog.get_logger(__name__)

# Serializes checkouts of the same cart within this process
_customer_locks = KeyedLocks()


class CheckoutService:
    def __init__(self, stock_store: StockStore | None = None, sequencer: OrderSequencer | None = None):
        self._stock_store = stock_store
        self.sequencer = sequencer or OrderSequencer()

    @property
    def stock_store(self) -> StockStore:
        return self._stock_store or get_stock_store()

    def place_order(self, customer_id, shipping_address=None, checkout_key=None) -> Order:
        """Check out the customer's cart.

        Args:
            customer_id: Owner of the cart.
            shipping_address: Text snapshot stored on the order.
            checkout_key: Optional client-chosen key. Repeating a checkout with
                a key that already produced an order returns that order.

        Raises:
            EmptyCartError: The cart has no lines.
            ProductNotFoundError: A line refers to a missing or inactive product.
            InsufficientStockError: A line asks for more than is available,
                either on first read or because a concurrent checkout won.
            SequencerUnavailableError: No order id could be allocated.
        """
        customer_id = str(customer_id)
        log = logger.bind(customer_id=customer_id, checkout_key=checkout_key)

        with _customer_locks.hold(customer_id):
            if checkout_key:
                existing = find_order_by_checkout_key(customer_id, checkout_key)
                if existing is not None:
                    log.info("checkout.replayed", order_id=existing.order_id)
                    return existing

            cart_repo = current_domain.repository_for(ShoppingCart)
            cart = self._load_cart(cart_repo, customer_id)
            snapshot = self._snapshot(cart)
            totals = price_lines([(line["unit_price"], line["quantity"]) for line in snapshot])

            order_id = self.sequencer.next()
            log = log.bind(order_id=order_id)

            taken = self._take_stock(snapshot, log)
            try:
                order = Order.place(
                    order_id=order_id,
                    customer_id=customer_id,
                    lines=snapshot,
                    totals=totals,
                    shipping_address=shipping_address,
                    checkout_key=checkout_key,
                )
                cart.clear(order_id=order_id)

                with UnitOfWork():
                    current_domain.repository_for(Order).add(order)
                    cart_repo.add(cart)
            except Exception:
                log.error("checkout.commit_failed", exc_info=True)
                self._release(taken, log)
                raise

            log.info(
                "checkout.committed",
                item_count=len(snapshot),
                subtotal=float(totals.subtotal),
                total=float(totals.total),
            )
            return order

    def _load_cart(self, repo, customer_id) -> ShoppingCart:
        try:
            cart = repo.get(customer_id)
        except ObjectNotFoundError:
            raise EmptyCartError(customer_id) from None
        if cart.is_empty():
            raise EmptyCartError(customer_id)
        return cart

    def _snapshot(self, cart: ShoppingCart) -> list[dict]:
        """Freeze product name, price and quantity for each line, in cart order."""
        snapshot = []
        for item in cart.lines():
            product = load_purchasable_product(item.product_id)
            available = self.stock_store.available(product.product_id) or 0
            if item.quantity > available:
                raise InsufficientStockError(product.product_id, available, item.quantity, product.name)

            snapshot.append(
                {
                    "product_id": product.product_id,
                    "product_name": product.name,
                    "unit_price": to_decimal(product.price),
                    "quantity": item.quantity,
                }
            )
        return snapshot

    def _take_stock(self, snapshot: list[dict], log) -> list[dict]:
        """Decrement every line or none of them."""
        store = self.stock_store
        taken = []
        try:
            for line in snapshot:
                if not store.decrement_if_available(line["product_id"], line["quantity"]):
                    available = store.available(line["product_id"]) or 0
                    log.warning(
                        "checkout.stock_race_lost",
                        product_id=line["product_id"],
                        requested=line["quantity"],
                        available=available,
                    )
                    raise InsufficientStockError(
                        line["product_id"], available, line["quantity"], line["product_name"]
                    )
                taken.append(line)
        except Exception:
            self._release(taken, log)
            raise
        return taken

    def _release(self, taken: list[dict], log) -> None:
        """Give back decremented stock, most recent first."""
        store = self.stock_store
        for line in reversed(taken):
            try:
                store.increment(line["product_id"], line["quantity"])
            except Exception:
                # Keep releasing the rest; the caller re-raises the first failure
                log.error(
                    "checkout.compensation_failed",
                    product_id=line["product_id"],
                    quantity=line["quantity"],
                    exc_info=True,
                )
            else:
                log.warning("checkout.stock_released", product_id=line["product_id"], quantity=line["quantity"])


def place_order(customer_id, shipping_address=None, checkout_key=None) -> Order:
    """Check out with the configured stock store and order counter."""
    return CheckoutService().place_order(customer_id, shipping_address=shipping_address, checkout_key=checkout_key)
