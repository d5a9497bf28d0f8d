"""In-memory stock store — per-product locks, no global catalogue lock."""

import structlog

from ordering.inventory.port import StockStore
from ordering.utils.locks import KeyedLocks

logger = structlog.get_logger(__name__)


class InMemoryStockStore(StockStore):
    """Process-local stock levels guarded by one lock per product."""

    def __init__(self):
        self._levels: dict[str, int] = {}
        self._locks = KeyedLocks()

    def initialize(self, product_id: str, quantity: int) -> None:
        if quantity < 0:
            raise ValueError(f"Stock level cannot be negative: {quantity}")
        with self._locks.hold(product_id):
            self._levels[product_id] = quantity

    def available(self, product_id: str) -> int | None:
        return self._levels.get(product_id)

    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        with self._locks.hold(product_id):
            current = self._levels.get(product_id)
            if current is None or current < quantity:
                return False
            self._levels[product_id] = current - quantity
            return True

    def increment(self, product_id: str, quantity: int) -> int:
        with self._locks.hold(product_id):
            current = self._levels.get(product_id, 0) + quantity
            self._levels[product_id] = current
            return current

    def reset(self) -> None:
        self._levels.clear()
