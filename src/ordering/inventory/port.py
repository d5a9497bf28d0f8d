"""Stock store port — abstract interface for available-quantity storage.

The checkout flow programs against this port. Every mutation is a single
atomic step per product: a decrement either applies fully or not at all,
and no read-then-write sequence is ever exposed to callers.
"""

from abc import ABC, abstractmethod


class StockStore(ABC):
    """Abstract interface for stock store adapters."""

    @abstractmethod
    def initialize(self, product_id: str, quantity: int) -> None:
        """Set the available quantity of a newly listed product."""
        ...

    @abstractmethod
    def available(self, product_id: str) -> int | None:
        """Current available quantity, or None when the product is unknown.

        The value is advisory: it may be stale by the time the caller acts.
        """
        ...

    @abstractmethod
    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        """Atomically subtract ``quantity`` if at least that much is available.

        Returns:
            True if the decrement was applied, False if stock was insufficient
            (or the product is unknown). Never leaves a partial decrement.
        """
        ...

    @abstractmethod
    def increment(self, product_id: str, quantity: int) -> int:
        """Atomically add ``quantity`` back (compensation or restock).

        Returns:
            The new available quantity.
        """
        ...

    @abstractmethod
    def reset(self) -> None:
        """Forget all stock levels."""
        ...
