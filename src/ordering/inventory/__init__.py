"""Stock store abstraction — pluggable available-quantity storage."""

import threading

from ordering.config import stock_store_adapter
from ordering.inventory.port import StockStore

_store_instance: StockStore | None = None
_store_lock = threading.Lock()


def get_stock_store() -> StockStore:
    """Return the configured stock store (singleton).

    Uses the in-memory store by default. Set ``STOCK_STORE_ADAPTER=sqlalchemy``
    to keep stock levels in the database named by ``DATABASE_URL``.
    """
    global _store_instance
    with _store_lock:
        if _store_instance is None:
            adapter = stock_store_adapter()
            if adapter == "memory":
                from ordering.inventory.memory import InMemoryStockStore

                _store_instance = InMemoryStockStore()
            elif adapter == "sqlalchemy":
                from ordering.inventory.sql import SqlStockStore
                from ordering.utils.db import get_engine

                _store_instance = SqlStockStore(get_engine())
            else:
                raise ValueError(f"Unknown stock store adapter: {adapter}")
        return _store_instance


def set_stock_store(store: StockStore | None) -> None:
    """Install a specific stock store (useful for testing)."""
    global _store_instance
    with _store_lock:
        _store_instance = store


def reset_stock_store():
    """Reset the stock store singleton (useful for testing)."""
    set_stock_store(None)
