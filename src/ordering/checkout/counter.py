"""Order counter — the durable, linearizable source of order numbers.

Adapters are swapped via ``ORDER_COUNTER_ADAPTER``. Every ``increment`` call
returns a value no other call has seen; values already handed out are never
reused, so aborted checkouts leave gaps rather than duplicates.
"""

import threading
from abc import ABC, abstractmethod

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from ordering.config import order_counter_adapter
from ordering.utils.db import order_counters, setup_db


class OrderCounter(ABC):
    """Abstract interface for order counter adapters."""

    @abstractmethod
    def increment(self) -> int:
        """Atomically advance the counter and return the new value."""
        ...

    @abstractmethod
    def current(self) -> int:
        ...


class InMemoryOrderCounter(OrderCounter):
    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def current(self) -> int:
        return self._value


class SqlOrderCounter(OrderCounter):
    """Counter row updated and read back inside one transaction."""

    def __init__(self, engine: Engine, name: str = "orders", start: int = 0):
        self.engine = engine
        self.name = name
        setup_db(engine)
        self._ensure_row(start)

    def _ensure_row(self, start: int) -> None:
        try:
            with self.engine.begin() as conn:
                exists = conn.execute(
                    select(order_counters.c.value).where(order_counters.c.name == self.name)
                ).scalar_one_or_none()
                if exists is None:
                    conn.execute(insert(order_counters).values(name=self.name, value=start))
        except IntegrityError:
            # Another process created the row first
            pass

    def increment(self) -> int:
        with self.engine.begin() as conn:
            result = conn.execute(
                update(order_counters)
                .where(order_counters.c.name == self.name)
                .values(value=order_counters.c.value + 1)
            )
            if result.rowcount != 1:
                raise RuntimeError(f"Order counter row {self.name!r} is missing")
            return conn.execute(
                select(order_counters.c.value).where(order_counters.c.name == self.name)
            ).scalar_one()

    def current(self) -> int:
        with self.engine.connect() as conn:
            return conn.execute(
                select(order_counters.c.value).where(order_counters.c.name == self.name)
            ).scalar_one()


_counter_instance: OrderCounter | None = None
_counter_lock = threading.Lock()


def get_order_counter() -> OrderCounter:
    """Return the configured order counter (singleton).

    Both adapters start after the orders already committed in the current
    domain, so a restarted process or a fresh counter table never reissues
    an existing id. A counter row that already exists keeps its value.
    """
    global _counter_instance
    with _counter_lock:
        if _counter_instance is None:
            from ordering.order.queries import count_orders

            adapter = order_counter_adapter()
            if adapter == "memory":
                _counter_instance = InMemoryOrderCounter(start=count_orders())
            elif adapter == "sqlalchemy":
                from ordering.utils.db import get_engine

                # Only used when the counter row is created
                _counter_instance = SqlOrderCounter(get_engine(), start=count_orders())
            else:
                raise ValueError(f"Unknown order counter adapter: {adapter}")
        return _counter_instance


def set_order_counter(counter: OrderCounter | None) -> None:
    """Install a specific order counter (useful for testing)."""
    global _counter_instance
    with _counter_lock:
        _counter_instance = counter


def reset_order_counter():
    """Reset the order counter singleton (useful for testing)."""
    set_order_counter(None)
