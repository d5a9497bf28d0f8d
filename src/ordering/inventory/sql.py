"""Relational stock store — conditional UPDATE per product.

The decrement is a single ``UPDATE ... WHERE available >= :quantity``; the
row count tells whether it applied, so the database serializes competing
checkouts on the row and never lets the level go negative.
"""

import structlog
from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from ordering.inventory.port import StockStore
from ordering.utils.db import setup_db, stock_levels

logger = structlog.get_logger(__name__)


class SqlStockStore(StockStore):
    def __init__(self, engine: Engine):
        self.engine = engine
        setup_db(engine)

    def initialize(self, product_id: str, quantity: int) -> None:
        if quantity < 0:
            raise ValueError(f"Stock level cannot be negative: {quantity}")
        with self.engine.begin() as conn:
            result = conn.execute(
                update(stock_levels).where(stock_levels.c.product_id == product_id).values(available=quantity)
            )
            if result.rowcount == 0:
                conn.execute(insert(stock_levels).values(product_id=product_id, available=quantity))

    def available(self, product_id: str) -> int | None:
        with self.engine.connect() as conn:
            return conn.execute(
                select(stock_levels.c.available).where(stock_levels.c.product_id == product_id)
            ).scalar_one_or_none()

    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(
                update(stock_levels)
                .where(stock_levels.c.product_id == product_id)
                .where(stock_levels.c.available >= quantity)
                .values(available=stock_levels.c.available - quantity)
            )
            return result.rowcount == 1

    def increment(self, product_id: str, quantity: int) -> int:
        with self.engine.begin() as conn:
            result = conn.execute(
                update(stock_levels)
                .where(stock_levels.c.product_id == product_id)
                .values(available=stock_levels.c.available + quantity)
            )
            if result.rowcount == 0:
                conn.execute(insert(stock_levels).values(product_id=product_id, available=quantity))
            return conn.execute(
                select(stock_levels.c.available).where(stock_levels.c.product_id == product_id)
            ).scalar_one()

    def reset(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(stock_levels.delete())
