"""Relational schema for the stock store and order counter adapters.

Only used when ``STOCK_STORE_ADAPTER`` or ``ORDER_COUNTER_ADAPTER`` is set to
``sqlalchemy``; the default in-memory adapters need no schema.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from ordering.config import database_url

metadata = MetaData()

stock_levels = Table(
    "stock_levels",
    metadata,
    Column("product_id", String(64), primary_key=True),
    Column("available", Integer, nullable=False),
    CheckConstraint("available >= 0", name="ck_stock_levels_available_non_negative"),
)

order_counters = Table(
    "order_counters",
    metadata,
    Column("name", String(64), primary_key=True),
    Column("value", Integer, nullable=False),
)


def get_engine(url: str | None = None) -> Engine:
    """Create an engine for the configured database."""
    url = url or database_url()
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every pooled connection sees its own empty database
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url)


def setup_db(engine: Engine) -> None:
    """Create the stock and counter tables."""
    metadata.create_all(engine)


def drop_db(engine: Engine) -> None:
    """Drop the stock and counter tables."""
    metadata.drop_all(engine)
