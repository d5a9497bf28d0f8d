"""Environment-driven settings for the Ordering domain.

Values are read on every call so tests and deployments can change them
through the environment without reloading modules.
"""

import os
from decimal import Decimal, InvalidOperation

DEFAULT_TAX_RATE = "0.10"
DEFAULT_ORDER_ID_PREFIX = "ORD-"
DEFAULT_ORDER_ID_WIDTH = 3


def get_env() -> str:
    """Current deployment environment name."""
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def tax_rate() -> Decimal:
    """Fixed tax fraction applied to every order subtotal."""
    raw = os.getenv("TAX_RATE", DEFAULT_TAX_RATE)
    try:
        rate = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"TAX_RATE must be a decimal fraction, got {raw!r}") from None
    if rate < 0:
        raise ValueError(f"TAX_RATE must not be negative, got {raw!r}")
    return rate


def order_id_prefix() -> str:
    return os.getenv("ORDER_ID_PREFIX", DEFAULT_ORDER_ID_PREFIX)


def order_id_width() -> int:
    raw = os.getenv("ORDER_ID_WIDTH", str(DEFAULT_ORDER_ID_WIDTH))
    try:
        width = int(raw)
    except ValueError:
        raise ValueError(f"ORDER_ID_WIDTH must be an integer, got {raw!r}") from None
    if width < 1:
        raise ValueError(f"ORDER_ID_WIDTH must be at least 1, got {raw!r}")
    return width


def stock_store_adapter() -> str:
    return os.getenv("STOCK_STORE_ADAPTER", "memory").lower()


def order_counter_adapter() -> str:
    return os.getenv("ORDER_COUNTER_ADAPTER", "memory").lower()


def database_url() -> str:
    """SQLAlchemy URL used by the relational stock store and order counter."""
    return os.getenv("DATABASE_URL", "sqlite:///payplex.db")
