"""Ordering domain API package."""

from ordering.api.errors import register_error_handlers
from ordering.api.middleware import logging_context_middleware
from ordering.api.routes import cart_router, dashboard_router, order_router, product_router

__all__ = [
    "product_router",
    "cart_router",
    "order_router",
    "dashboard_router",
    "register_error_handlers",
    "logging_context_middleware",
]
