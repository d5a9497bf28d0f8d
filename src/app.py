"""PayPlex ordering FastAPI application.

Serves the product, cart, checkout and order endpoints of the ordering
domain. Every request runs inside the ordering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering
from ordering.utils.logging import configure_logging

configure_logging()
ordering.init()


def create_app() -> FastAPI:
    from ordering.api import (
        cart_router,
        dashboard_router,
        logging_context_middleware,
        order_router,
        product_router,
        register_error_handlers,
    )

    app = FastAPI(
        title="PayPlex API",
        description="Order fulfillment — product catalogue, shopping cart and checkout",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the ordering domain context for each request."""
        with ordering.domain_context():
            return await call_next(request)

    app.middleware("http")(logging_context_middleware)

    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(dashboard_router)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": ordering.name})

    return app


app = create_app()
