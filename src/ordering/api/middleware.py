"""Request-scoped logging context."""

from fastapi import Request

from ordering.utils.logging import add_context, clear_context


def customer_from(request: Request) -> str | None:
    """Customer id from ``/cart/{customer_id}...`` paths or a ``customer_id`` query parameter."""
    parts = request.url.path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] == "cart":
        return parts[1]
    return request.query_params.get("customer_id")


async def logging_context_middleware(request: Request, call_next):
    """Bind path, method and customer to every event logged while serving the request."""
    clear_context()
    context = {"path": request.url.path, "method": request.method}
    customer_id = customer_from(request)
    if customer_id:
        context["customer_id"] = customer_id
    add_context(**context)
    try:
        return await call_next(request)
    finally:
        clear_context()
