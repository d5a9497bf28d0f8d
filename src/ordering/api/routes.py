"""FastAPI routes for the Ordering domain — products, carts, orders and dashboards."""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    ChangeProductStatusRequest,
    CheckoutRequest,
    CustomerDashboardResponse,
    ListProductRequest,
    OrderResponse,
    OrderStatsResponse,
    ProductIdResponse,
    ProductPageResponse,
    ProductResponse,
    RestockRequest,
    StatusResponse,
    StockResponse,
    StoreDashboardResponse,
    UpdateCartQuantityRequest,
    UpdateProductPriceRequest,
)
from ordering.cart.items import add_to_cart, clear_cart, remove_from_cart, update_cart_quantity
from ordering.cart.queries import get_cart
from ordering.catalogue.listing import ChangeProductStatus, DeleteProduct, ListProduct, UpdateProductPrice
from ordering.catalogue.product import ProductStatus
from ordering.catalogue.queries import get_product, list_products
from ordering.checkout.checkout import place_order
from ordering.dashboard.queries import customer_dashboard, store_dashboard
from ordering.inventory.restock import restock_product
from ordering.order.queries import get_order, list_orders, order_stats, recent_orders, serialize_order

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def list_product(body: ListProductRequest) -> ProductIdResponse:
    command = ListProduct(
        product_id=body.product_id,
        name=body.name,
        description=body.description,
        category=body.category,
        seller_id=body.seller_id,
        price=body.price,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=ProductPageResponse)
async def browse_products(
    category: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ProductPageResponse:
    result = list_products(category=category, status=ProductStatus.ACTIVE.value, page=page, limit=limit)
    return ProductPageResponse(**result.to_dict())


@product_router.get("/category/{category}", response_model=ProductPageResponse)
async def browse_category(
    category: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ProductPageResponse:
    result = list_products(category=category, status=ProductStatus.ACTIVE.value, page=page, limit=limit)
    return ProductPageResponse(**result.to_dict())


@product_router.get("/mine", response_model=ProductPageResponse)
async def seller_products(
    seller_id: str,
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ProductPageResponse:
    result = list_products(seller_id=seller_id, status=status, page=page, limit=limit)
    return ProductPageResponse(**result.to_dict())


@product_router.get("/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str) -> ProductResponse:
    return ProductResponse(**get_product(product_id))


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def update_product_price(
    product_id: str, body: UpdateProductPriceRequest, seller_id: str | None = None
) -> StatusResponse:
    current_domain.process(
        UpdateProductPrice(product_id=product_id, price=body.price, seller_id=seller_id),
        asynchronous=False,
    )
    return StatusResponse()


@product_router.put("/{product_id}/status", response_model=StatusResponse)
async def change_product_status(
    product_id: str, body: ChangeProductStatusRequest, seller_id: str | None = None
) -> StatusResponse:
    current_domain.process(
        ChangeProductStatus(product_id=product_id, status=body.status, seller_id=seller_id),
        asynchronous=False,
    )
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, seller_id: str | None = None) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id, seller_id=seller_id), asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/restock", response_model=StockResponse)
async def restock(product_id: str, body: RestockRequest) -> StockResponse:
    available = restock_product(product_id, body.quantity)
    return StockResponse(product_id=product_id, available_quantity=available)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("/{customer_id}", response_model=CartResponse)
async def read_cart(customer_id: str) -> CartResponse:
    return CartResponse(**get_cart(customer_id).to_dict())


@cart_router.post("/{customer_id}/items", response_model=CartResponse)
async def add_item(customer_id: str, body: AddToCartRequest) -> CartResponse:
    add_to_cart(customer_id, body.product_id, body.quantity)
    return CartResponse(**get_cart(customer_id).to_dict())


@cart_router.put("/{customer_id}/items/{product_id}", response_model=CartResponse)
async def update_item(customer_id: str, product_id: str, body: UpdateCartQuantityRequest) -> CartResponse:
    update_cart_quantity(customer_id, product_id, body.quantity)
    return CartResponse(**get_cart(customer_id).to_dict())


@cart_router.delete("/{customer_id}/items/{product_id}", response_model=CartResponse)
async def remove_item(customer_id: str, product_id: str) -> CartResponse:
    remove_from_cart(customer_id, product_id)
    return CartResponse(**get_cart(customer_id).to_dict())


@cart_router.delete("/{customer_id}", response_model=StatusResponse)
async def empty_cart(customer_id: str) -> StatusResponse:
    clear_cart(customer_id)
    return StatusResponse()


@cart_router.post("/{customer_id}/checkout", status_code=201, response_model=OrderResponse)
async def checkout(customer_id: str, body: CheckoutRequest | None = None) -> OrderResponse:
    body = body or CheckoutRequest()
    shipping_address = json.dumps(body.shipping_address.model_dump()) if body.shipping_address else None
    order = place_order(customer_id, shipping_address=shipping_address, checkout_key=body.checkout_key)
    return OrderResponse(**serialize_order(order))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def read_orders(customer_id: str) -> list[OrderResponse]:
    return [OrderResponse(**serialize_order(order)) for order in list_orders(customer_id)]


@order_router.get("/stats", response_model=OrderStatsResponse)
async def read_order_stats(customer_id: str | None = None) -> OrderStatsResponse:
    stats = order_stats(customer_id)
    return OrderStatsResponse(
        customer_id=stats["customer_id"],
        order_count=stats["order_count"],
        revenue=float(stats["revenue"]),
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str, customer_id: str) -> OrderResponse:
    return OrderResponse(**serialize_order(get_order(order_id, customer_id)))


# ---------------------------------------------------------------------------
# Dashboard Router
# ---------------------------------------------------------------------------
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get("/stats/{customer_id}", response_model=CustomerDashboardResponse)
async def read_customer_dashboard(customer_id: str) -> CustomerDashboardResponse:
    return CustomerDashboardResponse(**customer_dashboard(customer_id))


@dashboard_router.get("/stats", response_model=StoreDashboardResponse)
async def read_store_dashboard() -> StoreDashboardResponse:
    stats = store_dashboard()
    return StoreDashboardResponse(
        total_products=stats["total_products"],
        total_orders=stats["total_orders"],
        total_revenue=float(stats["total_revenue"]),
    )


@dashboard_router.get("/recent-orders", response_model=list[OrderResponse])
async def read_recent_orders(limit: int = Query(10, ge=1, le=100)) -> list[OrderResponse]:
    return [OrderResponse(**serialize_order(order)) for order in recent_orders(limit)]
