"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field, StrictInt


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str
    city: str
    state: str | None = None
    postal_code: str
    country: str


# ---------------------------------------------------------------------------
# Product Schemas
# ---------------------------------------------------------------------------
class ListProductRequest(BaseModel):
    product_id: str | None = None
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str | None = None
    seller_id: str | None = None
    price: float = Field(ge=0)
    quantity: StrictInt = Field(ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mechanical Keyboard",
                    "category": "electronics",
                    "seller_id": "seller-001",
                    "price": 89.99,
                    "quantity": 25,
                }
            ]
        }
    }


class UpdateProductPriceRequest(BaseModel):
    price: float = Field(ge=0)


class ChangeProductStatusRequest(BaseModel):
    status: str


class RestockRequest(BaseModel):
    quantity: StrictInt


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    category: str | None = None
    seller_id: str | None = None
    price: float
    status: str
    available_quantity: int
    created_at: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class StockResponse(BaseModel):
    product_id: str
    available_quantity: int


class PaginationResponse(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class ProductPageResponse(BaseModel):
    products: list[ProductResponse]
    pagination: PaginationResponse


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: StrictInt = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: StrictInt


class CheckoutRequest(BaseModel):
    shipping_address: AddressSchema | None = None
    checkout_key: str | None = Field(default=None, max_length=255)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "123 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "postal_code": "62701",
                        "country": "US",
                    },
                    "checkout_key": "a1b2c3",
                }
            ]
        }
    }


class CartLineResponse(BaseModel):
    product_id: str
    product_name: str | None = None
    quantity: int
    unit_price: float | None = None
    subtotal: float | None = None
    available: bool


class CartResponse(BaseModel):
    customer_id: str
    items: list[CartLineResponse]
    item_count: int
    subtotal: float
    tax: float
    total: float


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class OrderLineResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    subtotal: float


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    items: list[OrderLineResponse]
    subtotal: float
    tax: float
    total: float
    status: str
    payment_status: str
    shipping_address: str | None = None
    created_at: str | None = None


class OrderStatsResponse(BaseModel):
    customer_id: str | None = None
    order_count: int
    revenue: float


# ---------------------------------------------------------------------------
# Dashboard Schemas
# ---------------------------------------------------------------------------
class CustomerDashboardResponse(BaseModel):
    customer_id: str
    cart_products: int
    total_orders: int
    added_products: int


class StoreDashboardResponse(BaseModel):
    total_products: int
    total_orders: int
    total_revenue: float


# ---------------------------------------------------------------------------
# Common Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"
