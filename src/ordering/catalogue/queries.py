"""Read-side helpers for products and their current stock."""

import math
from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product, ProductStatus
from ordering.errors import ProductNotFoundError
from ordering.inventory import get_stock_store
from ordering.utils.queries import fetch_all


@dataclass(frozen=True)
class ProductPage:
    """One page of products, newest listing first."""

    products: list[dict] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> dict:
        return {
            "products": self.products,
            "pagination": {
                "total": self.total,
                "page": self.page,
                "limit": self.limit,
                "pages": self.pages,
            },
        }


def find_product(product_id) -> Product | None:
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        return None


def load_purchasable_product(product_id) -> Product:
    """Load a product that can be sold, or raise ProductNotFoundError."""
    product = find_product(product_id)
    if product is None:
        raise ProductNotFoundError(str(product_id))
    if not product.is_purchasable():
        raise ProductNotFoundError(str(product_id), reason=f"product is {product.status}")
    return product


def serialize_product(product: Product) -> dict:
    return {
        "product_id": product.product_id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "seller_id": product.seller_id,
        "price": product.price,
        "status": product.status,
        "available_quantity": get_stock_store().available(product.product_id) or 0,
        "created_at": product.created_at.isoformat() if product.created_at else None,
    }


def get_product(product_id) -> dict:
    """Product data with its currently available quantity."""
    product = find_product(product_id)
    if product is None:
        raise ProductNotFoundError(str(product_id))
    return serialize_product(product)


def list_products(category=None, seller_id=None, status=None, page: int = 1, limit: int = 10) -> ProductPage:
    """Filter products and return one page of them.

    Every filter left as ``None`` matches all products. Browsing passes
    ``status="active"``; a seller's own listing leaves it open.
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)

    filters = {}
    if category is not None:
        filters["category"] = category
    if seller_id is not None:
        filters["seller_id"] = str(seller_id)
    if status is not None:
        try:
            filters["status"] = ProductStatus(status).value
        except ValueError:
            raise ValidationError({"status": [f"Unknown product status: {status}"]}) from None

    query = current_domain.repository_for(Product)._dao.query
    if filters:
        query = query.filter(**filters)

    products = sorted(
        fetch_all(query),
        key=lambda p: (p.created_at, str(p.product_id)),
        reverse=True,
    )
    start = (page - 1) * limit
    return ProductPage(
        products=[serialize_product(p) for p in products[start : start + limit]],
        total=len(products),
        page=page,
        limit=limit,
    )


def count_products(seller_id=None) -> int:
    query = current_domain.repository_for(Product)._dao.query
    if seller_id is not None:
        query = query.filter(seller_id=str(seller_id))
    return query.all().total
