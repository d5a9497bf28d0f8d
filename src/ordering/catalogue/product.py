"""Product aggregate — the sellable item a cart line and order line refer to.

Available quantity is not a field here: it lives in the stock store, keyed by
product id, so checkouts can decrement it atomically without loading and
re-saving the aggregate.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISCONTINUED = "discontinued"


@ordering.aggregate
class Product:
    product_id = Identifier(identifier=True, required=True)
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    seller_id = Identifier()
    price = Float(required=True, min_value=0)
    status = String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, price, product_id=None, description=None, category=None, seller_id=None, quantity=0):
        from ordering.catalogue.events import ProductListed

        now = datetime.now(UTC)
        product = cls(
            product_id=product_id or str(uuid4()),
            name=name,
            description=description,
            category=category,
            seller_id=seller_id,
            price=price,
            status=ProductStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=product.product_id,
                name=product.name,
                price=product.price,
                seller_id=product.seller_id,
                category=product.category,
                quantity=quantity,
            )
        )
        return product

    def is_purchasable(self) -> bool:
        """Only active products can be added to a cart or checked out."""
        return self.status == ProductStatus.ACTIVE.value

    def change_price(self, new_price):
        from ordering.catalogue.events import ProductPriceChanged

        if new_price is None or new_price < 0:
            raise ValidationError({"price": ["Price must be zero or greater"]})

        previous_price = self.price
        self.price = new_price
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductPriceChanged(
                product_id=self.product_id,
                previous_price=previous_price,
                new_price=new_price,
            )
        )

    def change_status(self, new_status):
        from ordering.catalogue.events import ProductStatusChanged

        try:
            status = ProductStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown product status: {new_status}"]}) from None

        previous_status = self.status
        if previous_status == status.value:
            return

        self.status = status.value
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductStatusChanged(
                product_id=self.product_id,
                previous_status=previous_status,
                new_status=status.value,
            )
        )

    def record_restock(self, quantity):
        from ordering.catalogue.events import ProductRestocked

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductRestocked(
                product_id=self.product_id,
                quantity=quantity,
            )
        )
