"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductListed:
    """A seller listed a new product with its opening stock."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    seller_id = Identifier()
    category = String(max_length=100)
    quantity = Integer(required=True)


@ordering.event(part_of="Product")
class ProductPriceChanged:
    """The unit price of a product was changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)


@ordering.event(part_of="Product")
class ProductStatusChanged:
    __version__ = 1

    product_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)


@ordering.event(part_of="Product")
class ProductRestocked:
    """Stock was added to a product outside of checkout compensation."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
