"""Caller-actionable errors raised by the cart, inventory and checkout flows.

Every error carries a stable ``code`` and a ``context`` dict with the ids and
quantities the caller needs to adjust and retry.
"""


class OrderingError(Exception):
    """Base exception for all ordering errors."""

    code = "ordering_error"

    def __init__(self, message: str, **context):
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, **self.context}


class InvalidQuantityError(OrderingError):
    """Raised when a quantity is not a positive integer."""

    code = "invalid_quantity"

    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__("Quantity must be a positive integer", quantity=quantity)


class ProductNotFoundError(OrderingError):
    """Raised when a product id does not resolve to a purchasable product."""

    code = "product_not_found"

    def __init__(self, product_id: str, reason: str | None = None):
        self.product_id = product_id
        msg = f"Product not found: {product_id}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg, product_id=product_id)


class LineNotFoundError(OrderingError):
    """Raised when a cart has no line for the given product."""

    code = "line_not_found"

    def __init__(self, customer_id: str, product_id: str):
        self.customer_id = customer_id
        self.product_id = product_id
        super().__init__(
            f"Product {product_id} is not in the cart",
            customer_id=customer_id,
            product_id=product_id,
        )


class InsufficientStockError(OrderingError):
    """Raised when the requested quantity exceeds the available stock."""

    code = "insufficient_stock"

    def __init__(self, product_id: str, available: int, requested: int, product_name: str | None = None):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        label = product_name or product_id
        super().__init__(
            f"Insufficient stock for {label}. Only {available} available.",
            product_id=product_id,
            available=available,
            requested=requested,
        )


class EmptyCartError(OrderingError):
    """Raised when checking out a cart without lines."""

    code = "empty_cart"

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__("Cart is empty", customer_id=customer_id)


class SequencerUnavailableError(OrderingError):
    """Raised when no order id can be allocated."""

    code = "sequencer_unavailable"

    def __init__(self, reason: str | None = None):
        msg = "Order sequencer unavailable"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class UnauthorizedError(OrderingError):
    """Raised when a customer reads an order owned by someone else."""

    code = "unauthorized"

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__("Unauthorized to access this order", order_id=order_id)


class OrderNotFoundError(OrderingError):
    """Raised when an order id does not exist."""

    code = "order_not_found"

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}", order_id=order_id)


class ProductOwnershipError(OrderingError):
    """Raised when a seller changes or deletes another seller's product."""

    code = "not_product_owner"

    def __init__(self, product_id: str, seller_id: str):
        self.product_id = product_id
        self.seller_id = seller_id
        super().__init__(
            "You are not authorized to modify this product",
            product_id=product_id,
            seller_id=seller_id,
        )
