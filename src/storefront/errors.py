"""Business-rule rejections raised by storefront aggregates and handlers.

Each error is a Protean ``ValidationError`` so that it aborts the surrounding
Unit of Work like any other invalid command, and carries a stable ``code``
that the API returns to clients.
"""

from protean.exceptions import ValidationError


class StorefrontError(ValidationError):
    code = "storefront_error"
    field = "_entity"

    def __init__(self, message, **details):
        self.message = message
        self.details = details
        super().__init__({self.field: [message]})


class ProductUnavailable(StorefrontError):
    code = "product_unavailable"
    field = "items"

    def __init__(self, product_id):
        super().__init__(f"Product {product_id} not found", product_id=str(product_id))


class InsufficientStock(StorefrontError):
    code = "insufficient_stock"
    field = "items"

    def __init__(self, product_id, product_name, available, requested):
        super().__init__(
            f"Insufficient stock for {product_name}",
            product_id=str(product_id),
            available=available,
            requested=requested,
        )


class InsufficientLoyaltyBalance(StorefrontError):
    code = "insufficient_loyalty_balance"
    field = "bcoins_used"

    def __init__(self, balance, requested):
        super().__init__("Insufficient bcoins", balance=balance, requested=requested)


class InvalidStatusTransition(StorefrontError):
    code = "invalid_status_transition"
    field = "status"

    def __init__(self, current, requested):
        super().__init__(
            f"Cannot transition from {current} to {requested}",
            current=current,
            requested=requested,
        )


class NotAuthorized(StorefrontError):
    code = "not_authorized"

    def __init__(self, message="Admin access required"):
        super().__init__(message)


class ConcurrencyConflict(StorefrontError):
    code = "concurrency_conflict"

    def __init__(self, message="The resource was modified concurrently, please retry"):
        super().__init__(message)


class PersistenceError(Exception):
    """Infrastructure failure while committing a command; surfaced as an opaque 500."""
