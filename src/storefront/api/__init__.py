"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import category_router, customer_router, order_router, product_router

__all__ = [
    "category_router",
    "customer_router",
    "order_router",
    "product_router",
    "register_error_handlers",
]
