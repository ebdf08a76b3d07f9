"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    discounted_price: Float(required=True)
    stock: Integer()
    is_open: Boolean(default=False)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """Product details were edited by an admin."""

    __version__ = 1

    product_id: Identifier(required=True)
    changed_fields: String()  # comma-separated field names
    updated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDeactivated:
    """A product was soft-deleted and can no longer be ordered."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
