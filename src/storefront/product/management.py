"""Catalogue management: admin commands and handler, plus the active-product lookup."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.domain import storefront
from storefront.errors import ProductUnavailable
from storefront.product.product import Product


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text(required=True)
    original_price: Float(required=True)
    discounted_price: Float(required=True)
    category: String(required=True, max_length=100)
    image_url: String(max_length=1024)
    stock: Integer(default=0)
    is_open: Boolean(default=False)
    unit: String(max_length=10)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    original_price: Float()
    discounted_price: Float()
    category: String(max_length=100)
    image_url: String(max_length=1024)
    stock: Integer()
    is_open: Boolean()
    unit: String(max_length=10)


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        kwargs = {
            "name": command.name,
            "description": command.description,
            "original_price": command.original_price,
            "discounted_price": command.discounted_price,
            "category": command.category,
            "image_url": command.image_url,
            "stock": command.stock,
            "is_open": bool(command.is_open),
        }
        if command.unit:
            kwargs["unit"] = command.unit

        product = Product.add(**kwargs)
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        changes = {}
        for field in (
            "name",
            "description",
            "original_price",
            "discounted_price",
            "category",
            "image_url",
            "stock",
            "is_open",
            "unit",
        ):
            value = getattr(command, field, None)
            if value is not None:
                changes[field] = value

        product.update_details(**changes)
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)


def find_active_product(product_id) -> Product:
    """Load a product that can still be ordered.

    Raises:
        ProductUnavailable: the product does not exist or was deactivated.
    """
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ProductUnavailable(product_id) from None

    if not product.is_active:
        raise ProductUnavailable(product_id)
    return product


SORTABLE_FIELDS = ("created_at", "name", "discounted_price", "original_price", "stock", "category")


def list_products(category=None, search=None, page=1, limit=20, sort_by="created_at", sort_order="desc"):
    """Active products, optionally narrowed by category and a search over name and description.

    Results are sorted on one of ``SORTABLE_FIELDS``; ``sort_order`` is ``asc`` or ``desc``.

    Returns:
        The Protean ``ResultSet`` for the requested page (``items`` and ``total``).
    """
    sort_by = sort_by or "created_at"
    if sort_by not in SORTABLE_FIELDS:
        raise ValidationError({"sort_by": [f"Cannot sort by {sort_by}"]})
    if sort_order not in ("asc", "desc"):
        raise ValidationError({"sort_order": ["Sort order must be asc or desc"]})

    query = current_domain.repository_for(Product)._dao.query.filter(is_active=True)
    if category:
        query = query.filter(category=category)
    if search:
        query = query.filter(Q(name__icontains=search) | Q(description__icontains=search))

    return (
        query.order_by(sort_by if sort_order == "asc" else f"-{sort_by}")
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
