"""Product aggregate: the catalogue entry an order line is priced and stocked from."""

from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import InsufficientStock


class ProductUnit(Enum):
    PIECE = "piece"
    KG = "kg"
    GRAM = "gram"
    LITER = "liter"
    ML = "ml"


# Fields an admin may change after creation
_EDITABLE_FIELDS = (
    "name",
    "description",
    "original_price",
    "discounted_price",
    "category",
    "image_url",
    "stock",
    "is_open",
    "unit",
)


@storefront.aggregate
class Product:
    """A sellable item.

    Discrete products carry an integer ``stock`` that every order decrements.
    Open products (``is_open``) are sold by weight or volume and their stock is
    never touched. Products are soft-deleted through ``is_active``.
    """

    name: String(required=True, max_length=255)
    description: Text(required=True)
    original_price: Float(required=True, min_value=0.0)
    discounted_price: Float(required=True, min_value=0.0)
    category: String(required=True, max_length=100)
    image_url: String(max_length=1024, default="")
    stock: Integer(default=0)
    is_open: Boolean(default=False)
    unit: String(choices=ProductUnit, default=ProductUnit.PIECE.value)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @classmethod
    def add(
        cls,
        name,
        description,
        original_price,
        discounted_price,
        category,
        image_url="",
        stock=0,
        is_open=False,
        unit=ProductUnit.PIECE.value,
    ):
        from storefront.product.events import ProductAdded

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            original_price=original_price,
            discounted_price=discounted_price,
            category=category,
            image_url=image_url or "",
            stock=stock or 0,
            is_open=is_open,
            unit=unit,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                category=category,
                discounted_price=discounted_price,
                stock=product.stock,
                is_open=is_open,
                added_at=now,
            )
        )
        return product

    def update_details(self, **changes):
        from storefront.product.events import ProductUpdated

        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({"product": [f"Fields cannot be edited: {', '.join(sorted(unknown))}"]})

        applied = {field: value for field, value in changes.items() if value is not None}
        for field, value in applied.items():
            setattr(self, field, value)
        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                changed_fields=",".join(sorted(applied)),
                updated_at=self.updated_at,
            )
        )

    def deactivate(self):
        from storefront.product.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        self.is_active = False
        self.updated_at = datetime.now()
        self.raise_(
            ProductDeactivated(
                product_id=str(self.id),
                deactivated_at=self.updated_at,
            )
        )

    def decrement_stock(self, quantity):
        """Take ``quantity`` units out of stock, or refuse when there are not enough.

        The check runs against this instance, which is the copy the Unit of
        Work commits, so a decrement can never drive stock below zero.
        """
        if self.is_open:
            return

        requested = int(quantity)
        if self.stock < requested:
            raise InsufficientStock(
                product_id=self.id,
                product_name=self.name,
                available=self.stock,
                requested=requested,
            )

        self.stock -= requested
        self.updated_at = datetime.now()
