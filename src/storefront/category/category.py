"""Category aggregate: the named shelves products are filed under."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront


def _clean_name(name):
    name = (name or "").strip()
    if not name:
        raise ValidationError({"name": ["Category name is required"]})
    return name


@storefront.aggregate
class Category:
    """A category an admin curates for the storefront menu.

    Names are unique. Products reference categories by name, so renaming or
    removing a category leaves existing products untouched.
    """

    name: String(required=True, max_length=100, unique=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name):
        from storefront.category.events import CategoryCreated

        now = datetime.now()
        category = cls(name=_clean_name(name), created_at=now, updated_at=now)
        category.raise_(CategoryCreated(category_id=category.id, name=category.name))
        return category

    def rename(self, name):
        from storefront.category.events import CategoryRenamed

        previous = self.name
        self.name = _clean_name(name)
        self.updated_at = datetime.now()
        self.raise_(CategoryRenamed(category_id=self.id, previous_name=previous, name=self.name))
