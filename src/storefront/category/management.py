"""Category management: admin commands and handler, plus the menu reads."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import logger, storefront
from storefront.product.product import Product


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)


@storefront.command(part_of="Category")
class RenameCategory:
    category_id: Identifier(required=True)
    name: String(required=True, max_length=100)


@storefront.command(part_of="Category")
class RemoveCategory:
    category_id: Identifier(required=True)


def _ensure_name_free(name, category_id=None):
    name = (name or "").strip()
    for existing in current_domain.repository_for(Category)._dao.query.filter(name__iexact=name).all().items:
        if str(existing.id) != str(category_id):
            raise ValidationError({"name": ["Category already exists"]})


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        _ensure_name_free(command.name)
        category = Category.create(command.name)
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(RenameCategory)
    def rename_category(self, command):
        repo = current_domain.repository_for(Category)
        _ensure_name_free(command.name, command.category_id)
        category = repo.get(command.category_id)
        category.rename(command.name)
        repo.add(category)

    @handle(RemoveCategory)
    def remove_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)
        logger.info("Category removed", category_id=str(category.id), name=category.name)


def list_categories():
    """Every curated category, alphabetically."""
    return current_domain.repository_for(Category)._dao.query.order_by("name").limit(None).all().items


def product_categories():
    """Distinct category names in use across the product catalogue, alphabetically."""
    query = current_domain.repository_for(Product)._dao.query.order_by("created_at")
    names = set()
    offset, page_size = 0, 500
    while True:
        results = query.offset(offset).limit(page_size).all()
        names.update(product.category for product in results.items if product.category)
        offset += page_size
        if offset >= results.total:
            break
    return sorted(names)
