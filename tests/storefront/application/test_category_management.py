import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.category.category import Category
from storefront.category.management import (
    CreateCategory,
    RemoveCategory,
    RenameCategory,
    list_categories,
    product_categories,
)
from storefront.product.management import DeactivateProduct


def _create(name):
    return current_domain.process(CreateCategory(name=name), asynchronous=False)


class TestManageCategory:
    def test_create(self):
        category_id = _create("Bakery")
        assert current_domain.repository_for(Category).get(category_id).name == "Bakery"

    def test_duplicate_name_rejected(self):
        _create("Bakery")
        with pytest.raises(ValidationError) as exc:
            _create("bakery")
        assert exc.value.messages["name"] == ["Category already exists"]

    def test_rename(self):
        category_id = _create("Veggies")
        current_domain.process(RenameCategory(category_id=category_id, name="Vegetables"), asynchronous=False)
        assert current_domain.repository_for(Category).get(category_id).name == "Vegetables"

    def test_rename_to_own_name_is_allowed(self):
        category_id = _create("Fruits")
        current_domain.process(RenameCategory(category_id=category_id, name="fruits"), asynchronous=False)
        assert current_domain.repository_for(Category).get(category_id).name == "fruits"

    def test_rename_onto_another_category_rejected(self):
        _create("Fruits")
        snacks = _create("Snacks")
        with pytest.raises(ValidationError):
            current_domain.process(RenameCategory(category_id=snacks, name="Fruits"), asynchronous=False)
        assert current_domain.repository_for(Category).get(snacks).name == "Snacks"

    def test_remove(self):
        category_id = _create("Seasonal")
        current_domain.process(RemoveCategory(category_id=category_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Category).get(category_id)

    def test_remove_unknown(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveCategory(category_id="missing"), asynchronous=False)


class TestCategoryReads:
    def test_list_is_alphabetical(self):
        for name in ("Snacks", "Beverages", "Dairy"):
            _create(name)
        assert [category.name for category in list_categories()] == ["Beverages", "Dairy", "Snacks"]

    def test_product_categories_are_distinct_and_sorted(self, make_product):
        make_product(name="Milk", category="Dairy")
        make_product(name="Curd", category="Dairy")
        retired = make_product(name="Apples", category="Fruits")
        current_domain.process(DeactivateProduct(product_id=retired.id), asynchronous=False)

        assert product_categories() == ["Dairy", "Fruits"]

    def test_product_categories_empty_catalogue(self):
        assert product_categories() == []
