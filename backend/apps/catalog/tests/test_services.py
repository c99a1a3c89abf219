import unittest
from decimal import Decimal
from unittest.mock import patch

from django.db import IntegrityError

from apps.catalog.dtos import ProductDTO
from apps.catalog.exceptions import (
    ProductAlreadyExistsError,
    ProductDeletedError,
    ProductNotFoundError,
    ProductUpdateFailedError,
)
from apps.catalog.models import Category, Product
from apps.catalog.services import ProductService


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeCategoryRepository:
    def __init__(self):
        self._categories = {}
        self._pk = 1

    def create(self, **data):
        category = Category(**data)
        category.id = self._pk
        self._categories[self._pk] = category
        self._pk += 1
        return category

    def get_active_by_name(self, name):
        for category in self._categories.values():
            if category.name == name and not category.deleted:
                return category
        return None

    def get_by_name(self, name):
        for category in self._categories.values():
            if category.name == name:
                return category
        return None

    def all(self):
        return list(self._categories.values())


class FakeProductRepository:
    def __init__(self):
        self._products = {}
        self._pk = 1
        self.save_calls = 0

    def add(self, **data):
        category = data.pop("category", None)
        product = Product(**data)
        product.category = category
        return self.save(product)

    def save(self, product):
        self.save_calls += 1
        if product.id is None:
            product.id = self._pk
            self._pk += 1
        self._products[product.id] = product
        return product

    def get(self, **filters):
        return self._products.get(filters.get("id"))

    def list_by_deleted(self, deleted):
        return [p for p in self._products.values() if p.deleted == deleted]

    def get_active_by_title(self, title):
        for product in self._products.values():
            if product.title == title and not product.deleted and product.deleted_on is None:
                return product
        return None


class ProductServiceUnitTests(unittest.TestCase):
    def setUp(self):
        patcher = patch("apps.catalog.services.transaction.atomic", DummyAtomic())
        patcher.start()
        self.addCleanup(patcher.stop)
        self.category_repo = FakeCategoryRepository()
        self.product_repo = FakeProductRepository()
        self.service = ProductService(
            products=self.product_repo,
            categories=self.category_repo,
        )

    def _add_product(self, title="Lamp", **extra):
        data = {
            "title": title,
            "description": "Desk lamp",
            "price": Decimal("19.99"),
            "image": "lamp.png",
        }
        data.update(extra)
        return self.product_repo.add(**data)

    def _add_deleted_product(self, title="Old lamp"):
        product = self._add_product(title)
        product.mark_deleted()
        return product

    # find_all_products

    def test_find_all_products_filters_by_deleted_flag(self):
        active = self._add_product("Active")
        deleted = self._add_deleted_product("Gone")
        active_titles = [d.title for d in self.service.find_all_products(False)]
        deleted_dtos = self.service.find_all_products(True)
        self.assertEqual(active_titles, [active.title])
        self.assertEqual([d.title for d in deleted_dtos], [deleted.title])
        self.assertTrue(all(d.deleted for d in deleted_dtos))

    def test_find_all_products_empty(self):
        self.assertEqual(self.service.find_all_products(True), [])

    # find_product_by_id

    def test_find_product_by_id_flattens_category_name(self):
        category = self.category_repo.create(name="Lighting", description="Lights")
        product = self._add_product(category=category)
        dto = self.service.find_product_by_id(product.id)
        self.assertEqual(dto.category, "Lighting")
        self.assertEqual(dto.title, "Lamp")

    def test_find_product_by_id_without_category(self):
        product = self._add_product()
        self.assertIsNone(self.service.find_product_by_id(product.id).category)

    def test_find_product_by_id_missing_raises_not_found(self):
        with self.assertRaises(ProductNotFoundError) as ctx:
            self.service.find_product_by_id(404)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")
        self.assertEqual(ctx.exception.status_code, 404)

    def test_find_product_by_id_deleted_raises_already_deleted(self):
        product = self._add_deleted_product()
        with self.assertRaises(ProductDeletedError) as ctx:
            self.service.find_product_by_id(product.id)
        self.assertEqual(ctx.exception.status_code, 410)

    # save_product

    def test_save_product_rejects_duplicate_active_title(self):
        self._add_product("Lamp")
        with self.assertRaises(ProductAlreadyExistsError):
            self.service.save_product(ProductDTO(title="Lamp", price=Decimal("1.00")))
        self.assertEqual(len(self.product_repo.list_by_deleted(False)), 1)

    def test_save_product_allows_title_of_deleted_product(self):
        self._add_deleted_product("Lamp")
        dto = self.service.save_product(ProductDTO(title="Lamp", price=Decimal("1.00")))
        self.assertFalse(dto.deleted)
        self.assertIsNotNone(dto.id)

    def test_save_product_creates_missing_category_with_product_description(self):
        dto = self.service.save_product(
            ProductDTO(
                title="Kettle",
                description="Electric kettle",
                price=Decimal("30.00"),
                category="Kitchen",
            )
        )
        categories = self.category_repo.all()
        self.assertEqual(len(categories), 1)
        self.assertEqual(categories[0].name, "Kitchen")
        self.assertEqual(categories[0].description, "Electric kettle")
        self.assertEqual(dto.category, "Kitchen")

    def test_save_product_reuses_active_category(self):
        existing = self.category_repo.create(name="Kitchen", description="Cooking")
        self.service.save_product(
            ProductDTO(title="Pan", price=Decimal("12.00"), category="Kitchen")
        )
        self.assertEqual(self.category_repo.all(), [existing])
        saved = self.product_repo.get_active_by_title("Pan")
        self.assertIs(saved.category, existing)

    def test_save_product_ignores_deleted_category(self):
        stale = self.category_repo.create(name="Kitchen", description="Old")
        stale.mark_deleted()
        dto = self.service.save_product(
            ProductDTO(title="Pot", description="Stock pot", price=Decimal("5.00"), category="Kitchen")
        )
        categories = self.category_repo.all()
        self.assertEqual(len(categories), 2)
        saved = self.product_repo.get(id=dto.id)
        self.assertIsNot(saved.category, stale)
        self.assertEqual(saved.category.description, "Stock pot")

    def test_save_product_without_category(self):
        dto = self.service.save_product(ProductDTO(title="Chair", price=Decimal("45.00")))
        self.assertIsNone(dto.category)
        self.assertEqual(self.category_repo.all(), [])

    def test_save_product_ignores_client_supplied_state(self):
        dto = self.service.save_product(
            ProductDTO(id=99, title="Desk", price=Decimal("99.00"), deleted=True)
        )
        self.assertNotEqual(dto.id, 99)
        self.assertFalse(dto.deleted)
        self.assertIsNone(dto.deleted_on)

    def test_save_then_find_round_trip(self):
        request = ProductDTO(
            title="Mug",
            description="Ceramic mug",
            price=Decimal("7.50"),
            image="mug.png",
            category="Kitchen",
        )
        saved = self.service.save_product(request)
        fetched = self.service.find_product_by_id(saved.id)
        self.assertEqual(fetched, saved)
        self.assertEqual(
            (fetched.title, fetched.description, fetched.price, fetched.image, fetched.category),
            (request.title, request.description, request.price, request.image, request.category),
        )

    # update_product

    def test_update_product_changes_only_price(self):
        category = self.category_repo.create(name="Lighting", description="Lights")
        product = self._add_product(category=category)
        dto = self.service.update_product(product.id, ProductDTO(price=Decimal("9.99")))
        self.assertEqual(dto.price, Decimal("9.99"))
        self.assertEqual(dto.title, "Lamp")
        self.assertEqual(dto.description, "Desk lamp")
        self.assertEqual(dto.image, "lamp.png")
        self.assertEqual(dto.category, "Lighting")

    def test_update_product_reuses_deleted_category_by_name(self):
        stale = self.category_repo.create(name="Archive", description="Old")
        stale.mark_deleted()
        product = self._add_product()
        dto = self.service.update_product(product.id, ProductDTO(category="Archive"))
        self.assertEqual(dto.category, "Archive")
        self.assertIs(self.product_repo.get(id=product.id).category, stale)
        self.assertEqual(len(self.category_repo.all()), 1)

    def test_update_product_creates_missing_category(self):
        product = self._add_product()
        self.service.update_product(
            product.id, ProductDTO(description="Brighter lamp", category="Outdoor")
        )
        created = self.category_repo.get_by_name("Outdoor")
        self.assertIsNotNone(created)
        self.assertEqual(created.description, "Brighter lamp")

    def test_update_product_missing_raises_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            self.service.update_product(5, ProductDTO(title="X"))

    def test_update_product_missing_takes_priority_over_empty_payload(self):
        with self.assertRaises(ProductNotFoundError):
            self.service.update_product(5, None)

    def test_update_product_deleted_raises_already_deleted(self):
        product = self._add_deleted_product()
        with self.assertRaises(ProductDeletedError):
            self.service.update_product(product.id, None)

    def test_update_product_without_payload_fails(self):
        product = self._add_product()
        with self.assertRaises(ProductUpdateFailedError) as ctx:
            self.service.update_product(product.id, None)
        self.assertEqual(ctx.exception.code, "UPDATE_FAILED")

    # delete_product

    def test_delete_product_soft_deletes(self):
        product = self._add_product()
        self.assertIsNone(self.service.delete_product(product.id))
        stored = self.product_repo.get(id=product.id)
        self.assertTrue(stored.deleted)
        self.assertIsNotNone(stored.deleted_on)
        self.assertEqual(self.service.find_all_products(True)[0].id, product.id)

    def test_delete_product_twice_raises_already_deleted(self):
        product = self._add_product()
        self.service.delete_product(product.id)
        with self.assertRaises(ProductDeletedError) as ctx:
            self.service.delete_product(product.id)
        self.assertIn("already deleted", ctx.exception.message)

    def test_delete_product_missing_raises_not_found(self):
        with self.assertRaises(ProductNotFoundError):
            self.service.delete_product(1)

    def test_delete_product_translates_integrity_error(self):
        product = self._add_product()

        def conflicting_save(_product):
            raise IntegrityError("UNIQUE constraint failed: catalog_product.title, catalog_product.deleted")

        self.product_repo.save = conflicting_save
        with self.assertRaises(ProductAlreadyExistsError) as ctx:
            self.service.delete_product(product.id)
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertIsInstance(ctx.exception.__cause__, IntegrityError)

    def test_delete_product_unpersisted_flag_fails(self):
        product = self._add_product()
        original_save = self.product_repo.save

        def lossy_save(p):
            stored = original_save(p)
            stored.deleted = False
            return stored

        self.product_repo.save = lossy_save
        with self.assertRaises(ProductUpdateFailedError):
            self.service.delete_product(product.id)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
