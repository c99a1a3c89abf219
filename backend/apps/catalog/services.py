from __future__ import annotations

from typing import List, Optional

from django.db import IntegrityError, transaction

from apps.common import get_logger
from .dtos import ProductDTO
from .exceptions import (
    ProductAlreadyExistsError,
    ProductDeletedError,
    ProductNotFoundError,
    ProductUpdateFailedError,
)
from .mappers import ProductMapper, WRITABLE_FIELDS
from .models import Category
from .protocols import (
    CategoryRepositoryProtocol,
    ProductMapperProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="catalog", layer="service")


class ProductService:
    """Product CRUD with soft delete and on-demand category creation.

    Stateless: every call reads fresh state through the injected stores.
    """

    def __init__(
        self,
        products: ProductRepositoryProtocol,
        categories: CategoryRepositoryProtocol,
        mapper: ProductMapperProtocol = ProductMapper,
    ):
        self.products = products
        self.categories = categories
        self.mapper = mapper
        self.logger = logger.bind(service="ProductService")

    def find_all_products(self, deleted: bool = False) -> List[ProductDTO]:
        products = list(self.products.list_by_deleted(deleted))
        self.logger.info("Found products", count=len(products), deleted=deleted)
        return self.mapper.many_to_dto(products)

    def find_product_by_id(self, product_id: int) -> ProductDTO:
        product = self.products.get(id=product_id)
        if product is None:
            self.logger.error("Product not found", product_id=product_id)
            raise ProductNotFoundError(product_id)
        if product.deleted:
            self.logger.error("Product is already deleted", product_id=product_id)
            raise ProductDeletedError(product_id)
        self.logger.info("Product found", product_id=product_id)
        return self.mapper.to_dto(product)

    def save_product(self, dto: ProductDTO) -> ProductDTO:
        self._ensure_title_available(dto.title)

        category_name = dto.category
        self.logger.info(
            "Resolving category before save", title=dto.title, category=category_name
        )
        category = (
            self.categories.get_active_by_name(category_name)
            if category_name is not None
            else None
        )

        product = self.mapper.to_entity(dto)
        with transaction.atomic():
            if category_name is not None:
                product.category = self._attach_category(dto, category)
            else:
                product.category = None
            saved = self.products.save(product)
        self.logger.info("Product created", product_id=saved.id, title=saved.title)
        return self.mapper.to_dto(saved)

    def update_product(self, product_id: int, dto: Optional[ProductDTO]) -> ProductDTO:
        """Merge the non-null fields of ``dto`` into the stored product."""
        product = self.products.get(id=product_id)
        if product is None:
            self.logger.warning("Product update failed: not found", product_id=product_id)
            raise ProductNotFoundError(product_id)
        if product.deleted:
            self.logger.warning("Product update failed: deleted", product_id=product_id)
            raise ProductDeletedError(product_id)
        if dto is None:
            self.logger.error("Product update failed: empty payload", product_id=product_id)
            raise ProductUpdateFailedError(
                "Updating product failed! Please contact the system administrator."
            )

        changed = [field for field in WRITABLE_FIELDS if getattr(dto, field) is not None]
        for field in changed:
            setattr(product, field, getattr(dto, field))

        with transaction.atomic():
            if dto.category is not None:
                # Name-only lookup: a deleted category with this name is reused.
                category = self.categories.get_by_name(dto.category)
                product.category = self._attach_category(dto, category)
                changed.append("category")
            saved = self.products.save(product)
        self.logger.info("Product updated", product_id=product_id, fields=changed)
        return self.mapper.to_dto(saved)

    def delete_product(self, product_id: int) -> None:
        product = self.products.get(id=product_id)
        if product is None:
            self.logger.warning("Product delete failed: not found", product_id=product_id)
            raise ProductNotFoundError(product_id)
        if product.deleted:
            self.logger.error("Product is already deleted", product_id=product_id)
            raise ProductDeletedError(
                product_id, f"Product with id {product_id} is already deleted"
            )

        try:
            with transaction.atomic():
                product.mark_deleted()
                deleted = self.products.save(product)
                if not deleted.deleted:
                    self.logger.error(
                        "Product delete was not persisted", product_id=product_id
                    )
                    raise ProductUpdateFailedError(
                        "Deleting product failed! Please contact the system administrator."
                    )
        except IntegrityError as exc:
            self.logger.warning(
                "Product delete hit integrity conflict",
                product_id=product_id,
                error=str(exc),
            )
            raise ProductAlreadyExistsError(
                f"Product with id {product_id} already exists in deleted state",
                details={"id": str(product_id)},
            ) from exc
        self.logger.info("Product deleted", product_id=product_id)

    def _ensure_title_available(self, title: Optional[str]) -> None:
        if self.products.get_active_by_title(title) is not None:
            self.logger.error("Product title already in use", title=title)
            raise ProductAlreadyExistsError(
                f"Product with title '{title}' already exists.",
                details={"title": title},
            )

    def _attach_category(
        self, dto: ProductDTO, category: Optional[Category]
    ) -> Category:
        if category is not None:
            self.logger.info("Category found, attaching existing", category=dto.category)
            return category
        self.logger.info("Category not found, creating", category=dto.category)
        # New categories take the product's description.
        return self.categories.create(name=dto.category, description=dto.description)
