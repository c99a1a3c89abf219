from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.catalog.dtos import ProductDTO
    from apps.catalog.models import Category, Product


class ProductRepositoryProtocol(Protocol):
    def list_by_deleted(self, deleted: bool) -> Iterable["Product"]:
        ...

    def get(self, **filters) -> Optional["Product"]:
        ...

    def get_active_by_title(self, title: str) -> Optional["Product"]:
        ...

    def save(self, product: "Product") -> "Product":
        ...


class CategoryRepositoryProtocol(Protocol):
    def get_active_by_name(self, name: str) -> Optional["Category"]:
        ...

    def get_by_name(self, name: str) -> Optional["Category"]:
        ...

    def create(self, **data) -> "Category":
        ...


class ProductMapperProtocol(Protocol):
    def to_dto(self, product: "Product") -> "ProductDTO":
        ...

    def many_to_dto(self, products: Iterable["Product"]) -> List["ProductDTO"]:
        ...

    def to_entity(self, dto: "ProductDTO") -> "Product":
        ...
