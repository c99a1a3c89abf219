from __future__ import annotations

from .mappers import ProductMapper
from .repositories import CategoryRepository, ProductRepository
from .services import ProductService


def build_product_service() -> ProductService:
    return ProductService(
        products=ProductRepository(),
        categories=CategoryRepository(),
        mapper=ProductMapper,
    )
