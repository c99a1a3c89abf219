from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

from .dtos import ProductDTO
from .models import Product

# Fields a caller may write; id and soft-delete state are store-owned.
WRITABLE_FIELDS = ("title", "description", "price", "image")


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        category = product.category
        return ProductDTO(
            id=product.id,
            title=product.title,
            description=product.description,
            price=product.price,
            image=product.image,
            deleted=product.deleted,
            deleted_on=product.deleted_on,
            category=category.name if category is not None else None,
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]

    @staticmethod
    def to_entity(dto: ProductDTO) -> Product:
        """Build an unsaved product from the DTO's non-null writable fields."""
        data: Dict[str, Any] = {
            field: getattr(dto, field)
            for field in WRITABLE_FIELDS
            if getattr(dto, field) is not None
        }
        return Product(**data)

    @staticmethod
    def from_data(data: Mapping[str, Any]) -> ProductDTO:
        """Build a DTO from validated request data; missing keys stay ``None``."""
        price = data.get("price")
        return ProductDTO(
            title=data.get("title"),
            description=data.get("description"),
            price=Decimal(str(price)) if price is not None else None,
            image=data.get("image"),
            category=data.get("category"),
        )
